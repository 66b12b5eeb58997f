"""
Events ERP - Requisition numbering

Números de requisição são sorteados (não sequenciais) e únicos em todo o
sistema. A unicidade é garantida pela constraint UNIQUE da tabela; o insert
roda dentro de um SAVEPOINT e um novo número é sorteado em caso de conflito.
"""
import logging
import secrets

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from events_erp.core.config import settings
from events_erp.models import Requisition

logger = logging.getLogger(__name__)


class RequisitionNumberExhausted(RuntimeError):
    """Nenhum número livre encontrado dentro do limite de tentativas"""


def draw_requisition_number() -> int:
    """Sorteia um número de 6 dígitos dentro da faixa configurada"""
    low = settings.REQUISITION_NUMBER_MIN
    high = settings.REQUISITION_NUMBER_MAX
    return low + secrets.randbelow(high - low + 1)


async def number_in_use(db: AsyncSession, number: int) -> bool:
    result = await db.execute(
        select(Requisition.id).where(Requisition.number == number)
    )
    return result.first() is not None


async def create_numbered_requisition(db: AsyncSession, event_id: str) -> Requisition:
    """Cria uma requisição com número aleatório único"""
    attempts = settings.REQUISITION_NUMBER_MAX_ATTEMPTS

    for attempt in range(1, attempts + 1):
        number = draw_requisition_number()

        if await number_in_use(db, number):
            logger.warning(f"Número de requisição {number} já existe (tentativa {attempt}/{attempts})")
            continue

        requisition = Requisition(number=number, event_id=event_id)
        try:
            async with db.begin_nested():
                db.add(requisition)
        except IntegrityError:
            # Outro request gravou o mesmo número entre a checagem e o insert
            logger.warning(f"Conflito ao gravar requisição {number} (tentativa {attempt}/{attempts})")
            continue

        return requisition

    raise RequisitionNumberExhausted(
        f"Could not allocate a unique requisition number after {attempts} attempts"
    )
