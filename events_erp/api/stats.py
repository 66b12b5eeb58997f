"""
Events ERP - Statistics API
Agregados para o dashboard, respeitando o escopo do usuário
"""
from collections import Counter, defaultdict
from decimal import Decimal
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, extract
from sqlalchemy.orm import selectinload

from events_erp.database import get_db
from events_erp.models import Event, EventStatus, User
from events_erp.api.auth import get_current_user
from events_erp.core.permissions import event_scope_filter
from events_erp.services import summarize_event

router = APIRouter(prefix="/stats", tags=["Statistics"])

NO_UNIT_LABEL = "Sem Unidade"


@router.get("/dashboard")
async def get_dashboard_stats(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Estatísticas para o dashboard (filtro opcional por ano/mês de início)"""
    query = (
        select(Event)
        .options(selectinload(Event.transactions), selectinload(Event.unit))
        .where(event_scope_filter(user))
    )
    if year:
        query = query.where(extract("year", Event.start_date) == year)
    if month:
        query = query.where(extract("month", Event.start_date) == month)

    result = await db.execute(query)
    events = result.scalars().all()

    by_status = Counter({s.value: 0 for s in EventStatus})
    by_unit = Counter()
    expenses_by_unit = defaultdict(Decimal)
    budget_total = Decimal("0")
    spent_total = Decimal("0")

    for event in events:
        unit_name = event.unit.name if event.unit else NO_UNIT_LABEL
        summary = summarize_event(event)

        by_status[event.status] += 1
        by_unit[unit_name] += 1
        expenses_by_unit[unit_name] += summary.spent
        budget_total += summary.budget
        spent_total += summary.spent

    return {
        "events_total": len(events),
        "events_by_status": dict(by_status),
        "events_by_unit": dict(by_unit),
        "expenses_by_unit": {name: float(value) for name, value in expenses_by_unit.items()},
        "budget_total": float(budget_total),
        "spent_total": float(spent_total),
        "balance_total": float(budget_total - spent_total),
    }
