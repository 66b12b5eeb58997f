"""
Events ERP - Schema helpers
"""
from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel


def to_naive_utc(value: datetime) -> datetime:
    """Datas com timezone são convertidas para UTC e gravadas sem tzinfo"""
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UTCDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


class RequestSchema(BaseModel):
    """Payloads de entrada aceitam snake_case e camelCase (eventId, startDate...)"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


def normalize_email(value: str) -> str:
    """Emails são únicos sem distinção de maiúsculas: gravados e buscados em minúsculas"""
    return value.strip().lower()


NormalizedEmail = Annotated[EmailStr, AfterValidator(normalize_email)]
