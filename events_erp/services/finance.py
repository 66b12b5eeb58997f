"""
Events ERP - Financial aggregation

Fórmula única usada em todas as visões:
- gasto   = soma(valor x quantidade) das despesas não reprovadas
- receita = soma(valor x quantidade) das receitas não reprovadas
- saldo   = orçamento - gasto
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from events_erp.models.transaction import TransactionType, TransactionStatus


def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def line_total(transaction) -> Decimal:
    return _to_decimal(transaction.amount) * (transaction.quantity or 1)


def _counts(transaction) -> bool:
    return transaction.status != TransactionStatus.REJECTED.value


def total_spent(transactions: Iterable) -> Decimal:
    return sum(
        (line_total(t) for t in transactions
         if _counts(t) and t.type == TransactionType.EXPENSE.value),
        Decimal("0"),
    )


def total_income(transactions: Iterable) -> Decimal:
    return sum(
        (line_total(t) for t in transactions
         if _counts(t) and t.type == TransactionType.INCOME.value),
        Decimal("0"),
    )


def requisition_total(transactions: Iterable) -> Decimal:
    """Total de uma requisição: todos os lançamentos, ponderados pela quantidade"""
    return sum((line_total(t) for t in transactions), Decimal("0"))


@dataclass
class EventSummary:
    budget: Decimal
    spent: Decimal
    income: Decimal

    @property
    def balance(self) -> Decimal:
        return self.budget - self.spent

    def to_dict(self):
        return {
            "budget": float(self.budget),
            "spent": float(self.spent),
            "income": float(self.income),
            "balance": float(self.balance),
        }


def summarize_event(event) -> EventSummary:
    transactions = list(event.transactions or [])
    return EventSummary(
        budget=_to_decimal(event.budget),
        spent=total_spent(transactions),
        income=total_income(transactions),
    )
