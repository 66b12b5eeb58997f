from .finance import (
    EventSummary,
    summarize_event,
    total_spent,
    total_income,
    requisition_total,
    line_total
)
from .requisition_numbers import (
    create_numbered_requisition,
    draw_requisition_number,
    RequisitionNumberExhausted
)

__all__ = [
    "EventSummary",
    "summarize_event",
    "total_spent",
    "total_income",
    "requisition_total",
    "line_total",
    "create_numbered_requisition",
    "draw_requisition_number",
    "RequisitionNumberExhausted"
]
