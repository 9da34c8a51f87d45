"""
Library entry points backed by a module-level default registry.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import InvalidInputError
from .models import ScheduleResult, StrategyInfo, WorkItem, WorkItemStatus
from .registry import StrategyRegistry

default_registry = StrategyRegistry()


def list_strategies() -> list[StrategyInfo]:
    return default_registry.list()


def select_strategy(key: str) -> StrategyInfo:
    return default_registry.select(key)


def current_strategy() -> StrategyInfo:
    return default_registry.current()


def run_schedule(
    items: Sequence[WorkItem], strategy: str | None = None
) -> ScheduleResult:
    """
    Run one scheduling pass.

    Args:
        items: Pending work items, in arrival order
        strategy: Strategy key; the current selection is used when omitted

    Returns:
        ScheduleResult for the chosen strategy

    Raises:
        InvalidInputError: If any item breaks the engine preconditions
        UnknownStrategyError: If ``strategy`` is not registered
    """
    return default_registry.run(items, strategy)


def create_work_item_from_dict(item_data: dict[str, Any]) -> WorkItem:
    """
    Create WorkItem instance from dictionary data.

    ``revenue`` may be given as a string, int or Decimal. Floats are accepted
    through their string form so ``10.1`` becomes ``Decimal("10.1")``.
    ``id`` and ``deadline`` must be whole numbers, as ints or numeric strings.

    Raises:
        InvalidInputError: If a required field is missing or malformed
    """
    item_id = item_data.get("id")
    for field in ("id", "deadline", "revenue"):
        if field not in item_data:
            raise InvalidInputError(f"missing required field: {field}", item_id)

    integers = {}
    for field in ("id", "deadline"):
        try:
            integers[field] = int(str(item_data[field]).strip())
        except ValueError:
            raise InvalidInputError(
                f"{field} is not a whole number: {item_data[field]!r}", item_id
            ) from None

    try:
        revenue = Decimal(str(item_data["revenue"]))
    except InvalidOperation:
        raise InvalidInputError(
            f"revenue is not a number: {item_data['revenue']!r}", item_id
        ) from None

    try:
        status = WorkItemStatus(str(item_data.get("status", "pending")).lower())
    except ValueError:
        raise InvalidInputError(f"unknown status: {item_data['status']!r}", item_id) from None

    return WorkItem(
        id=integers["id"],
        deadline=integers["deadline"],
        revenue=revenue,
        status=status,
        title=str(item_data.get("title") or ""),
    )


def format_schedule_result(result: ScheduleResult) -> dict[str, Any]:
    """
    Format ScheduleResult as a JSON-friendly dictionary.

    Slot keys stay integers; Decimal amounts become strings.
    """
    return {
        "strategy": result.strategy,
        "assignment": {
            slot: {
                "id": item.id,
                "title": item.title,
                "deadline": item.deadline,
                "revenue": str(item.revenue),
            }
            for slot, item in result.assignment.items()
        },
        "total_value": str(result.total_value),
        "assigned_count": result.assigned_count,
        "unscheduled_ids": list(result.unscheduled_ids),
    }
