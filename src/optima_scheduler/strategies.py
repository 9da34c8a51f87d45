"""
Slot allocation strategies.

Every strategy maps a snapshot of pending work items onto at most CAPACITY
daily slots. FCFS, EDF and Priority share a sequential day-pointer walk and
differ only in how the input is ordered. Greedy orders by revenue and places
each item in the latest free slot that still meets its deadline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from decimal import MAX_PREC, Decimal, localcontext

from pydantic import ValidationError

from .errors import InvalidInputError
from .models import CAPACITY, SchedulableItem, ScheduleResult, StrategyInfo, WorkItem

FIELD_RULES = {
    "deadline": "deadline must be a positive integer",
    "revenue": "revenue must be a non-negative exact decimal",
    "status": "only pending items can be scheduled",
}


def validate_items(items: Sequence[WorkItem]) -> None:
    """Reject the whole batch if any item breaks the engine preconditions."""
    for item in items:
        fields = {"deadline": item.deadline, "revenue": item.revenue, "status": item.status}
        try:
            SchedulableItem.model_validate(fields)
        except ValidationError as e:
            field = str(e.errors()[0]["loc"][0])
            value = getattr(fields[field], "value", fields[field])
            raise InvalidInputError(f"{FIELD_RULES[field]}, got {value!r}", item.id) from None


def exact_sum(amounts: Iterable[Decimal]) -> Decimal:
    """Sum Decimals without rounding to the default 28-digit context."""
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        return sum(amounts, Decimal("0"))


def build_result(
    strategy_key: str, items: Sequence[WorkItem], assignment: dict[int, WorkItem]
) -> ScheduleResult:
    """Assemble a ScheduleResult with slots ascending and totals derived."""
    ordered = dict(sorted(assignment.items()))
    assigned_ids = {item.id for item in ordered.values()}
    return ScheduleResult(
        assignment=ordered,
        total_value=exact_sum(item.revenue for item in ordered.values()),
        strategy=strategy_key,
        unscheduled_ids=[item.id for item in items if item.id not in assigned_ids],
    )


class SchedulingStrategy(ABC):
    """A named, pure slot-assignment function."""

    key: str
    name: str

    @property
    def info(self) -> StrategyInfo:
        return StrategyInfo(key=self.key, name=self.name)

    def schedule(self, items: Sequence[WorkItem]) -> ScheduleResult:
        """Assign ``items`` to slots 1..CAPACITY."""
        items = list(items)
        validate_items(items)
        if not items:
            return build_result(self.key, items, {})
        assignment = self._assign(self.order(items))
        return build_result(self.key, items, assignment)

    @abstractmethod
    def order(self, items: list[WorkItem]) -> list[WorkItem]:
        """Return the items in the order the strategy considers them."""

    @abstractmethod
    def _assign(self, ordered: list[WorkItem]) -> dict[int, WorkItem]:
        pass


class SequentialStrategy(SchedulingStrategy):
    """Walk a day pointer that only moves forward.

    An item is placed on the current day when its deadline allows it, and the
    pointer advances. Otherwise the item is skipped and the pointer stays put,
    so items behind an earlier placement can be stranded.
    """

    def _assign(self, ordered: list[WorkItem]) -> dict[int, WorkItem]:
        assignment: dict[int, WorkItem] = {}
        day = 1
        for item in ordered:
            if len(assignment) >= CAPACITY:
                break
            if item.deadline >= day:
                assignment[day] = item
                day += 1
        return assignment


class FcfsStrategy(SequentialStrategy):
    key = "fcfs"
    name = "FCFS (First Come First Served)"

    def order(self, items: list[WorkItem]) -> list[WorkItem]:
        return sorted(items, key=lambda item: item.id)


class EdfStrategy(SequentialStrategy):
    key = "edf"
    name = "EDF (Earliest Deadline First)"

    def order(self, items: list[WorkItem]) -> list[WorkItem]:
        return sorted(items, key=lambda item: item.deadline)


class PriorityStrategy(SequentialStrategy):
    key = "priority"
    name = "Priority (Highest Revenue)"

    def order(self, items: list[WorkItem]) -> list[WorkItem]:
        # reverse=True keeps equal revenues in input order
        return sorted(items, key=lambda item: item.revenue, reverse=True)


class GreedyStrategy(SchedulingStrategy):
    """Job sequencing with deadlines, bounded to CAPACITY slots.

    Items are taken in descending revenue order and each claims the latest
    free slot no later than its deadline. For unit-length jobs the resulting
    total revenue is the maximum over all feasible assignments.
    """

    key = "greedy"
    name = "Greedy (Revenue-Deadline)"

    def order(self, items: list[WorkItem]) -> list[WorkItem]:
        return sorted(items, key=lambda item: item.revenue, reverse=True)

    def _assign(self, ordered: list[WorkItem]) -> dict[int, WorkItem]:
        assignment: dict[int, WorkItem] = {}
        for item in ordered:
            if len(assignment) >= CAPACITY:
                break
            for slot in range(min(item.deadline, CAPACITY), 0, -1):
                if slot not in assignment:
                    assignment[slot] = item
                    break
        return assignment


def default_strategies() -> list[SchedulingStrategy]:
    """The four built-in strategies in registration order."""
    return [FcfsStrategy(), EdfStrategy(), PriorityStrategy(), GreedyStrategy()]
