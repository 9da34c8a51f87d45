"""
Weekly Scheduler Package

Assigns pending projects to the five working-day slots of a week using one of
four interchangeable strategies.
"""

from .api import (
    create_work_item_from_dict,
    current_strategy,
    default_registry,
    format_schedule_result,
    list_strategies,
    run_schedule,
    select_strategy,
)
from .errors import InvalidInputError, SchedulingError, UnknownStrategyError
from .models import (
    CAPACITY,
    SchedulableItem,
    ScheduleResult,
    StrategyInfo,
    WorkItem,
    WorkItemStatus,
)
from .registry import DEFAULT_STRATEGY, StrategyRegistry
from .strategies import (
    EdfStrategy,
    FcfsStrategy,
    GreedyStrategy,
    PriorityStrategy,
    SchedulingStrategy,
    default_strategies,
    exact_sum,
)

__version__ = "0.1.0"
__all__ = [
    "CAPACITY",
    "DEFAULT_STRATEGY",
    "EdfStrategy",
    "FcfsStrategy",
    "GreedyStrategy",
    "InvalidInputError",
    "PriorityStrategy",
    "SchedulableItem",
    "ScheduleResult",
    "SchedulingError",
    "SchedulingStrategy",
    "StrategyInfo",
    "StrategyRegistry",
    "UnknownStrategyError",
    "WorkItem",
    "WorkItemStatus",
    "create_work_item_from_dict",
    "current_strategy",
    "default_registry",
    "default_strategies",
    "exact_sum",
    "format_schedule_result",
    "list_strategies",
    "run_schedule",
    "select_strategy",
]
