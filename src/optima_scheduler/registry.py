"""
Registry of scheduling strategies with a process-wide current selection.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence

from .errors import UnknownStrategyError
from .models import ScheduleResult, StrategyInfo, WorkItem
from .strategies import SchedulingStrategy, default_strategies

logger = logging.getLogger(__name__)

DEFAULT_STRATEGY = "greedy"


class StrategyRegistry:
    """Strategies keyed by name plus the currently selected one.

    The current selection is stored as a single immutable StrategyInfo and
    swapped under a lock, so readers always see a matching key and name.
    """

    def __init__(
        self,
        strategies: Iterable[SchedulingStrategy] | None = None,
        default: str = DEFAULT_STRATEGY,
    ):
        if strategies is None:
            strategies = default_strategies()
        self._strategies: dict[str, SchedulingStrategy] = {
            strategy.key: strategy for strategy in strategies
        }
        self._lock = threading.Lock()
        self._current: StrategyInfo = self.get(default).info

    def keys(self) -> list[str]:
        return list(self._strategies)

    def list(self) -> list[StrategyInfo]:
        return [strategy.info for strategy in self._strategies.values()]

    def get(self, key: str) -> SchedulingStrategy:
        try:
            return self._strategies[key]
        except KeyError:
            raise UnknownStrategyError(key, self._strategies) from None

    def __contains__(self, key: object) -> bool:
        return key in self._strategies

    def current(self) -> StrategyInfo:
        with self._lock:
            return self._current

    def select(self, key: str) -> StrategyInfo:
        """Make ``key`` the current strategy.

        Raises:
            UnknownStrategyError: if ``key`` is not registered. The previous
                selection is left in place.
        """
        info = self.get(key).info
        with self._lock:
            previous = self._current
            self._current = info
        if previous.key != info.key:
            logger.info(f"🔀 Scheduling strategy switched: {previous.key} -> {info.key}")
        return info

    def run(self, items: Sequence[WorkItem], key: str | None = None) -> ScheduleResult:
        """Schedule ``items`` with ``key``, or with the current strategy."""
        if key is None:
            key = self.current().key
        return self.get(key).schedule(items)
