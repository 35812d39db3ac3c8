"""Detect validity-interval transitions of the conditions source."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from betafunc_vertex.conditions.records import ValidityInterval

LOGGER = logging.getLogger(__name__)


class ParameterWatcher:
    """Remember the last seen validity interval and report when it changes."""

    def __init__(self) -> None:
        self._current: ValidityInterval | None = None

    @property
    def current(self) -> ValidityInterval | None:
        return self._current

    def check(self, interval: ValidityInterval) -> bool:
        """
        Compare ``interval`` to the cached one and cache it.

        Returns:
            True on the first call and whenever the interval differs from the
            previous call, False otherwise.
        """
        if interval == self._current:
            return False
        LOGGER.debug(f"Validity interval changed from {self._current} to {interval}")
        self._current = interval
        return True

    def reset(self) -> None:
        self._current = None
