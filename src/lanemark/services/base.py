"""BaseService — abstract foundation for all lanemark services.

Every service receives the frozen :class:`LanemarkSettings` and a clock at
construction time. Services hold no other state; each call works on the
title it is given and returns a :class:`ServiceResult`.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lanemark.config.settings import LanemarkSettings
    from lanemark.domain.lanes import Lane

Clock = Callable[[], datetime]


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class MarkerService(BaseService):
            def move(self, title: str, ...) -> ServiceResult:
                now = self._now()
                ...
    """

    def __init__(self, settings: LanemarkSettings, clock: Clock | None = None) -> None:
        self._settings = settings
        self._clock: Clock = clock or datetime.now

    def _now(self) -> datetime:
        return self._clock()

    @property
    def lanes(self) -> list[Lane]:
        """Board lanes built from the ``[board]`` config section."""
        return self._settings.board.build_lanes()
