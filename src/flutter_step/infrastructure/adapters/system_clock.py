"""SystemClock — wall-clock ClockPort implementation."""

from __future__ import annotations

import time
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flutter_step.domain.ports import ClockPort


class SystemClock:
    """Local-time aware ``now`` and blocking ``sleep``."""

    if TYPE_CHECKING:
        _protocol_check: ClockPort

    def now(self) -> datetime:
        return datetime.now().astimezone()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)
