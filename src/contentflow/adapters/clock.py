from datetime import UTC, datetime


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Clock pinned to one instant, for deterministic runs."""

    def __init__(self, fixed: datetime) -> None:
        self._time = fixed

    def now(self) -> datetime:
        return self._time
