"""Cron-style trigger for recurring runs.

Only the subset of cron needed here is supported: five fields (minute, hour,
day of month, month, day of week), each either ``*`` or a single number.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from qa2table.utils.logging import get_logger

logger = get_logger(__name__)

FIELD_RANGES = (
    ("minute", 0, 59),
    ("hour", 0, 23),
    ("day", 1, 31),
    ("month", 1, 12),
    ("weekday", 0, 7),
)
MAX_SEARCH_DAYS = 366 * 8


def deploy_cron_expression(now: Optional[datetime] = None, daily: bool = False) -> str:
    """Cron expression firing two minutes after ``now``.

    By default the day and month are pinned as well (``"MM HH DD MM *"``);
    with ``daily`` they are left open so the run repeats every day at that
    time.

    Example:
        >>> deploy_cron_expression(datetime(2024, 3, 9, 14, 58))
        '00 15 09 03 *'
    """
    fire = (now or datetime.now()) + timedelta(minutes=2)
    if daily:
        return f"{fire.minute:02d} {fire.hour:02d} * * *"
    return f"{fire.minute:02d} {fire.hour:02d} {fire.day:02d} {fire.month:02d} *"


@dataclass(frozen=True)
class CronSchedule:
    """Parsed cron expression; ``None`` stands for ``*``."""

    minute: Optional[int] = None
    hour: Optional[int] = None
    day: Optional[int] = None
    month: Optional[int] = None
    weekday: Optional[int] = None

    @classmethod
    def parse(cls, expression: str) -> CronSchedule:
        """Parse a five-field cron expression.

        Raises:
            ValueError: If a field is malformed or out of range
        """
        parts = expression.split()
        if len(parts) != len(FIELD_RANGES):
            raise ValueError(
                f"Cron expression must have {len(FIELD_RANGES)} fields, got {len(parts)}: {expression!r}"
            )

        values = {}
        for part, (name, low, high) in zip(parts, FIELD_RANGES):
            if part == "*":
                values[name] = None
                continue
            try:
                value = int(part)
            except ValueError:
                raise ValueError(f"Unsupported cron {name} field: {part!r}") from None
            if not low <= value <= high:
                raise ValueError(f"Cron {name} {value} outside {low}-{high}")
            values[name] = value % 7 if name == "weekday" else value
        return cls(**values)

    def _matches_date(self, moment: datetime) -> bool:
        if self.month is not None and moment.month != self.month:
            return False
        day_ok = self.day is None or moment.day == self.day
        # cron numbers Sunday as 0, Python numbers Monday as 0
        weekday_ok = self.weekday is None or (moment.weekday() + 1) % 7 == self.weekday
        if self.day is not None and self.weekday is not None:
            return day_ok or weekday_ok
        return day_ok and weekday_ok

    def next_fire(self, after: datetime) -> datetime:
        """First matching minute strictly after ``after``.

        Raises:
            ValueError: If the expression never matches (e.g. 30 February)
        """
        start = after.replace(second=0, microsecond=0) + timedelta(minutes=1)
        hours = [self.hour] if self.hour is not None else range(24)
        minutes = [self.minute] if self.minute is not None else range(60)

        day_start = start.replace(hour=0, minute=0)
        for offset in range(MAX_SEARCH_DAYS):
            day = day_start + timedelta(days=offset)
            if not self._matches_date(day):
                continue
            for hour in hours:
                for minute in minutes:
                    candidate = day.replace(hour=hour, minute=minute)
                    if candidate >= start:
                        return candidate
        raise ValueError(f"Cron schedule {self} never fires")

    def __str__(self) -> str:
        fields = (self.minute, self.hour, self.day, self.month, self.weekday)
        return " ".join("*" if v is None else str(v) for v in fields)


def run_scheduled(
    job: Callable[[], object],
    schedule: CronSchedule,
    max_runs: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], datetime] = datetime.now,
) -> int:
    """Invoke ``job`` at every fire time of ``schedule``.

    A job that raises is logged and the schedule continues.

    Args:
        job: Callable run at each fire time
        schedule: When to run
        max_runs: Stop after this many runs (forever when None)
        sleep: Sleep function, in seconds
        clock: Current local time

    Returns:
        Number of runs performed
    """
    runs = 0
    last_fire: Optional[datetime] = None

    while max_runs is None or runs < max_runs:
        now = clock()
        after = now if last_fire is None else max(now, last_fire)
        fire = schedule.next_fire(after)
        delay = max(0.0, (fire - now).total_seconds())
        logger.info(f"Next run at {fire:%Y-%m-%d %H:%M} (in {delay:.0f}s)")
        sleep(delay)

        try:
            job()
        except Exception as e:
            logger.exception(f"Scheduled run failed: {e}")
        runs += 1
        last_fire = fire

    return runs
