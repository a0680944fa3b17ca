"""
Schedule reporting utilities for MuseumNight.

This module turns the estimated length of a tour into a clock time
summary. Tours start at a fixed time in the evening and must finish
inside the night's operating window (19:00 to 02:00 by default); a
tour that would still be running after the window closes is reported
as infeasible instead of receiving a time range.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

WINDOW_START = time(19, 0)
WINDOW_END = time(2, 0)


@dataclass(frozen=True)
class ScheduleSummary:
    feasible: bool
    total_minutes: int
    start: str
    end: str
    duration: str
    message: str = ""

    @property
    def text(self) -> str:
        if not self.feasible:
            return self.message
        return f"Estimated tour time: {self.duration}\nStart: {self.start}\nEnd: {self.end}"


def parse_time_string(t: str) -> time:
    """Parse a HH:MM formatted time string into a datetime.time object."""
    h, m = map(int, t.strip().split(":"))
    return time(hour=h, minute=m)


def format_duration(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"


def _next_occurrence(after: datetime, clock: time) -> datetime:
    candidate = datetime.combine(after.date(), clock)
    if candidate <= after:
        candidate += timedelta(days=1)
    return candidate


def is_outside_window(
    start_dt: datetime,
    end_dt: datetime,
    window_start: time = WINDOW_START,
    window_end: time = WINDOW_END,
) -> bool:
    """Return True if a tour running from ``start_dt`` to ``end_dt`` overruns the window.

    The window is closed from ``window_end`` (inclusive) until
    ``window_start`` (exclusive). A tour also overruns when it lasts
    past the first closing time after it started, which catches tours
    long enough to wrap into the next evening.
    """
    end_clock = end_dt.time()
    if window_end <= window_start:
        closed = window_end <= end_clock < window_start
    else:
        closed = end_clock >= window_end or end_clock < window_start
    return closed or end_dt >= _next_occurrence(start_dt, window_end)


def report(
    total_minutes: int,
    tour_start: time,
    window_start: time = WINDOW_START,
    window_end: time = WINDOW_END,
    tour_date: Optional[date] = None,
) -> ScheduleSummary:
    """Build the schedule summary for a tour.

    Args:
        total_minutes: Estimated elapsed time of the tour.
        tour_start: Clock time the tour leaves the start.
        window_start: Opening of the night's operating window.
        window_end: Closing of the operating window, usually after
            midnight.
        tour_date: Date of the tour. Defaults to today; only the clock
            times end up in the summary.

    Returns:
        A ``ScheduleSummary``. When the tour overruns the window the
        summary is flagged infeasible and carries a notice asking to
        visit fewer museums.
    """
    day = tour_date or datetime.now().date()
    start_dt = datetime.combine(day, tour_start)
    end_dt = start_dt + timedelta(minutes=total_minutes)
    start_str = start_dt.strftime("%H:%M")
    end_str = end_dt.strftime("%H:%M")
    duration = format_duration(total_minutes)
    if is_outside_window(start_dt, end_dt, window_start, window_end):
        message = (
            f"Your tour will extend past {window_end.strftime('%H:%M')}. "
            "Consider reducing the number of museums."
        )
        return ScheduleSummary(
            feasible=False,
            total_minutes=total_minutes,
            start=start_str,
            end=end_str,
            duration=duration,
            message=message,
        )
    return ScheduleSummary(
        feasible=True,
        total_minutes=total_minutes,
        start=start_str,
        end=end_str,
        duration=duration,
    )
