"""
Time semantics utilities for quote freshness and report scheduling.

Quote timestamps come from the exchange and are authoritative for freshness
checks. Wall-clock time is used for staleness comparisons and for deciding
when the daily water-mark summary is due.
"""

from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Optional


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(ts: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to be UTC already."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def calculate_latency(market_ts: datetime, wall_clock_ts: Optional[datetime] = None) -> float:
    """
    Calculate latency between market timestamp and wall-clock receive time.

    Args:
        market_ts: Market timestamp from data feed
        wall_clock_ts: Wall-clock receive time, defaults to now

    Returns:
        Latency in seconds (positive means market time is older)
    """
    if wall_clock_ts is None:
        wall_clock_ts = utc_now()

    return (wall_clock_ts - market_ts).total_seconds()


def is_fresh(
    market_ts: datetime,
    max_age_seconds: float,
    max_future_skew_seconds: float = 30,
    now: Optional[datetime] = None,
) -> bool:
    """
    Check that a market timestamp is neither too old nor too far in the future.

    Args:
        market_ts: Market timestamp to validate, naive values are read as UTC
        max_age_seconds: Maximum accepted age
        max_future_skew_seconds: Allowed clock skew for timestamps ahead of now
        now: Reference time, defaults to the current wall-clock time

    Returns:
        True if timestamp is usable, False otherwise
    """
    age_seconds = calculate_latency(as_utc(market_ts), as_utc(now) if now else None)

    if age_seconds > max_age_seconds:
        return False

    if age_seconds < -max_future_skew_seconds:
        return False

    return True


def parse_report_time(value: str) -> time:
    """Parse an 'HH:MM' wall-clock time."""
    hours, _, minutes = value.partition(":")
    if not hours.isdigit() or not minutes.isdigit():
        raise ValueError(f"Report time must be HH:MM, got {value!r}")
    return time(hour=int(hours), minute=int(minutes))


def next_report_time(report_time: time, tz: tzinfo = timezone.utc,
                     now: Optional[datetime] = None) -> datetime:
    """
    Next occurrence of a daily wall-clock time, strictly after now.

    Args:
        report_time: Time of day the report is due
        tz: Time zone the report time is expressed in
        now: Reference time, defaults to the current wall-clock time

    Returns:
        Aware datetime of the next report
    """
    now = (now or utc_now()).astimezone(tz)
    candidate = now.replace(
        hour=report_time.hour, minute=report_time.minute, second=0, microsecond=0
    )
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def seconds_until_next_report(report_time: time, tz: tzinfo = timezone.utc,
                              now: Optional[datetime] = None) -> float:
    """Seconds to wait before the next daily report."""
    now = now or utc_now()
    return (next_report_time(report_time, tz, now) - now).total_seconds()
