from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

# N'Djamena, West Africa Time.
APP_TIMEZONE = timezone(timedelta(hours=1), name="WAT")


def now_app_timezone() -> datetime:
    return datetime.now(APP_TIMEZONE)


def today_app_timezone() -> date:
    return now_app_timezone().date()


def as_app_timezone(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(APP_TIMEZONE)
