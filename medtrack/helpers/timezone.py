from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import Query

from medtrack.core.config import settings
from medtrack.helpers.exception_handler import CustomException


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    name = name or settings.DEFAULT_TIMEZONE
    if name.upper() == 'UTC':
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise CustomException(http_code=400, code='400', message=f"Unknown timezone: {name}")


def request_timezone(tz: Optional[str] = Query(None, description="IANA timezone of the caller, e.g. Asia/Ho_Chi_Minh")) -> tzinfo:
    return resolve_timezone(tz)


def local_today(tz: tzinfo) -> date:
    return datetime.now(tz).date()
