# canteen/utils/clock.py
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from canteen.core.config import settings

LOCAL = ZoneInfo(settings.timezone)


def now() -> datetime:
    return datetime.now(LOCAL)


def to_local(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken as canteen-local wall time."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=LOCAL)
    return value.astimezone(LOCAL)
