"""날짜 표시 유틸리티 — 응답용 날짜 문자열 변환.

Date display utility. Converts stored UTC timestamps into the
"YYYY-MM-DD HH:MM:SS" strings returned by the API, rendered in the
configured DISPLAY_TIMEZONE.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from app.config import settings

DISPLAY_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def format_display(value: datetime | None) -> str:
    """UTC 일시를 표시 시간대 문자열로 변환합니다.

    Render a timestamp in the display timezone. Naive values are treated as
    UTC (SQLite drops tzinfo); a missing value renders as "now".
    """
    display_tz: ZoneInfo = ZoneInfo(settings.DISPLAY_TIMEZONE)
    if value is None:
        return datetime.now(display_tz).strftime(DISPLAY_FORMAT)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(display_tz).strftime(DISPLAY_FORMAT)
