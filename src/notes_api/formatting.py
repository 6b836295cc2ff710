"""Presentation and key-derivation helpers shared by both editor backends."""
import base64
import uuid
from datetime import datetime, tzinfo
from typing import Optional, Tuple, Union

KB = 1024
MB = 1024 * 1024

_EN_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _parse_timestamp(timestamp: Union[str, datetime]) -> datetime:
    if isinstance(timestamp, datetime):
        return timestamp
    # fromisoformat only accepts a trailing "Z" from 3.11 on
    if timestamp.endswith("Z"):
        timestamp = timestamp[:-1] + "+00:00"
    return datetime.fromisoformat(timestamp)


def _korean_time(moment: datetime) -> str:
    period = "오전" if moment.hour < 12 else "오후"
    hour = moment.hour % 12 or 12
    return f"{period} {hour:02d}:{moment:%M}"


def format_date(timestamp: Union[str, datetime], locale: str = "en-US", tz: Optional[tzinfo] = None) -> str:
    """
    Render a timestamp as short month/day plus two-digit time.

    English uses a 24-hour clock; Korean uses 오전/오후 with a 12-hour clock.

    :param timestamp: A datetime or an ISO 8601 string.
    :param locale: BCP 47 tag; ``ko`` and ``en`` families are supported, anything else renders as ``en``.
    :param tz: Optional zone to convert aware timestamps into before rendering.
    """
    moment = _parse_timestamp(timestamp)
    if tz is not None and moment.tzinfo is not None:
        moment = moment.astimezone(tz)

    language = locale.split("-")[0].lower()
    if language == "ko":
        return f"{moment.month}월 {moment.day}일 {_korean_time(moment)}"
    return f"{_EN_MONTHS[moment.month - 1]} {moment.day}, {moment:%H:%M}"


def _one_decimal(size: int, unit: int) -> str:
    # Halves round up, so 1280 B is 1.3 KB
    tenths = (size * 20 + unit) // (unit * 2)
    return f"{tenths // 10}.{tenths % 10}"


def format_file_size(size: int) -> str:
    """Render a byte count as B, KB or MB."""
    if size < KB:
        return f"{size} B"
    if size < MB:
        return f"{_one_decimal(size, KB)} KB"
    return f"{_one_decimal(size, MB)} MB"


def storage_key_for(file_name: str) -> str:
    """Randomized blob key that keeps the text after the last dot of ``file_name``."""
    extension = file_name.rsplit(".", 1)[-1]
    return f"{uuid.uuid4()}.{extension}"


def storage_key_from_url(url: str) -> Optional[str]:
    """The blob key is the last path segment of its public URL."""
    key = url.split("/")[-1]
    return key or None


def to_data_url(data: bytes, content_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type or 'application/octet-stream'};base64,{encoded}"


def from_data_url(url: str) -> Tuple[str, bytes]:
    """Split a base64 ``data:`` URL into its media type and decoded bytes."""
    if not url.startswith("data:") or ";base64," not in url:
        raise ValueError("Not a base64 data URL")
    header, encoded = url[len("data:"):].split(";base64,", 1)
    return header or "application/octet-stream", base64.b64decode(encoded)
