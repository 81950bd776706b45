from __future__ import annotations

import hashlib
import html
import re
from datetime import datetime, timezone

from dateutil import parser as date_parser


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def normalize_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value or "").strip()


def strip_html(value: str) -> str:
    text = re.sub(r"<[^>]+>", " ", value or "")
    text = html.unescape(text)
    return normalize_whitespace(text)


def stable_id(*parts: str) -> str:
    payload = "|".join(part for part in parts if part)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]


def normalize_tags(raw) -> tuple[str, ...]:
    """Coerce a comma-joined string or a list of tags into one ordered tuple.

    Segments are stripped and empty ones dropped, so ``"a,b,,c"`` and
    ``["a", "b", "c"]`` produce the same result. Any other shape yields no tags.
    """
    if isinstance(raw, str):
        segments = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        segments = [item for item in raw if item is not None]
    else:
        return ()
    return tuple(tag for tag in (str(segment).strip() for segment in segments) if tag)


def parse_timestamp(value) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = date_parser.parse(value)
        except (ValueError, TypeError, OverflowError):
            return None
    else:
        return None
    try:
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def format_date(value: datetime | None, long: bool = False) -> str:
    if value is None:
        return ""
    month = value.strftime("%B") if long else value.strftime("%b")
    return f"{month} {value.day}, {value.year}"


def word_count(value: str) -> int:
    return len(strip_html(value).split())
