# jobtech_search/utils.py
from datetime import datetime, timezone
from typing import Any, Optional


def safe_str(x: Any) -> str:
    return x.strip() if isinstance(x, str) else ""


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def parse_datetime(x: Any) -> Optional[datetime]:
    """
    Lenient ISO-8601 parse for upstream date fields.
    Returns None for missing or unparseable values; naive values are taken as UTC.
    """
    s = safe_str(x)
    if not s:
        return None
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_published_after(value: datetime) -> str:
    """Format like the upstream docs example: 2025-01-01T00:00:00Z"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def error_message_for_status(status: int, job_id: str = "") -> str:
    if status == 400:
        return "Bad Request: Something is wrong with the query parameters"
    if status == 404:
        if job_id:
            return f"Missing Ad: The requested ad with ID {job_id} is not available"
        return "Resource not found"
    if status == 429:
        return "Rate limit exceeded: You have sent too many requests in a given amount of time"
    if status == 500:
        return "Internal Server Error: Server-side issue"
    return f"HTTP Error: {status}"
