"""
CLI Output Formatters

Tables and human-readable durations for the resurfacer CLI.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from tabulate import tabulate

from resurfacer.core.review import SavedItem


class Colors:
    """ANSI color codes for terminal output."""
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    ENDC = "\033[0m"

    @staticmethod
    def green(text: str) -> str:
        return f"{Colors.OKGREEN}{text}{Colors.ENDC}"

    @staticmethod
    def yellow(text: str) -> str:
        return f"{Colors.WARNING}{text}{Colors.ENDC}"


def truncate(text: str, max_length: int = 60, suffix: str = "...") -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def format_timestamp(ms: Optional[int], format: str = "%Y-%m-%d %H:%M:%S") -> str:
    """Format a millisecond epoch timestamp (UTC) for display."""
    if ms is None:
        return "never"
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime(format)


def format_duration(ms: int) -> str:
    """
    Compact duration such as '3d 4h' or '12m'.

    Negative durations are rendered as overdue.
    """
    if ms <= 0:
        return "due now" if ms == 0 else f"overdue {format_duration(-ms)}"

    seconds = ms // 1000
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes and not days:
        parts.append(f"{minutes}m")
    if not parts:
        parts.append(f"{seconds}s")
    return " ".join(parts)


def item_summary(item: SavedItem) -> str:
    payload = item.payload
    author = payload.get("author") or payload.get("handle") or ""
    text = payload.get("text") or payload.get("url") or ""
    summary = f"{author}: {text}" if author else text
    return truncate(str(summary).replace("\n", " "))


def item_to_json(item: SavedItem, now: int) -> Dict[str, Any]:
    data = item.to_dict()
    data["due"] = item.next_review <= now
    data["msUntilDue"] = item.next_review - now
    return data


def format_item_table(items: List[SavedItem], now: int, show_headers: bool = True) -> str:
    if not items:
        return "No saved items."

    headers = ["ID", "Summary", "Next Review", "In", "Interval", "Reviews"]
    rows = []
    for item in items:
        until = format_duration(item.next_review - now)
        if item.next_review <= now:
            until = Colors.yellow(until)
        rows.append([
            item.id,
            item_summary(item),
            format_timestamp(item.next_review),
            until,
            format_duration(item.interval),
            item.review_count,
        ])

    return tabulate(rows, headers=headers if show_headers else [], tablefmt="grid")


def format_item_detail(item: SavedItem, now: int) -> str:
    lines = [
        f"ID:            {item.id}",
        f"Next review:   {format_timestamp(item.next_review)} ({format_duration(item.next_review - now)})",
        f"Interval:      {format_duration(item.interval)}",
        f"Last reviewed: {format_timestamp(item.last_reviewed)}",
        f"Review count:  {item.review_count}",
    ]
    return "\n".join(lines)
