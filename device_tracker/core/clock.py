from __future__ import annotations

from datetime import datetime, timezone

__all__ = ["utc_timestamp"]


def utc_timestamp(now: datetime | None = None) -> str:
    """Render ``now`` (default: current time) as ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Timestamps are stored as text, so a fixed-width UTC format keeps string
    ordering identical to chronological ordering.
    """

    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
