"""
Saved Item - Resurfacable Record
================================
Review state for a single saved post.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..constants import ONE_DAY

# Keys owned by the review state; everything else in a stored record is payload.
_STATE_KEYS = ("id", "payload", "interval", "nextReview", "lastReviewed", "reviewCount")


@dataclass(frozen=True)
class SavedItem:
    """
    One resurfacable unit.

    The payload (author, text, media, metrics, url) is opaque to the
    scheduler and the insertion queue; it is only carried through to the
    renderer.
    """
    id: str
    next_review: int  # ms since epoch
    interval: int = ONE_DAY  # ms
    last_reviewed: Optional[int] = None  # ms since epoch, None if never reviewed
    review_count: int = 0
    payload: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def was_reviewed(self) -> bool:
        return self.last_reviewed is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted record shape."""
        return {
            "id": self.id,
            "payload": dict(self.payload),
            "interval": self.interval,
            "nextReview": self.next_review,
            "lastReviewed": self.last_reviewed,
            "reviewCount": self.review_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedItem":
        """
        Deserialize a persisted record.

        Records written with the payload flattened into the top level are
        accepted: unknown keys are folded into ``payload``. A missing
        interval defaults to one day and a missing review count to zero.
        """
        payload = dict(data.get("payload") or {})
        for key, value in data.items():
            if key not in _STATE_KEYS:
                payload.setdefault(key, value)

        last_reviewed = data.get("lastReviewed")
        return cls(
            id=str(data["id"]),
            next_review=int(data["nextReview"]),
            interval=int(data.get("interval") or ONE_DAY),
            last_reviewed=int(last_reviewed) if last_reviewed is not None else None,
            review_count=int(data.get("reviewCount") or 0),
            payload=payload,
        )


__all__ = ["SavedItem"]
