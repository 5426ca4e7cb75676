"""Confidence bands and the duplicate match result."""

from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Any

from .types import CandidateTransaction, ExistingTransaction


class MatchTier(IntEnum):
    """Duplicate match tiers, strongest first."""

    EXACT = 1
    STRONG = 2
    LIKELY = 3
    POSSIBLE = 4

    @property
    def band(self) -> tuple[int, int]:
        """Inclusive (min, max) confidence for this tier."""
        return CONFIDENCE_BANDS[self]

    def clamp(self, confidence: int) -> int:
        """Clamp a confidence value into this tier's band."""
        low, high = self.band
        return max(low, min(high, confidence))

    @classmethod
    def from_confidence(cls, confidence: int) -> "MatchTier | None":
        """Get the tier whose band contains a confidence value.

        Returns None for values in the gaps between bands.
        """
        for tier, (low, high) in CONFIDENCE_BANDS.items():
            if low <= confidence <= high:
                return tier
        return None


# Bands never overlap; 66-69, 86-89 and 96-98 are unreachable
CONFIDENCE_BANDS: dict[MatchTier, tuple[int, int]] = {
    MatchTier.EXACT: (99, 99),
    MatchTier.STRONG: (90, 95),
    MatchTier.LIKELY: (70, 85),
    MatchTier.POSSIBLE: (50, 65),
}


@dataclass
class DuplicateMatch:
    """A likely re-import of an existing transaction."""

    existing: ExistingTransaction
    candidate: CandidateTransaction
    confidence: int
    reason: str
    tier: MatchTier

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        existing_date = self.existing.date
        if isinstance(existing_date, date):
            existing_date = existing_date.isoformat()

        return {
            "existing_transaction": {
                "id": getattr(self.existing, "id", None),
                "wallet_id": getattr(self.existing, "wallet_id", None),
                "amount": self.existing.amount,
                "date": existing_date,
                "note": self.existing.note,
            },
            "imported_transaction": self.candidate.to_dict(),
            "confidence": self.confidence,
            "match_reason": self.reason,
            "tier": int(self.tier),
        }
