"""Exact duplicate matching."""

from .confidence import DuplicateMatch, MatchTier
from .extract import extract_reference_from_note
from .types import ExistingTransaction, PreparedCandidate, calendar_day


class ExactMatcher:
    """Tier 1 matching with confidence 99.

    - Amount exact match
    - Same calendar day
    - Candidate reference number equals the reference embedded in the
      existing note (case-sensitive)

    Without a reference on both sides this tier never matches, so the pair
    falls through to the strong matcher.
    """

    tier = MatchTier.EXACT
    CONFIDENCE = 99
    REASON = "Exact match: same amount, date, and reference number"

    def match(
        self,
        candidate: PreparedCandidate,
        existing: ExistingTransaction,
    ) -> DuplicateMatch | None:
        """Attempt exact match of a candidate against an existing transaction."""
        if existing.amount != candidate.amount:
            return None

        if calendar_day(existing.date) != candidate.day:
            return None

        if not candidate.reference:
            return None

        existing_ref = extract_reference_from_note(existing.note or "")
        if not existing_ref or existing_ref != candidate.reference:
            return None

        return DuplicateMatch(
            existing=existing,
            candidate=candidate.source,
            confidence=self.CONFIDENCE,
            reason=self.REASON,
            tier=self.tier,
        )
