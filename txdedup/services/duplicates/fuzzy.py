"""Fuzzy duplicate matching for tiers 2-4."""

import math

from .confidence import DuplicateMatch, MatchTier
from .extract import extract_merchant_name
from .text import similarity_percent
from .types import ExistingTransaction, PreparedCandidate, calendar_day, days_between


def relative_amount_diff(candidate: PreparedCandidate, existing: ExistingTransaction) -> float | None:
    """Amount difference as a fraction of the candidate amount.

    Returns None for a zero candidate amount, where a relative difference
    has no meaning.
    """
    if candidate.amount == 0:
        return None
    return abs(existing.amount - candidate.amount) / abs(candidate.amount)


class StrongMatcher:
    """Tier 2 matching with confidence 90-95.

    - Amount exact match
    - Date within 1 day
    - Description similarity > 80%
    """

    tier = MatchTier.STRONG

    MAX_DATE_DIFF_DAYS = 1
    SIMILARITY_THRESHOLD = 80.0

    def match(
        self,
        candidate: PreparedCandidate,
        existing: ExistingTransaction,
    ) -> DuplicateMatch | None:
        """Attempt strong match of a candidate against an existing transaction."""
        if existing.amount != candidate.amount:
            return None

        days_diff = days_between(candidate.day, calendar_day(existing.date))
        if days_diff > self.MAX_DATE_DIFF_DAYS:
            return None

        sim = similarity_percent(existing.note or "", candidate.description)
        if sim <= self.SIMILARITY_THRESHOLD:
            return None

        confidence = 90 + math.floor((sim - 80.0) / 20.0 * 5.0)

        return DuplicateMatch(
            existing=existing,
            candidate=candidate.source,
            confidence=self.tier.clamp(confidence),
            reason=(
                f"Strong match: same amount ({candidate.amount} {candidate.currency}), "
                f"date within 1 day, {sim:.0f}% description match"
            ),
            tier=self.tier,
        )


class LikelyMatcher:
    """Tier 3 matching with confidence 70-85.

    - Amount within 5%
    - Date within 3 days
    - Description similarity > 60%
    """

    tier = MatchTier.LIKELY

    AMOUNT_TOLERANCE = 0.05
    MAX_DATE_DIFF_DAYS = 3
    SIMILARITY_THRESHOLD = 60.0

    def match(
        self,
        candidate: PreparedCandidate,
        existing: ExistingTransaction,
    ) -> DuplicateMatch | None:
        """Attempt likely match of a candidate against an existing transaction."""
        amount_diff = relative_amount_diff(candidate, existing)
        if amount_diff is None or amount_diff > self.AMOUNT_TOLERANCE:
            return None

        days_diff = days_between(candidate.day, calendar_day(existing.date))
        if days_diff > self.MAX_DATE_DIFF_DAYS:
            return None

        sim = similarity_percent(existing.note or "", candidate.description)
        if sim <= self.SIMILARITY_THRESHOLD:
            return None

        similarity_bonus = (sim - 60.0) / 40.0 * 10.0
        date_bonus = (3 - days_diff) / 3 * 3.0
        amount_bonus = (0.05 - amount_diff) / 0.05 * 2.0
        confidence = int(70.0 + similarity_bonus + date_bonus + amount_bonus)

        return DuplicateMatch(
            existing=existing,
            candidate=candidate.source,
            confidence=self.tier.clamp(confidence),
            reason=(
                f"Likely match: amount within 5% ({amount_diff * 100:.1f}%), "
                f"date within 3 days ({days_diff}), {sim:.0f}% description match"
            ),
            tier=self.tier,
        )


class PossibleMatcher:
    """Tier 4 matching with confidence 50-65.

    - Amount within 10%
    - Date within 7 days
    - Merchant name similarity > 70%
    """

    tier = MatchTier.POSSIBLE

    AMOUNT_TOLERANCE = 0.10
    MAX_DATE_DIFF_DAYS = 7
    SIMILARITY_THRESHOLD = 70.0

    def match(
        self,
        candidate: PreparedCandidate,
        existing: ExistingTransaction,
    ) -> DuplicateMatch | None:
        """Attempt possible match of a candidate against an existing transaction."""
        amount_diff = relative_amount_diff(candidate, existing)
        if amount_diff is None or amount_diff > self.AMOUNT_TOLERANCE:
            return None

        days_diff = days_between(candidate.day, calendar_day(existing.date))
        if days_diff > self.MAX_DATE_DIFF_DAYS:
            return None

        existing_merchant = extract_merchant_name(existing.note or "")
        merchant_sim = similarity_percent(existing_merchant, candidate.merchant)
        if merchant_sim <= self.SIMILARITY_THRESHOLD:
            return None

        merchant_bonus = (merchant_sim - 70.0) / 30.0 * 10.0
        date_bonus = (7 - days_diff) / 7 * 3.0
        amount_bonus = (0.10 - amount_diff) / 0.10 * 2.0
        confidence = int(50.0 + merchant_bonus + date_bonus + amount_bonus)

        return DuplicateMatch(
            existing=existing,
            candidate=candidate.source,
            confidence=self.tier.clamp(confidence),
            reason=(
                f"Possible match: amount within 10% ({amount_diff * 100:.1f}%), "
                f"date within 7 days ({days_diff}), merchant match ({merchant_sim:.0f}%)"
            ),
            tier=self.tier,
        )
