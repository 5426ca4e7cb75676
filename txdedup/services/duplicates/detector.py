"""Duplicate detection across an imported batch."""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from .confidence import DuplicateMatch
from .exact import ExactMatcher
from .fuzzy import LikelyMatcher, PossibleMatcher, StrongMatcher
from .types import (
    CandidateTransaction,
    ExistingTransaction,
    PreparedCandidate,
    search_window,
)

logger = logging.getLogger(__name__)


class TransactionRepository(Protocol):
    """Read access to stored transactions."""

    async def find_by_wallet_and_date_range(
        self,
        wallet_id: int,
        start_date: datetime,
        end_date: datetime,
    ) -> Sequence[ExistingTransaction]: ...


class DuplicateDetector:
    """Finds the most likely existing duplicate for each imported transaction.

    Flow:
    1. Compute one date window covering the whole batch
    2. Load the wallet's stored transactions in that window
    3. Evaluate every (candidate, existing) pair, tier 1 -> 4, first match wins
    4. Keep the highest-confidence match per candidate
    """

    # Widest tolerance of any tier (possible match)
    SEARCH_WINDOW_DAYS = PossibleMatcher.MAX_DATE_DIFF_DAYS

    def __init__(self, repository: TransactionRepository):
        self.repository = repository
        self.matchers = (
            ExactMatcher(),
            StrongMatcher(),
            LikelyMatcher(),
            PossibleMatcher(),
        )

    async def detect_duplicates(
        self,
        wallet_id: int,
        candidates: Sequence[CandidateTransaction],
    ) -> list[DuplicateMatch]:
        """Detect likely duplicates for a batch of imported transactions.

        Args:
            wallet_id: Wallet the candidates are being imported into
            candidates: Parsed transactions from the import file

        Returns:
            At most one DuplicateMatch per candidate, in candidate order.
            Repository errors propagate and no partial result is returned.
        """
        if not candidates:
            return []

        start, end = search_window(list(candidates), self.SEARCH_WINDOW_DAYS)
        existing = await self.repository.find_by_wallet_and_date_range(wallet_id, start, end)

        logger.info(
            f"Checking {len(candidates)} imported transactions against "
            f"{len(existing)} existing for wallet {wallet_id} ({start.date()} - {end.date()})"
        )

        if not existing:
            return []

        matches = []
        for candidate in candidates:
            match = self.find_best_match(candidate, existing)
            if match is not None:
                logger.debug(
                    f"Row {candidate.row_number}: tier {match.tier} "
                    f"({match.confidence}%) - {match.reason}"
                )
                matches.append(match)

        logger.info(f"Found {len(matches)} potential duplicate(s) for wallet {wallet_id}")
        return matches

    def find_best_match(
        self,
        candidate: CandidateTransaction,
        existing: Sequence[ExistingTransaction],
    ) -> DuplicateMatch | None:
        """Find the highest-confidence match for one candidate."""
        prepared = PreparedCandidate.from_candidate(candidate)
        best_match: DuplicateMatch | None = None

        for entry in existing:
            result = self.match_pair(prepared, entry)
            if result is not None and (best_match is None or result.confidence > best_match.confidence):
                best_match = result

        return best_match

    def match_pair(
        self,
        candidate: PreparedCandidate,
        existing: ExistingTransaction,
    ) -> DuplicateMatch | None:
        """Evaluate tiers in priority order, stopping at the first that matches."""
        for matcher in self.matchers:
            result = matcher.match(candidate, existing)
            if result is not None:
                return result
        return None
