"""Duplicate handling strategies for transaction imports."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from txdedup.services.duplicates import (
    CandidateTransaction,
    DuplicateDetector,
    DuplicateMatch,
    ExistingTransaction,
)

logger = logging.getLogger(__name__)


class DuplicateStrategy(str, Enum):
    """How an import treats detected duplicates."""

    KEEP_ALL = "keep_all"
    SKIP_ALL = "skip_all"
    AUTO_MERGE = "auto_merge"
    REVIEW_EACH = "review_each"


class DuplicateAction(str, Enum):
    """Reviewer decision for a single detected duplicate."""

    MERGE = "merge"
    SKIP = "skip"
    KEEP_BOTH = "keep_both"
    NOT_DUPLICATE = "not_duplicate"


@dataclass
class ReviewDecision:
    """Reviewer decision for one imported row."""

    row_number: int
    existing_transaction_id: int
    action: DuplicateAction


@dataclass
class ImportPlan:
    """What an import will do with each candidate."""

    strategy: DuplicateStrategy
    to_create: list[CandidateTransaction] = field(default_factory=list)
    to_merge: list[tuple[CandidateTransaction, ExistingTransaction]] = field(default_factory=list)
    skipped: list[CandidateTransaction] = field(default_factory=list)
    matches: list[DuplicateMatch] = field(default_factory=list)

    @property
    def duplicates_merged(self) -> int:
        return len(self.to_merge)

    @property
    def duplicates_skipped(self) -> int:
        return len(self.skipped)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "strategy": self.strategy.value,
            "to_create": [c.row_number for c in self.to_create],
            "to_merge": [
                {"row_number": c.row_number, "existing_transaction_id": getattr(e, "id", None)}
                for c, e in self.to_merge
            ],
            "skipped": [c.row_number for c in self.skipped],
            "duplicates_found": len(self.matches),
            "duplicates_merged": self.duplicates_merged,
            "duplicates_skipped": self.duplicates_skipped,
        }


def plan_import(
    wallet_id: int,
    strategy: DuplicateStrategy,
    candidates: Sequence[CandidateTransaction],
    matches: Iterable[DuplicateMatch],
    decisions: Iterable[ReviewDecision] | None = None,
) -> ImportPlan:
    """Decide what to do with each candidate given its detected duplicate.

    Args:
        wallet_id: Wallet being imported into
        strategy: Duplicate handling strategy
        candidates: All candidates in the import
        matches: Detector output for those candidates
        decisions: Reviewer decisions, used by REVIEW_EACH

    Returns:
        ImportPlan splitting candidates into create, merge and skip
    """
    matches = list(matches)
    plan = ImportPlan(strategy=strategy, matches=matches)

    # Matches refer to the exact candidate objects they were detected for
    match_by_candidate = {id(m.candidate): m for m in matches}
    decision_by_row = {d.row_number: d for d in decisions or []}

    for candidate in candidates:
        match = match_by_candidate.get(id(candidate))
        if match is None or strategy == DuplicateStrategy.KEEP_ALL:
            plan.to_create.append(candidate)
            continue

        if strategy == DuplicateStrategy.SKIP_ALL:
            plan.skipped.append(candidate)
        elif strategy == DuplicateStrategy.AUTO_MERGE:
            plan.to_merge.append((candidate, match.existing))
        elif strategy == DuplicateStrategy.REVIEW_EACH:
            _apply_decision(plan, wallet_id, candidate, match, decision_by_row.get(candidate.row_number))

    return plan


def _apply_decision(
    plan: ImportPlan,
    wallet_id: int,
    candidate: CandidateTransaction,
    match: DuplicateMatch,
    decision: ReviewDecision | None,
) -> None:
    """Apply a reviewer decision to a matched candidate."""
    if decision is None:
        plan.skipped.append(candidate)
        return

    existing_id = getattr(match.existing, "id", None)
    if decision.existing_transaction_id != existing_id:
        logger.warning(
            f"Row {candidate.row_number}: decision targets transaction "
            f"{decision.existing_transaction_id} but duplicate is {existing_id}, skipping"
        )
        plan.skipped.append(candidate)
        return

    if decision.action == DuplicateAction.MERGE:
        existing_wallet = getattr(match.existing, "wallet_id", wallet_id)
        if existing_wallet != wallet_id:
            logger.warning(
                f"Row {candidate.row_number}: transaction {existing_id} belongs to wallet "
                f"{existing_wallet}, not {wallet_id}, skipping merge"
            )
            plan.skipped.append(candidate)
            return
        plan.to_merge.append((candidate, match.existing))
    elif decision.action == DuplicateAction.SKIP:
        plan.skipped.append(candidate)
    else:
        # KEEP_BOTH and NOT_DUPLICATE import the row as new
        plan.to_create.append(candidate)


async def build_import_plan(
    detector: DuplicateDetector,
    wallet_id: int,
    strategy: DuplicateStrategy,
    candidates: Sequence[CandidateTransaction],
    decisions: Iterable[ReviewDecision] | None = None,
) -> ImportPlan:
    """Run duplicate detection (unless keeping everything) and plan the import."""
    matches: list[DuplicateMatch] = []
    if strategy != DuplicateStrategy.KEEP_ALL:
        matches = await detector.detect_duplicates(wallet_id, candidates)

    plan = plan_import(wallet_id, strategy, candidates, matches, decisions)
    logger.info(
        f"Import plan for wallet {wallet_id} ({strategy.value}): "
        f"{len(plan.to_create)} create, {plan.duplicates_merged} merge, "
        f"{plan.duplicates_skipped} skip"
    )
    return plan
