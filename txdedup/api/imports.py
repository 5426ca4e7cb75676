"""Import duplicate detection API endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from txdedup.database import get_session
from txdedup.services.duplicates import CandidateTransaction, DuplicateDetector, TransactionRepository
from txdedup.services.repository import RepositoryError, SqlTransactionRepository
from txdedup.services.strategies import (
    DuplicateAction,
    DuplicateStrategy,
    ReviewDecision,
    build_import_plan,
)

router = APIRouter(prefix="/api/imports", tags=["imports"])


class ParsedTransaction(BaseModel):
    """Transaction parsed from an import file."""

    amount: int
    currency: str = Field(min_length=3, max_length=3)
    date: int = Field(description="Unix seconds")
    description: str = ""
    reference_number: str = ""
    row_number: int = 0


class DetectDuplicatesRequest(BaseModel):
    """Request to check parsed transactions for duplicates."""

    wallet_id: int
    transactions: list[ParsedTransaction]


class DuplicateMatchResponse(BaseModel):
    """A detected duplicate."""

    imported_transaction: ParsedTransaction
    existing_transaction: dict
    confidence: int
    match_reason: str
    tier: int


class DetectDuplicatesResponse(BaseModel):
    """Response from duplicate detection."""

    success: bool
    message: str
    matches: list[DuplicateMatchResponse]
    timestamp: str


class DuplicateActionRequest(BaseModel):
    """Reviewer decision for one imported row."""

    imported_row_number: int
    existing_transaction_id: int
    action: DuplicateAction


class PlanImportRequest(BaseModel):
    """Request to plan an import under a duplicate strategy."""

    wallet_id: int
    strategy: DuplicateStrategy = DuplicateStrategy.REVIEW_EACH
    transactions: list[ParsedTransaction]
    duplicate_actions: list[DuplicateActionRequest] = []


async def get_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> TransactionRepository:
    return SqlTransactionRepository(session)


def _to_candidates(wallet_id: int, transactions: list[ParsedTransaction]) -> list[CandidateTransaction]:
    return [
        CandidateTransaction(
            wallet_id=wallet_id,
            amount=t.amount,
            currency=t.currency.upper(),
            date=t.date,
            description=t.description,
            reference_number=t.reference_number,
            row_number=t.row_number,
        )
        for t in transactions
    ]


@router.post("/duplicates", response_model=DetectDuplicatesResponse)
async def detect_duplicates(
    request: DetectDuplicatesRequest,
    repository: Annotated[TransactionRepository, Depends(get_repository)],
):
    """Detect potential duplicates for parsed transactions."""
    detector = DuplicateDetector(repository)
    candidates = _to_candidates(request.wallet_id, request.transactions)

    try:
        matches = await detector.detect_duplicates(request.wallet_id, candidates)
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=f"Duplicate detection unavailable: {e}") from e

    return DetectDuplicatesResponse(
        success=True,
        message=f"Found {len(matches)} potential duplicate(s)",
        matches=[DuplicateMatchResponse(**m.to_dict()) for m in matches],
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.post("/plan")
async def plan_import(
    request: PlanImportRequest,
    repository: Annotated[TransactionRepository, Depends(get_repository)],
):
    """Plan which imported rows to create, merge or skip."""
    detector = DuplicateDetector(repository)
    candidates = _to_candidates(request.wallet_id, request.transactions)
    decisions = [
        ReviewDecision(
            row_number=a.imported_row_number,
            existing_transaction_id=a.existing_transaction_id,
            action=a.action,
        )
        for a in request.duplicate_actions
    ]

    try:
        plan = await build_import_plan(
            detector, request.wallet_id, request.strategy, candidates, decisions
        )
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=f"Duplicate detection unavailable: {e}") from e

    return plan.to_dict()
