"""Transaction shapes consumed by the duplicate detector."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Any, Protocol

from .extract import extract_merchant_name
from .text import normalize_text


class ExistingTransaction(Protocol):
    """A stored transaction the detector compares against.

    The SQLAlchemy ``Transaction`` model satisfies this protocol.
    """

    amount: int
    date: date | datetime
    note: str | None


@dataclass
class CandidateTransaction:
    """A newly imported transaction that has not been persisted yet."""

    wallet_id: int
    amount: int  # smallest currency unit
    currency: str
    date: int  # unix seconds
    description: str
    reference_number: str = ""
    row_number: int = 0

    @property
    def occurred_at(self) -> datetime:
        return datetime.fromtimestamp(self.date, UTC)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "wallet_id": self.wallet_id,
            "amount": self.amount,
            "currency": self.currency,
            "date": self.date,
            "description": self.description,
            "reference_number": self.reference_number,
            "row_number": self.row_number,
        }


@dataclass(frozen=True)
class PreparedCandidate:
    """Candidate fields derived once per candidate and shared by all tiers."""

    source: CandidateTransaction
    amount: int
    currency: str
    day: date
    description: str  # normalized
    merchant: str
    reference: str

    @classmethod
    def from_candidate(cls, candidate: CandidateTransaction) -> "PreparedCandidate":
        return cls(
            source=candidate,
            amount=candidate.amount,
            currency=candidate.currency,
            day=candidate.occurred_at.date(),
            description=normalize_text(candidate.description or ""),
            merchant=extract_merchant_name(candidate.description or ""),
            reference=candidate.reference_number or "",
        )


def calendar_day(value: date | datetime) -> date:
    """Get the UTC calendar day of a stored date.

    Naive datetimes are treated as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date()
    return value


def days_between(a: date, b: date) -> int:
    """Absolute number of calendar days between two days."""
    return abs((a - b).days)


def day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def day_end(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=UTC)


def search_window(candidates: list[CandidateTransaction], days: int) -> tuple[datetime, datetime]:
    """Date range covering every candidate day, widened by ``days`` on each side."""
    candidate_days = [c.occurred_at.date() for c in candidates]
    start = day_start(min(candidate_days) - timedelta(days=days))
    end = day_end(max(candidate_days) + timedelta(days=days))
    return start, end
