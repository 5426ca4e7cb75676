"""Duplicate transaction detection engine."""

from .confidence import CONFIDENCE_BANDS, DuplicateMatch, MatchTier
from .detector import DuplicateDetector, TransactionRepository
from .exact import ExactMatcher
from .extract import extract_merchant_name, extract_reference_from_note
from .fuzzy import LikelyMatcher, PossibleMatcher, StrongMatcher
from .text import edit_distance, normalize_text, similarity, similarity_percent
from .types import CandidateTransaction, ExistingTransaction

__all__ = [
    "CONFIDENCE_BANDS",
    "CandidateTransaction",
    "DuplicateDetector",
    "DuplicateMatch",
    "ExactMatcher",
    "ExistingTransaction",
    "LikelyMatcher",
    "MatchTier",
    "PossibleMatcher",
    "StrongMatcher",
    "TransactionRepository",
    "edit_distance",
    "extract_merchant_name",
    "extract_reference_from_note",
    "normalize_text",
    "similarity",
    "similarity_percent",
]
