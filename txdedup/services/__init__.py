"""Services for duplicate detection."""

from .repository import DuplicateDetectionError, RepositoryError, SqlTransactionRepository
from .strategies import (
    DuplicateAction,
    DuplicateStrategy,
    ImportPlan,
    ReviewDecision,
    build_import_plan,
    plan_import,
)

__all__ = [
    "SqlTransactionRepository",
    "DuplicateDetectionError",
    "RepositoryError",
    "DuplicateStrategy",
    "DuplicateAction",
    "ReviewDecision",
    "ImportPlan",
    "plan_import",
    "build_import_plan",
]
