"""
Submission result model.

Every user-triggered operation ends in exactly one SubmissionResult.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ResultStatus(str, Enum):
    """Outcome of an operation."""
    CONFIRMED = "confirmed"
    FAILED = "failed"


class FailureCategory(str, Enum):
    """Human-readable failure categories surfaced to the caller."""
    INVALID_INPUT = "invalid_input"   # Malformed address or amount
    PRECONDITION = "precondition"     # e.g. sender holds none of the token
    NETWORK = "network"               # Query, submission or confirmation failure
    CANCELLED = "cancelled"           # Signing declined by the user


@dataclass
class SubmissionResult:
    """
    Tagged outcome of a submission pipeline.

    Attributes:
        status: CONFIRMED or FAILED
        signature: Transaction signature (confirmed results only)
        explorer_url: Display-only link derived from the signature
        category: Failure category (failed results only)
        reason: Human-readable failure description
        created_at: When the result was produced
    """

    status: ResultStatus
    signature: Optional[str] = None
    explorer_url: Optional[str] = None
    category: Optional[FailureCategory] = None
    reason: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def confirmed(cls, signature: str, explorer_url: Optional[str] = None) -> "SubmissionResult":
        return cls(
            status=ResultStatus.CONFIRMED,
            signature=signature,
            explorer_url=explorer_url,
        )

    @classmethod
    def failed(cls, category: FailureCategory, reason: str) -> "SubmissionResult":
        return cls(
            status=ResultStatus.FAILED,
            category=category,
            reason=reason,
        )

    @property
    def is_confirmed(self) -> bool:
        return self.status == ResultStatus.CONFIRMED

    @property
    def short_signature(self) -> Optional[str]:
        """Signature truncated for display."""
        if not self.signature:
            return None
        return self.signature[:20] + "..."

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "signature": self.signature,
            "explorer_url": self.explorer_url,
            "category": self.category.value if self.category else None,
            "reason": self.reason,
            "created_at": self.created_at.isoformat(),
        }
