"""Type definitions for the code recovery module.

This module defines the data structures returned by the matchers and the
resolution pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DecisionStatus(Enum):
    """Decision status for a resolution result."""

    PASS = "pass"
    REJECT = "reject"


class MatchMethod(Enum):
    """How a known code was recovered from the input."""

    EXACT = "exact"  # Normalized input is a known code
    CANDIDATE = "candidate"  # A single confusion substitution is a known code
    EDIT_DISTANCE = "edit_distance"  # Closest known code within the budget
    SINGLE_SUBSTITUTION = "single_substitution"  # Live-scan Hamming-1 match


@dataclass
class CodeMatch:
    """Outcome of the best-match search.

    Attributes:
        code: Matched known code.
        method: EXACT, CANDIDATE or EDIT_DISTANCE.
        candidate: Correction candidate that produced the match.
        distance: Edit distance between candidate and code (0 for exact hits).
    """

    code: str
    method: MatchMethod
    candidate: str
    distance: int


@dataclass
class SubstitutionMatch:
    """Known code one substitution away from a scanned code.

    Attributes:
        code: Matched known code.
        scanned_code: Original (uncorrected) scanned string, for display.
        position: Index of the differing character within the 6-char body.
    """

    code: str
    scanned_code: str
    position: int


@dataclass
class RejectionReason:
    """Structured rejection reason with error code and context.

    Attributes:
        code: Error code (e.g., "RES-E003")
        constant: String constant for programmatic checking (e.g., "NO_MATCH")
        message: Human-readable explanation
        stage: Pipeline stage where rejection occurred (e.g., "STAGE_4")
        severity: Error severity level ("ERROR", "WARNING" or "INFO")
        http_status: HTTP status code for API responses (default: 404)
    """

    code: str
    constant: str
    message: str
    stage: str
    severity: str = "ERROR"
    http_status: int = 404


@dataclass
class ResolutionResult:
    """Final result of resolving OCR text against the known codes.

    Attributes:
        decision: PASS if a known code was recovered, REJECT otherwise
        code: Recovered known code if PASS, None if REJECT
        raw_text: Input text exactly as received
        readings: Code readings taken from the text (extracted or normalized)
        method: How the code was recovered, None if REJECT
        distance: Edit/Hamming distance of the recovered code, None if REJECT
        rejection_reason: Structured reason (success reason on PASS)
        processing_time_ms: Total processing time in milliseconds
    """

    decision: DecisionStatus
    code: Optional[str]
    raw_text: str
    readings: List[str] = field(default_factory=list)
    method: Optional[MatchMethod] = None
    distance: Optional[int] = None
    rejection_reason: Optional[RejectionReason] = None
    processing_time_ms: float = 0.0

    def is_pass(self) -> bool:
        """Check if decision is PASS.

        Returns:
            True if decision is PASS, False otherwise.
        """
        return self.decision == DecisionStatus.PASS

    def is_reject(self) -> bool:
        """Check if decision is REJECT.

        Returns:
            True if decision is REJECT, False otherwise.
        """
        return self.decision == DecisionStatus.REJECT
