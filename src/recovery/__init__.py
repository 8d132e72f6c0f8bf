"""Code recovery: OCR confusion correction and known-code matching.

This module recovers an issued PaperLink code from a noisy OCR reading of the
user's handwriting.

Core Components:
    - config_loader: Configuration loading with Pydantic validation
    - corrector: Single-substitution OCR correction candidates
    - distance: Levenshtein and Hamming distances
    - matcher: Best-match resolver and single-substitution matcher
    - processor: End-to-end resolution pipeline
    - types: Result data structures

Example:
    >>> from src.recovery import find_best_match
    >>> find_best_match("PL-0A9-K2M", ["PL-QA9-K2M"])
    'PL-QA9-K2M'
"""

from .config_loader import (
    DEFAULT_CONFUSIONS,
    Config,
    CorrectionConfig,
    GenerationConfig,
    MatchingConfig,
    RecoveryModuleConfig,
    get_default_config,
    load_config,
)
from .corrector import CandidateGenerator, generate_candidates, normalize_reading
from .distance import edit_distance, hamming_distance
from .matcher import find_best_match, find_single_substitution_match, match_code
from .processor import CodeResolver
from .types import (
    CodeMatch,
    DecisionStatus,
    MatchMethod,
    RejectionReason,
    ResolutionResult,
    SubstitutionMatch,
)

__all__ = [
    # Types
    "DecisionStatus",
    "MatchMethod",
    "CodeMatch",
    "SubstitutionMatch",
    "RejectionReason",
    "ResolutionResult",
    # Configuration
    "DEFAULT_CONFUSIONS",
    "Config",
    "RecoveryModuleConfig",
    "CorrectionConfig",
    "MatchingConfig",
    "GenerationConfig",
    "load_config",
    "get_default_config",
    # Correction
    "CandidateGenerator",
    "generate_candidates",
    "normalize_reading",
    # Distance
    "edit_distance",
    "hamming_distance",
    # Matching
    "match_code",
    "find_best_match",
    "find_single_substitution_match",
    # Pipeline
    "CodeResolver",
]
