"""Code resolution pipeline: OCR text in, known code (or rejection) out.

This module orchestrates the complete recovery workflow:
    1. KNOWN CODES: Normalize the code set supplied by the persistence layer
    2. READINGS: Codes in the transcript, loose PL-XXX-XXX shapes that may hold
       misread characters, or the whole text when neither is present
    3. EXACT LOOKUP: Any reading that is already a known code
    4. BEST MATCH: Confusion candidates + edit distance per reading

A second entry point, :meth:`CodeResolver.resolve_scan`, serves the live
scanner: exact lookup followed by the single-substitution matcher.
:meth:`CodeResolver.issue_code` mints a new code that does not collide with
the known ones.

Example:
    >>> resolver = CodeResolver()
    >>> result = resolver.resolve("scribble PL-0A9-K2M", ["PL-QA9-K2M"])
    >>> if result.is_pass():
    ...     print(f"Resolved: {result.code}")
    Resolved: PL-QA9-K2M
"""

import logging
import random
import re
import time
from pathlib import Path
from typing import Iterable, List, Optional

from src.codes.format import extract_codes, generate_unique_code, normalize_code

from .config_loader import Config, get_default_config, load_config
from .corrector import CandidateGenerator
from .matcher import find_single_substitution_match, match_code
from .types import (
    CodeMatch,
    DecisionStatus,
    MatchMethod,
    RejectionReason,
    ResolutionResult,
)

logger = logging.getLogger(__name__)

# Code-shaped tokens before alphabet checks, so misread characters survive
_LOOSE_CODE = re.compile(r"PL-[A-Z0-9]{3}-[A-Z0-9]{3}")


class CodeResolver:
    """Resolves OCR output to an issued code.

    Args:
        config_path: Optional path to config YAML file. If None, uses default config.

    Attributes:
        config: Full configuration object
        generator: Confusion candidate generator
    """

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            self.config: Config = get_default_config()
        else:
            self.config: Config = load_config(config_path)

        self.generator = CandidateGenerator(config=self.config.recovery.correction)
        logger.info(
            f"Initialized code resolver: "
            f"max_distance={self.config.recovery.matching.max_distance}, "
            f"correction={self.config.recovery.correction.enabled}"
        )

    def resolve(self, text: str, known_codes: Iterable[str]) -> ResolutionResult:
        """Resolve an OCR transcript against the known codes.

        Args:
            text: Recognized text from the OCR collaborator (may contain noise)
            known_codes: Issued codes from the persistence collaborator

        Returns:
            ResolutionResult with the recovered code or a rejection reason
        """
        start_time = time.perf_counter()

        # ═══════════════════════════════════════════════════════════════
        # STAGE 1: KNOWN CODES
        # ═══════════════════════════════════════════════════════════════
        codes = self._normalize_known_codes(known_codes)
        if not codes:
            return self._create_rejection(
                raw_text=text,
                readings=[],
                reason=RejectionReason(
                    code="RES-E001",
                    constant="NO_KNOWN_CODES",
                    message="No known codes to match against",
                    stage="STAGE_1",
                    severity="WARNING",
                ),
                start_time=start_time,
            )

        # ═══════════════════════════════════════════════════════════════
        # STAGE 2: READINGS
        # ═══════════════════════════════════════════════════════════════
        readings = self._readings_from_text(text)
        if not readings:
            return self._create_rejection(
                raw_text=text,
                readings=[],
                reason=RejectionReason(
                    code="RES-E002",
                    constant="NO_TEXT",
                    message="No text to resolve",
                    stage="STAGE_2",
                    http_status=400,
                ),
                start_time=start_time,
            )

        # ═══════════════════════════════════════════════════════════════
        # STAGE 3: EXACT LOOKUP
        # ═══════════════════════════════════════════════════════════════
        known = set(codes)
        for reading in readings:
            if reading in known:
                return self._create_pass(
                    raw_text=text,
                    readings=readings,
                    code=reading,
                    method=MatchMethod.EXACT,
                    distance=0,
                    stage="STAGE_3",
                    start_time=start_time,
                )

        # ═══════════════════════════════════════════════════════════════
        # STAGE 4: BEST MATCH
        # ═══════════════════════════════════════════════════════════════
        max_distance = self.config.recovery.matching.max_distance
        best: Optional[CodeMatch] = None
        for reading in readings:
            match = match_code(
                reading,
                codes,
                max_distance=max_distance,
                candidates=self.generator.generate(reading),
            )
            if match is not None and (best is None or match.distance < best.distance):
                best = match
                if best.distance == 0:
                    break

        if best is None:
            logger.info(
                f"No code within distance {max_distance} for readings {readings}"
            )
            return self._create_rejection(
                raw_text=text,
                readings=readings,
                reason=RejectionReason(
                    code="RES-E003",
                    constant="NO_MATCH",
                    message="Code not found",
                    stage="STAGE_4",
                ),
                start_time=start_time,
            )

        return self._create_pass(
            raw_text=text,
            readings=readings,
            code=best.code,
            method=best.method,
            distance=best.distance,
            stage="STAGE_4",
            start_time=start_time,
        )

    def resolve_scan(
        self, scanned_code: str, known_codes: Iterable[str]
    ) -> ResolutionResult:
        """Resolve a live-scanned code: exact lookup, then one-substitution match.

        Args:
            scanned_code: Code read by the live scanner
            known_codes: Issued codes from the persistence collaborator

        Returns:
            ResolutionResult with the recovered code or a rejection reason
        """
        start_time = time.perf_counter()
        codes = self._normalize_known_codes(known_codes)
        reading = normalize_code(scanned_code)
        readings = [reading] if reading else []

        if reading and reading in codes:
            return self._create_pass(
                raw_text=scanned_code,
                readings=readings,
                code=reading,
                method=MatchMethod.EXACT,
                distance=0,
                stage="SCAN",
                start_time=start_time,
            )

        if reading and self.config.recovery.matching.enable_single_substitution:
            match = find_single_substitution_match(reading, codes)
            if match is not None:
                logger.info(
                    f"Scanned {scanned_code!r} corrected at position "
                    f"{match.position} to {match.code}"
                )
                return self._create_pass(
                    raw_text=scanned_code,
                    readings=readings,
                    code=match.code,
                    method=MatchMethod.SINGLE_SUBSTITUTION,
                    distance=1,
                    stage="SCAN",
                    start_time=start_time,
                )

        return self._create_rejection(
            raw_text=scanned_code,
            readings=readings,
            reason=RejectionReason(
                code="RES-E003",
                constant="NO_MATCH",
                message="Code not found",
                stage="SCAN",
            ),
            start_time=start_time,
        )

    def issue_code(
        self, known_codes: Iterable[str], rng: Optional[random.Random] = None
    ) -> str:
        """Generate a new code that is not among the known codes.

        Raises:
            CodeGenerationError: If the configured attempt budget is exhausted.
        """
        taken = set(self._normalize_known_codes(known_codes))
        return generate_unique_code(
            taken.__contains__,
            max_attempts=self.config.recovery.generation.max_attempts,
            rng=rng,
        )

    @staticmethod
    def _normalize_known_codes(known_codes: Iterable[str]) -> List[str]:
        """Uppercase, trim and de-duplicate known codes, keeping order."""
        normalized = (normalize_code(code) for code in known_codes)
        return list(dict.fromkeys(code for code in normalized if code))

    @staticmethod
    def _readings_from_text(text: str) -> List[str]:
        """Codes and code-shaped tokens in the text, or the whole normalized text."""
        normalized = normalize_code(text or "")
        readings = list(
            dict.fromkeys(extract_codes(text) + _LOOSE_CODE.findall(normalized))
        )
        if readings:
            return readings
        return [normalized] if normalized else []

    def _create_pass(
        self,
        raw_text: str,
        readings: List[str],
        code: str,
        method: MatchMethod,
        distance: int,
        stage: str,
        start_time: float,
    ) -> ResolutionResult:
        """Create a PASS ResolutionResult."""
        logger.info(f"Resolved {raw_text!r} to {code} via {method.value} (distance={distance})")
        return ResolutionResult(
            decision=DecisionStatus.PASS,
            code=code,
            raw_text=raw_text,
            readings=readings,
            method=method,
            distance=distance,
            rejection_reason=RejectionReason(
                code="RES-S000",
                constant="SUCCESS",
                message="Code resolved successfully",
                stage=stage,
                severity="INFO",
                http_status=200,
            ),
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    def _create_rejection(
        self,
        raw_text: str,
        readings: List[str],
        reason: RejectionReason,
        start_time: float,
    ) -> ResolutionResult:
        """Create a REJECT ResolutionResult.

        Args:
            raw_text: Input text as received
            readings: Readings taken from the text so far
            reason: Structured rejection reason
            start_time: ``time.perf_counter()`` value at pipeline start

        Returns:
            ResolutionResult with REJECT decision
        """
        logger.info(f"Rejected {raw_text!r}: {reason.constant} ({reason.code})")
        return ResolutionResult(
            decision=DecisionStatus.REJECT,
            code=None,
            raw_text=raw_text,
            readings=readings,
            method=None,
            distance=None,
            rejection_reason=reason,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )
