"""Recovery of issued codes from noisy OCR readings.

Two matchers are provided:

1. **Best match** (:func:`find_best_match`): expands the reading into
   correction candidates, returns the first candidate that is a known code,
   otherwise the known code with the smallest edit distance to any candidate,
   provided it is within ``max_distance``.

2. **Single substitution** (:func:`find_single_substitution_match`): a cheap
   check for the live-scan view. A known code qualifies only if its six code
   characters differ from the scanned ones in exactly one position.

Neither matcher raises on "not found"; both return None.
"""

import logging
from typing import Dict, Iterable, List, Optional

from src.codes.constants import CODE_PREFIX, CODE_SEPARATOR

from .corrector import generate_candidates
from .distance import edit_distance, hamming_distance
from .types import CodeMatch, MatchMethod, SubstitutionMatch

logger = logging.getLogger(__name__)


def match_code(
    ocr_result: str,
    valid_codes: Iterable[str],
    max_distance: int = 2,
    confusions: Optional[Dict[str, List[str]]] = None,
    candidates: Optional[List[str]] = None,
) -> Optional[CodeMatch]:
    """Find the known code the user most likely wrote.

    Ties in the fuzzy pass are broken by picking the lexicographically
    smallest known code, so the result does not depend on the order of
    ``valid_codes``.

    Args:
        ocr_result: Raw OCR reading of a single code.
        valid_codes: Known issued codes (compared verbatim).
        max_distance: Largest edit distance accepted by the fuzzy pass.
        confusions: Confusion map for candidate generation.
        candidates: Precomputed candidates; generated from ``ocr_result``
            when omitted.

    Returns:
        CodeMatch describing the hit, or None when nothing is close enough.

    Raises:
        ValueError: If max_distance is negative.
    """
    if max_distance < 0:
        raise ValueError(f"max_distance must be >= 0, got {max_distance}")

    valid_codes = list(valid_codes)
    if not valid_codes:
        return None

    if candidates is None:
        candidates = generate_candidates(ocr_result, confusions)

    # Exact pass: identity first, then single substitutions
    known = set(valid_codes)
    for index, candidate in enumerate(candidates):
        if candidate in known:
            method = MatchMethod.EXACT if index == 0 else MatchMethod.CANDIDATE
            logger.debug(f"Exact hit {candidate} ({method.value}) for {ocr_result!r}")
            return CodeMatch(code=candidate, method=method, candidate=candidate, distance=0)

    # Fuzzy pass: closest known code over all candidates
    best_code: Optional[str] = None
    best_candidate: Optional[str] = None
    best_distance = max_distance + 1

    for valid_code in valid_codes:
        for candidate in candidates:
            distance = edit_distance(candidate, valid_code)
            if distance < best_distance or (
                distance == best_distance
                and best_code is not None
                and valid_code < best_code
            ):
                best_code, best_candidate, best_distance = valid_code, candidate, distance

    if best_code is None:
        logger.debug(
            f"No known code within distance {max_distance} of {ocr_result!r} "
            f"({len(candidates)} candidates, {len(valid_codes)} codes)"
        )
        return None

    logger.debug(f"Fuzzy hit {best_code} at distance {best_distance} for {ocr_result!r}")
    return CodeMatch(
        code=best_code,
        method=MatchMethod.EDIT_DISTANCE,
        candidate=best_candidate,
        distance=best_distance,
    )


def find_best_match(
    ocr_result: str,
    valid_codes: Iterable[str],
    max_distance: int = 2,
    confusions: Optional[Dict[str, List[str]]] = None,
) -> Optional[str]:
    """Return the best matching known code for an OCR reading, or None.

    Example:
        >>> find_best_match("PL-0A9-K2M", ["PL-QA9-K2M"])
        'PL-QA9-K2M'
        >>> find_best_match("PL-XXX-XXX", ["PL-AAA-AAA"]) is None
        True
    """
    match = match_code(ocr_result, valid_codes, max_distance, confusions)
    return match.code if match is not None else None


def _code_body(code: str) -> str:
    """Uppercase code without the ``PL-`` prefix and separators."""
    body = code.upper().strip()
    if body.startswith(CODE_PREFIX):
        body = body[len(CODE_PREFIX) :]
    return body.replace(CODE_SEPARATOR, "")


def find_single_substitution_match(
    scanned_code: str,
    known_codes: Iterable[str],
) -> Optional[SubstitutionMatch]:
    """Find a known code exactly one character away from a scanned code.

    Compares the six code characters only (prefix and hyphens removed) by
    Hamming distance; insertions and deletions are not considered, and an
    identical code does not qualify.

    Args:
        scanned_code: Normalized code read by the live scanner.
        known_codes: Known issued codes.

    Returns:
        First qualifying known code paired with the original scanned string,
        or None.

    Example:
        >>> match = find_single_substitution_match("PL-7A9-K2N", ["PL-7A9-K2M"])
        >>> match.code, match.scanned_code
        ('PL-7A9-K2M', 'PL-7A9-K2N')
    """
    scanned_body = _code_body(scanned_code)

    for known_code in known_codes:
        known_body = _code_body(known_code)
        if len(known_body) != len(scanned_body):
            continue
        if hamming_distance(scanned_body, known_body) == 1:
            position = next(
                i for i, (a, b) in enumerate(zip(scanned_body, known_body)) if a != b
            )
            return SubstitutionMatch(
                code=known_code, scanned_code=scanned_code, position=position
            )

    return None
