"""Code generation, validation and extraction for PaperLink codes.

Codes have the shape ``PL-XXX-XXX`` where every ``X`` is drawn from
:data:`~src.codes.constants.CODE_ALPHABET`. This module owns the round trip
between free text (typically OCR output) and codes.

Example:
    >>> code = generate_code()
    >>> is_valid_code(code)
    True
    >>> extract_codes("noise PL-7a9-k2m noise")
    ['PL-7A9-K2M']
"""

import logging
import random
from typing import Callable, List, Optional

from .constants import (
    CODE_ALPHABET,
    CODE_BODY_LENGTH,
    CODE_GROUP_LENGTH,
    CODE_PREFIX,
    CODE_REGEX,
    CODE_SEPARATOR,
)

logger = logging.getLogger(__name__)


class CodeGenerationError(RuntimeError):
    """Raised when no free code was found within the attempt budget."""


def _join_groups(body: str) -> str:
    groups = [
        body[i : i + CODE_GROUP_LENGTH]
        for i in range(0, len(body), CODE_GROUP_LENGTH)
    ]
    return CODE_PREFIX + CODE_SEPARATOR.join(groups)


def generate_code(rng: Optional[random.Random] = None) -> str:
    """Generate a new code with uniformly random characters.

    Each of the six characters is drawn independently (with replacement)
    from the code alphabet.

    Note:
        This does NOT check for collisions with already issued codes. Use
        :func:`generate_unique_code` or check against the known-code set.

    Args:
        rng: Optional random source for reproducible output. Defaults to the
            module-level ``random`` generator.

    Returns:
        Code string in ``PL-XXX-XXX`` form.

    Example:
        >>> generate_code(random.Random(7)).startswith("PL-")
        True
    """
    source = rng if rng is not None else random
    body = "".join(source.choices(CODE_ALPHABET, k=CODE_BODY_LENGTH))
    return _join_groups(body)


def generate_unique_code(
    code_exists: Callable[[str], bool],
    max_attempts: int = 10,
    rng: Optional[random.Random] = None,
) -> str:
    """Generate a code that the caller reports as unused.

    Args:
        code_exists: Predicate answering whether a code is already issued
            (usually a lookup against the persistence layer).
        max_attempts: Number of codes to try before giving up.
        rng: Optional random source, passed to :func:`generate_code`.

    Returns:
        A code for which ``code_exists`` returned False.

    Raises:
        ValueError: If max_attempts is smaller than 1.
        CodeGenerationError: If every attempted code was already taken.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    for attempt in range(1, max_attempts + 1):
        code = generate_code(rng)
        if not code_exists(code):
            return code
        logger.debug(f"Code collision on {code} (attempt {attempt}/{max_attempts})")

    raise CodeGenerationError(
        f"Failed to generate a unique code after {max_attempts} attempts"
    )


def is_valid_code(code: str) -> bool:
    """Check whether a string is a well-formed code.

    Comparison is case-insensitive; surrounding whitespace is NOT tolerated
    (call :func:`normalize_code` first for raw input).

    Example:
        >>> is_valid_code("pl-7a9-k2m")
        True
        >>> is_valid_code("PL-0A9-K2M")  # '0' is not in the alphabet
        False
    """
    if not isinstance(code, str) or not code:
        return False
    return CODE_REGEX.fullmatch(code.upper()) is not None


def normalize_code(code: str) -> str:
    """Uppercase and trim a code. Does not validate the grammar."""
    return code.upper().strip()


def extract_codes(text: str) -> List[str]:
    """Pull every code out of arbitrary text.

    Matching is case-insensitive; results are uppercased and de-duplicated in
    order of first appearance.

    Args:
        text: Free text such as a full OCR transcript.

    Returns:
        List of codes found. Empty when the text contains none.

    Example:
        >>> extract_codes("PL-7A9-K2M and pl-7a9-k2m, PL-QA9-K2M")
        ['PL-7A9-K2M', 'PL-QA9-K2M']
    """
    if not text:
        return []
    matches = CODE_REGEX.findall(text.upper())
    return list(dict.fromkeys(matches))


def format_code(chars: str) -> str:
    """Build a code from six hand-entered characters.

    Hyphens, whitespace and a leading ``PL-`` prefix are ignored, so
    ``"7a9k2m"``, ``"7A9-K2M"`` and ``"PL-7A9-K2M"`` all produce
    ``"PL-7A9-K2M"``. Characters are not checked against the alphabet; use
    :func:`is_valid_code` on the result.

    Raises:
        ValueError: If the input does not contain exactly six characters.
    """
    cleaned = "".join(chars.split()).upper()
    if cleaned.startswith(CODE_PREFIX):
        cleaned = cleaned[len(CODE_PREFIX) :]
    cleaned = cleaned.replace(CODE_SEPARATOR, "")

    if len(cleaned) != CODE_BODY_LENGTH:
        raise ValueError(
            f"Expected {CODE_BODY_LENGTH} characters, got {len(cleaned)}"
        )
    return _join_groups(cleaned)
