"""PaperLink code format: alphabet, grammar, generation and extraction.

Core Components:
    - constants: Alphabet and ``PL-XXX-XXX`` grammar (single definition)
    - format: Generation, validation, normalization and extraction

Example:
    >>> from src.codes import generate_code, is_valid_code
    >>> is_valid_code(generate_code())
    True
"""

from .constants import (
    CODE_ALPHABET,
    CODE_ALPHABET_SET,
    CODE_BODY_LENGTH,
    CODE_LENGTH,
    CODE_PATTERN,
    CODE_PREFIX,
    CODE_SEPARATOR,
)
from .format import (
    CodeGenerationError,
    extract_codes,
    format_code,
    generate_code,
    generate_unique_code,
    is_valid_code,
    normalize_code,
)

__all__ = [
    # Constants
    "CODE_ALPHABET",
    "CODE_ALPHABET_SET",
    "CODE_BODY_LENGTH",
    "CODE_LENGTH",
    "CODE_PATTERN",
    "CODE_PREFIX",
    "CODE_SEPARATOR",
    # Format
    "CodeGenerationError",
    "generate_code",
    "generate_unique_code",
    "is_valid_code",
    "normalize_code",
    "extract_codes",
    "format_code",
]
