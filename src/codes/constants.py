"""
Shared Constants for the PaperLink Code Format

Single source of truth for the code alphabet and grammar. The generator,
validator and extractor in ``src.codes.format`` all derive from these values,
so they cannot drift apart.
"""

import re

# ============================================================================
# Alphabet
# ============================================================================
# Handwriting-friendly symbols. Excluded: 0/O, 1/I, B/8 lookalikes, S (vs 5),
# Z (vs 2).
CODE_ALPHABET = "23456789ACDEFGHJKLMNPQRTUVWXY"
CODE_ALPHABET_SET = frozenset(CODE_ALPHABET)

# ============================================================================
# Grammar: PL-XXX-XXX
# ============================================================================
CODE_PREFIX = "PL-"
CODE_SEPARATOR = "-"
CODE_GROUP_LENGTH = 3
CODE_GROUP_COUNT = 2
CODE_BODY_LENGTH = CODE_GROUP_LENGTH * CODE_GROUP_COUNT  # 6 random characters
CODE_LENGTH = len(CODE_PREFIX) + CODE_BODY_LENGTH + (CODE_GROUP_COUNT - 1)  # 10

_GROUP = f"[{CODE_ALPHABET}]{{{CODE_GROUP_LENGTH}}}"
CODE_PATTERN = re.escape(CODE_PREFIX) + re.escape(CODE_SEPARATOR).join(
    [_GROUP] * CODE_GROUP_COUNT
)
CODE_REGEX = re.compile(CODE_PATTERN)
