"""OCR confusion correction candidates for PaperLink codes.

Handwriting OCR regularly confuses a handful of glyphs (``0``/``Q``,
``2``/``7``, ...). Given one raw reading, this module produces the reading
itself plus every variant obtained by replacing ONE character with a
confusable alphabet character.

Only single-position substitutions are generated, so the candidate set stays
within ``1 + len(reading) * max_confusion_list_length``. Readings with two or
more misread characters are left to the edit-distance pass of the matcher.

Example:
    >>> generate_candidates("PL-0A9-K2M")
    ['PL-0A9-K2M', 'PL-QA9-K2M', 'PL-DA9-K2M', 'PL-0A9-K7M']
"""

import logging
import re
from typing import Dict, List, Optional

from src.codes.constants import CODE_ALPHABET_SET, CODE_SEPARATOR

from .config_loader import DEFAULT_CONFUSIONS, CorrectionConfig

logger = logging.getLogger(__name__)

# Anything other than letters, digits and hyphens is OCR noise
_NOISE = re.compile(r"[^A-Z0-9-]")


def normalize_reading(raw: str) -> str:
    """Uppercase and strip everything except ``A-Z``, ``0-9`` and ``-``."""
    return _NOISE.sub("", raw.upper())


def generate_candidates(
    raw: str,
    confusions: Optional[Dict[str, List[str]]] = None,
) -> List[str]:
    """Generate single-substitution corrections for an OCR reading.

    Args:
        raw: Raw OCR text; it does not need to satisfy the code grammar.
        confusions: Confusion map to use. Defaults to ``DEFAULT_CONFUSIONS``.

    Returns:
        De-duplicated candidates. The normalized reading is always first,
        followed by substitutions in position order and confusion-list order.
    """
    table = DEFAULT_CONFUSIONS if confusions is None else confusions
    normalized = normalize_reading(raw)

    candidates: Dict[str, None] = {normalized: None}
    for i, char in enumerate(normalized):
        if char == CODE_SEPARATOR:
            continue
        for replacement in table.get(char, ()):
            # Only substitutions that land in the alphabet can be real codes
            if replacement not in CODE_ALPHABET_SET or replacement == char:
                continue
            candidates[normalized[:i] + replacement + normalized[i + 1 :]] = None

    logger.debug(f"Generated {len(candidates)} candidates for {normalized!r}")
    return list(candidates)


class CandidateGenerator:
    """Configuration-driven OCR candidate generator.

    Args:
        config: Correction configuration with the confusion map.

    Example:
        >>> generator = CandidateGenerator(CorrectionConfig())
        >>> "PL-QA9-K2M" in generator.generate("pl-0a9-k2m")
        True
    """

    def __init__(self, config: CorrectionConfig):
        self.config = config
        self.confusions = config.confusions

    def generate(self, raw: str) -> List[str]:
        """Generate candidates, or only the normalized reading if disabled."""
        if not self.config.enabled:
            return [normalize_reading(raw)]
        return generate_candidates(raw, self.confusions)

    def max_candidates_for(self, raw: str) -> int:
        """Upper bound on ``len(self.generate(raw))``."""
        longest = max((len(subs) for subs in self.confusions.values()), default=0)
        return 1 + len(normalize_reading(raw)) * longest
