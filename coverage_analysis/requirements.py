"""
requirements.py

Splits Acceptance Criteria (AC) and Business Rules (BR) blocks into discrete
requirement items.

Features:
- Recognizes blocks that carry no usable data ("N/A", "No acceptance criteria extracted ...").
- Splits on line breaks and on sentence-ending periods.
- Drops short fragments and bare section headings.
"""

import re
import logging
from typing import List, Optional, Tuple, Union

from coverage_analysis.models import RequirementBlock, RequirementItem

logger = logging.getLogger(__name__)

# Items at or below this length are treated as noise (stray fragments, labels).
MIN_ITEM_LENGTH = 10

# Split on line breaks and on a period followed by whitespace or end of text.
# "e.g. foo" splits after "e.g"; kept for compatibility with Given/When/Then prose.
ITEM_SPLIT_RE = re.compile(r'\n|\.(?=\s|$)')

# Placeholder values the extraction step emits when a section is absent.
NO_DATA_VALUES = {"n/a", "na", "none"}

# "Nothing found" message per block label; only checked against its own block.
NO_DATA_PHRASES = {
    "AC": "no acceptance criteria",
    "BR": "no business rule",
}

# A bare section heading such as "Acceptance Criteria:" or "Business Rules".
SECTION_LABEL_RE = re.compile(r'^(?:acceptance\s+criteria|business\s+rules?)\s*:?$', re.IGNORECASE)

BlockInput = Union[RequirementBlock, str, None]


def has_usable_data(text: Optional[str], label: str = "AC") -> bool:
    """
    Returns False for empty text, "N/A"-style placeholders and the "nothing
    found" message of the block's own label, True otherwise.

    Args:
        text (Optional[str]): The block text.
        label (str): "AC" checks for "no acceptance criteria", "BR" for
            "no business rule". Other labels only check the placeholders.
    """
    if not text or not text.strip():
        return False
    if text.strip().lower() in NO_DATA_VALUES:
        return False
    phrase = NO_DATA_PHRASES.get(label)
    return phrase is None or phrase not in text.lower()


def _is_noise(candidate: str) -> bool:
    return len(candidate) <= MIN_ITEM_LENGTH or SECTION_LABEL_RE.match(candidate) is not None


def split_into_items(block: BlockInput, label: str = "AC") -> List[RequirementItem]:
    """
    Splits a requirement block into discrete requirement items.

    Lines are split first, then sentences within a line, so run-on
    "Given X. When Y. Then Z" prose yields one item per sentence. Candidates
    are trimmed; short fragments and bare section labels are dropped.

    Args:
        block: A RequirementBlock, or raw block text (labelled with `label`), or None.
        label (str): Source label used when `block` is a plain string.

    Returns:
        List[RequirementItem]: Items in input order, numbered from 1. Empty when
        the block carries no usable data.
    """
    if isinstance(block, RequirementBlock):
        text, label = block.text, block.label
    else:
        text = block
    if text is not None and not isinstance(text, str):
        text = str(text)

    if not has_usable_data(text, label):
        return []

    candidates = [c.strip() for c in ITEM_SPLIT_RE.split(text)]
    kept = [c for c in candidates if not _is_noise(c)]
    logger.debug(f"{label}: {len(kept)} items kept out of {len(candidates)} candidates")
    return [RequirementItem(text=c, source_label=label, index=i) for i, c in enumerate(kept, start=1)]


def split_blocks(
    acceptance_criteria: Optional[str],
    business_rules: Optional[str],
) -> Tuple[List[RequirementItem], List[RequirementItem]]:
    """Splits the AC and BR blocks of one story into (ac_items, br_items)."""
    return (
        split_into_items(RequirementBlock(acceptance_criteria or "", "AC")),
        split_into_items(RequirementBlock(business_rules or "", "BR")),
    )
