"""
Shared field helpers for request schemas
"""

from typing import Iterable, List, Optional

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


def normalize_labels(values: Optional[Iterable[str]]) -> List[str]:
    """Strip blanks and drop duplicates, keeping first-seen order; None becomes []"""
    if values is None:
        return []
    seen: List[str] = []
    for value in values:
        label = value.strip()
        if label and label not in seen:
            seen.append(label)
    return seen
