from __future__ import annotations

import re
from typing import List, Set

from eclipse_spaces.errors import InvalidSelectionToken, NoSpacesSelected, SelectionOutOfRange

_SEPARATORS = re.compile(r"[,，\s]+")
_RANGE = re.compile(r"^([0-9]+)-([0-9]+)$")
_NUMBER = re.compile(r"^[0-9]+$")


def parse_selection(text: str, available_count: int) -> List[int]:
    """Parse "1,3-4 6" style input into sorted zero-based indices.

    Numbers are 1-based on input. A single bad token or out-of-range number fails
    the whole selection.
    """
    tokens = [t for t in _SEPARATORS.split(text or "") if t]
    if not tokens:
        raise NoSpacesSelected()

    picked: Set[int] = set()
    for tok in tokens:
        m = _RANGE.match(tok)
        if m:
            start, end = int(m.group(1)), int(m.group(2))
            if start > end:
                raise InvalidSelectionToken(tok)
        elif _NUMBER.match(tok):
            start = end = int(tok)
        else:
            raise InvalidSelectionToken(tok)

        for number in (start, end):
            if number < 1 or number > available_count:
                raise SelectionOutOfRange(number, available_count)
        picked.update(range(start - 1, end))

    return sorted(picked)
