import re
from typing import Iterable, List, Tuple, Union

from .models import Subject

_CHUNKS = re.compile(r"(\d+)")


def semester_rank(label: str) -> Tuple[Tuple[int, Union[int, str]], ...]:
    """Natural-order key for semester labels ("Sem2" < "Sem10")."""
    parts = []
    for chunk in _CHUNKS.split(label):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk)))
        else:
            parts.append((1, chunk))
    return tuple(parts)


def order_subjects(subjects: Iterable[Subject]) -> List[Subject]:
    """Commit order for the engine.

    Labs before theory, then higher credits, then later semester, then name
    ascending. Sorting runs least significant key first; Python's sort is
    stable (also with ``reverse=True``) so earlier passes break later ties.
    """
    ordered = sorted(subjects, key=lambda s: s.name)
    ordered.sort(key=lambda s: semester_rank(s.semester), reverse=True)
    ordered.sort(key=lambda s: s.credits, reverse=True)
    ordered.sort(key=lambda s: 0 if s.is_lab else 1)
    return ordered
