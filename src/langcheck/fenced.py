from collections.abc import Iterator

from langcheck.classes import Usage
from langcheck.errors import MarkerError


def find_fenced(text: str, start: str, end: str) -> Iterator[Usage]:
    """Yield every non-overlapping span enclosed by ``start`` and ``end``.

    Matching is leftmost-first and non-greedy: each span ends at the nearest
    ``end`` after its ``start``, and the search resumes right after that
    ``end``. A ``start`` with no ``end`` after it yields nothing.
    The location of a span is the offset of its ``start`` marker.
    """
    if not start or not end:
        raise MarkerError("fence markers must not be empty")

    pos = 0
    while True:
        index = text.find(start, pos)
        if index == -1:
            return
        body_start = index + len(start)
        body_end = text.find(end, body_start)
        if body_end == -1:
            # Unterminated; no later start can find an end either
            return
        yield Usage(index, text[body_start:body_end])
        pos = body_end + len(end)
