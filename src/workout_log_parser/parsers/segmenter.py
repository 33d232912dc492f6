"""Split a preprocessed workout log into one fragment per exercise mention."""
from typing import List

# Longest first so " and then " is consumed before " then "
DELIMITERS = sorted(
    [
        ". ",
        ", then ",
        " then ",
        " and then ",
        " also did ",
        " also ",
        " next ",
        " after that ",
        " followed by ",
    ],
    key=lambda d: (-len(d), d),
)

TRAILING_PUNCTUATION = ".,;:!?"


def segment(text: str) -> List[str]:
    """Fragment text on sequencing phrases, dropping empty pieces."""
    if not text:
        return []

    pieces = [text]
    for delimiter in DELIMITERS:
        pieces = [part for piece in pieces for part in piece.split(delimiter)]

    segments = []
    for piece in pieces:
        cleaned = piece.strip().rstrip(TRAILING_PUNCTUATION).strip()
        if cleaned:
            segments.append(cleaned)
    return segments
