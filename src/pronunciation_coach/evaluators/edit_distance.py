"""Levenshtein distance and percentage similarity."""

from __future__ import annotations


def edit_distance(a: str, b: str) -> int:
    """Minimum single-character insertions, deletions and substitutions turning a into b."""
    rows, cols = len(a) + 1, len(b) + 1
    table = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if a[i - 1] == b[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = 1 + min(
                    table[i - 1][j - 1],  # substitution
                    table[i][j - 1],  # insertion
                    table[i - 1][j],  # deletion
                )
    return table[-1][-1]


def similarity_score(a: str, b: str) -> int:
    """Return similarity of two (already normalized) strings as an integer percentage.

    The distance is taken relative to the longer string. Two empty strings
    are a full match. Rounds half up. The distance never exceeds the longer
    length, so the result always lies in 0..100.
    """
    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    if not longer:
        return 100

    distance = edit_distance(longer, shorter)
    # round((n - d) / n * 100) in integer arithmetic
    n = len(longer)
    return ((n - distance) * 200 + n) // (2 * n)
