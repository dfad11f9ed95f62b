"""Fuzzy matching for project names.

Subsequence matching with positional bonuses:
- Exact match (case-insensitive): MAX_SCORE, nothing else reaches it
- Subsequence match: scored from consecutive runs, word-boundary hits,
  how tightly the matched characters cluster, and name length
- Not a subsequence: 0

Each bonus rule is its own function so it can be tested on its own.
"""

from __future__ import annotations

# Returned for every name when the query is empty
NEUTRAL_SCORE = 1.0

# Exact matches score this; every other match stays strictly below it
MAX_SCORE = 12.0

MATCH_BASE = 1.0
CONSECUTIVE_WEIGHT = 4.0
BOUNDARY_WEIGHT = 3.0
SPAN_WEIGHT = 2.0
LENGTH_WEIGHT = 1.0  # length_factor < 1, so non-exact scores stay under 11

# Length at which length_factor drops to 0.5
LENGTH_PIVOT = 10


def is_word_boundary(text: str, index: int) -> bool:
    """Check whether a character starts a word.

    A word starts at the beginning of the string, after any
    non-alphanumeric separator (-, _, /, ., space), or where a run of
    digits turns into letters ("2024notes" starts a word at "n").
    """
    if index == 0:
        return True
    prev = text[index - 1]
    if not prev.isalnum():
        return True
    return prev.isdigit() and text[index].isalpha()


def find_positions(query: str, text: str, start: int = 0) -> list[int] | None:
    """Greedily locate each query character in text, in order.

    Both strings are expected lowercased. Returns the matched indexes,
    or None if some character could not be placed.
    """
    positions: list[int] = []
    pos = start
    for char in query:
        pos = text.find(char, pos)
        if pos == -1:
            return None
        positions.append(pos)
        pos += 1
    return positions


def consecutive_bonus(positions: list[int]) -> int:
    """Count matched characters that directly follow the previous match."""
    return sum(1 for a, b in zip(positions, positions[1:]) if b == a + 1)


def boundary_bonus(text: str, positions: list[int]) -> int:
    """Count matched characters that start a word."""
    return sum(1 for pos in positions if is_word_boundary(text, pos))


def span_factor(query_len: int, positions: list[int]) -> float:
    """Ratio of matched characters to the stretch of text they cover.

    1.0 for a contiguous match, smaller as the match spreads out.
    """
    if not positions:
        return 0.0
    span = positions[-1] - positions[0] + 1
    return query_len / span


def length_factor(text: str) -> float:
    """Shorter names score higher: 1.0 for empty, 0.5 at LENGTH_PIVOT."""
    return LENGTH_PIVOT / (len(text) + LENGTH_PIVOT)


def score_positions(query_len: int, text: str, positions: list[int]) -> float:
    """Score one alignment of a query against lowercased text."""
    if query_len > 1:
        consecutive = consecutive_bonus(positions) / (query_len - 1)
    else:
        consecutive = 1.0
    boundary = boundary_bonus(text, positions) / query_len

    return (
        MATCH_BASE
        + CONSECUTIVE_WEIGHT * consecutive
        + BOUNDARY_WEIGHT * boundary
        + SPAN_WEIGHT * span_factor(query_len, positions)
        + LENGTH_WEIGHT * length_factor(text)
    )


def match(query: str, label: str) -> float:
    """Score how well query fuzzy-matches label.

    Returns:
        NEUTRAL_SCORE for an empty query, MAX_SCORE for an exact
        (case-insensitive) match, 0.0 when query is not a subsequence
        of label, otherwise the best score over every alignment.
    """
    if not query:
        return NEUTRAL_SCORE

    query_lower = query.lower()
    text = label.lower()

    if query_lower == text:
        return MAX_SCORE

    best = 0.0
    first = query_lower[0]
    for start, char in enumerate(text):
        if char != first:
            continue
        positions = find_positions(query_lower, text, start)
        if positions is None:
            # Later starts only have less text to work with
            break
        best = max(best, score_positions(len(query_lower), text, positions))

    return best
