"""
Token Budgeting
===============
Character-count token estimation and structure-aware prompt truncation.

The estimate is a heuristic (about four characters per token), not a real
tokenizer. Treat every count produced here as approximate.
"""

import math
from typing import NamedTuple

from llm_compare.exceptions import ConfigurationError

TRUNCATION_NOTICE = "\n\n[Note: Document was truncated due to length constraints]"

# Characters per token when sizing the cut; the estimate itself uses 4.
CHARS_PER_TOKEN_BUDGET = 3.5

# Cut points must fall in the last 30% of the window.
MIN_CUT_RATIO = 0.7

# Ordered by preference.
BOUNDARIES: tuple[tuple[str, float], ...] = (
    ("\n\n", 1.0),  # paragraph
    (". ", 0.9),    # sentence
    ("\n", 0.8),    # line
    (", ", 0.6),    # clause
    (" ", 0.5),     # word
)


class FitResult(NamedTuple):
    """Outcome of fitting a prompt into a token budget."""

    text: str
    was_truncated: bool


def estimate_tokens(text: str) -> int:
    """Estimate the token count of ``text`` as ``ceil(len / 4)``."""
    return math.ceil(len(text) / 4)


def _char_budget(max_tokens: int) -> int:
    # Truncated text plus the notice must stay within max_tokens * 4 characters.
    return min(
        math.floor(max_tokens * CHARS_PER_TOKEN_BUDGET),
        max_tokens * 4 - len(TRUNCATION_NOTICE),
    )


def find_cut_point(window: str, char_budget: int) -> int:
    """
    Pick the best place to cut ``window``.

    Each separator contributes its last occurrence in the window, scored as
    ``weight * position / char_budget``. Positions before 70% of the budget are
    ignored. Falls back to ``char_budget`` when nothing qualifies.

    Returns:
        Index just past the winning separator
    """
    best_cut = char_budget
    best_score = 0.0

    for separator, weight in BOUNDARIES:
        position = window.rfind(separator)
        if position < 0 or position < char_budget * MIN_CUT_RATIO:
            continue
        score = weight * (position / char_budget)
        if score > best_score:
            best_score = score
            best_cut = position + len(separator)

    return best_cut


def fit_prompt(text: str, max_tokens: int) -> FitResult:
    """
    Fit ``text`` into ``max_tokens``, truncating at a natural boundary.

    Identical inputs always give identical outputs, and a truncated result
    always fits on a second pass.

    Args:
        text: Prompt to fit
        max_tokens: Token budget available to the prompt

    Returns:
        FitResult with the (possibly) shortened text and whether it was cut

    Raises:
        ConfigurationError: If the budget is not positive, or too small to
            hold the truncation notice when a cut is needed
    """
    if max_tokens <= 0:
        raise ConfigurationError(
            f"Prompt token budget must be positive, got {max_tokens}"
        )

    if estimate_tokens(text) <= max_tokens:
        return FitResult(text, False)

    if len(text) <= math.floor(max_tokens * CHARS_PER_TOKEN_BUDGET):
        return FitResult(text, False)

    char_budget = _char_budget(max_tokens)
    if char_budget <= 0:
        raise ConfigurationError(
            f"Prompt token budget of {max_tokens} cannot hold the truncation notice"
        )

    cut = find_cut_point(text[:char_budget], char_budget)
    truncated = (text[:cut].strip() + TRUNCATION_NOTICE).strip()

    return FitResult(truncated, True)
