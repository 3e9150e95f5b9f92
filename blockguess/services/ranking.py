"""
Winner ranking for a finished round.

Guesses are ordered by distance to the actual value, then by who submitted
first. The winner is the first of that order and the runner-up the second.
"""

from dataclasses import dataclass
from typing import Optional

from blockguess.models.guess import Guess


@dataclass(frozen=True)
class RankedGuess:
    guess: Guess
    distance: int


@dataclass(frozen=True)
class RankingResult:
    winner: Optional[str]
    runner_up: Optional[str]
    is_exact_match: bool
    ranked: list[RankedGuess]


def rank_guesses(actual_value: int, guesses: list[Guess]) -> list[RankedGuess]:
    """
    Sort guesses by (distance, submitted_at).

    guess_id breaks the remaining ties, so two guesses in the same second keep
    the order in which they were stored.
    """
    ranked = [
        RankedGuess(guess=g, distance=abs(g.guess_value - actual_value))
        for g in guesses
    ]
    ranked.sort(key=lambda r: (r.distance, r.guess.submitted_at, r.guess.guess_id))
    return ranked


def compute_winners(actual_value: int, guesses: list[Guess]) -> RankingResult:
    """
    Compute winner, runner-up and jackpot flag.

    No guesses is a valid outcome: nobody wins and nothing is raised.
    """
    ranked = rank_guesses(actual_value, guesses)

    winner = ranked[0].guess.user_id if ranked else None
    runner_up = ranked[1].guess.user_id if len(ranked) > 1 else None
    is_exact_match = bool(ranked) and ranked[0].distance == 0

    return RankingResult(
        winner=winner,
        runner_up=runner_up,
        is_exact_match=is_exact_match,
        ranked=ranked,
    )
