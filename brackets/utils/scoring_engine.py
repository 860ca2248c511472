"""
This file contains the scoring engine for bracket predictions.

A bracket is scored pick by pick against the official results:

1. Results are indexed by match (round, position).
2. A pick earns the configured points of its round when its winner equals the
   recorded winner of the same match. The consolation match is worth the
   semifinal value. There is no partial credit and no penalty.
3. Two tiebreak values are derived from the finals:
   - ``correct_champion``: None until a finals result exists, then whether
     the finals pick matches it (False when the finals was never picked).
   - ``game_score_diff``: |predicted - actual| winner games plus loser games,
     only when a finals result exists and both game counts were predicted.

The engine never raises for missing data; incomplete inputs yield None.

---
Ordering contract for leaderboards (see ``ranking_key``):
score desc, correct_champion (True > False > None), game_score_diff asc
(None last), total_correct desc, earliest submission first.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from brackets.constants import (
    DEFAULT_PLAYER_COUNT,
    MATCHES_PER_ROUND,
    MatchKey,
    Round,
    rounds_for_player_count,
)
from brackets.utils.actual_participants import build_result_map, field_value

FINALS_KEY = MatchKey(Round.FINALS, 0)

# Scoring config key per round; consolation reuses the semifinal value
ROUND_POINT_KEYS: Dict[int, str] = {
    Round.OPENING: "opening",
    Round.ROUND_OF_16: "round_of_16",
    Round.QUARTERS: "quarters",
    Round.SEMIS: "semis",
    Round.FINALS: "finals",
    Round.CONSOLATION: "semis",
}


@dataclass
class FinalGamesGuess:
    """A user's predicted game score for the finals."""

    winner_games: Optional[int] = None
    loser_games: Optional[int] = None


@dataclass
class PickEvaluation:
    """Outcome of a single pick."""

    match_key: MatchKey
    predicted_winner_seed: int
    is_correct: Optional[bool]
    actual_winner_seed: Optional[int]
    actual_loser_seed: Optional[int]
    points: int


@dataclass
class ScoringResult:
    score: int
    total_correct: int
    correct_champion: Optional[bool]
    game_score_diff: Optional[int]
    breakdown: List[PickEvaluation] = field(default_factory=list)


def get_points_for_round(round: int, scoring_config: Mapping[str, int]) -> int:
    key = ROUND_POINT_KEYS.get(round)
    if key is None:
        return 0
    return scoring_config.get(key, 0)


def pick_key(pick: Any) -> MatchKey:
    return MatchKey(field_value(pick, "round"), field_value(pick, "match_position"))


def evaluate_pick(pick: Any, result_map: Dict[MatchKey, Any], scoring_config) -> PickEvaluation:
    key = pick_key(pick)
    predicted = field_value(pick, "winner_seed")
    result = result_map.get(key)

    if result is None:
        return PickEvaluation(
            match_key=key,
            predicted_winner_seed=predicted,
            is_correct=None,
            actual_winner_seed=None,
            actual_loser_seed=None,
            points=0,
        )

    actual_winner = field_value(result, "winner_seed")
    is_correct = predicted == actual_winner
    return PickEvaluation(
        match_key=key,
        predicted_winner_seed=predicted,
        is_correct=is_correct,
        actual_winner_seed=actual_winner,
        actual_loser_seed=field_value(result, "loser_seed"),
        points=get_points_for_round(key.round, scoring_config) if is_correct else 0,
    )


def calculate_bracket_score(
    picks: Iterable[Any],
    results: Iterable[Any],
    scoring_config: Mapping[str, int],
    final_games: Optional[FinalGamesGuess] = None,
) -> ScoringResult:
    """
    Scores a (possibly partial) set of picks against the results entered so far.

    ``picks`` and ``results`` may be model instances or mappings exposing
    ``round`` and ``match_position`` plus ``winner_seed`` (and for results
    ``loser_seed``, ``winner_games``, ``loser_games``).
    """
    final_games = final_games or FinalGamesGuess()
    result_map = build_result_map(results)
    picks = list(picks)

    breakdown = [evaluate_pick(pick, result_map, scoring_config) for pick in picks]
    score = sum(item.points for item in breakdown)
    total_correct = sum(1 for item in breakdown if item.is_correct)

    correct_champion = None
    game_score_diff = None

    finals_result = result_map.get(FINALS_KEY)
    if finals_result is not None:
        finals_pick = next((p for p in picks if pick_key(p) == FINALS_KEY), None)
        if finals_pick is not None:
            correct_champion = field_value(finals_pick, "winner_seed") == field_value(
                finals_result, "winner_seed"
            )
        else:
            correct_champion = False

        if final_games.winner_games is not None and final_games.loser_games is not None:
            game_score_diff = abs(
                final_games.winner_games - field_value(finals_result, "winner_games")
            ) + abs(final_games.loser_games - field_value(finals_result, "loser_games"))

    return ScoringResult(
        score=score,
        total_correct=total_correct,
        correct_champion=correct_champion,
        game_score_diff=game_score_diff,
        breakdown=breakdown,
    )


def get_max_score(
    scoring_config: Mapping[str, int], player_count: int = DEFAULT_PLAYER_COUNT
) -> int:
    """Score of a fully correct bracket for the given format."""
    return sum(
        MATCHES_PER_ROUND[round_] * get_points_for_round(round_, scoring_config)
        for round_ in rounds_for_player_count(player_count)
    )


def ranking_key(
    score: int,
    correct_champion: Optional[bool],
    game_score_diff: Optional[int],
    total_correct: int,
    submitted_at: Any,
):
    """Ascending sort key implementing the leaderboard tiebreak order."""
    champion_rank = {True: 0, False: 1}.get(correct_champion, 2)
    diff_rank = (0, game_score_diff) if game_score_diff is not None else (1, 0)
    return (-score, champion_rank, diff_rank, -total_correct, submitted_at)
