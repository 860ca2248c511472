"""
Actual participants of each match, computed from official results only.

This mirrors the resolution rules of ``bracket_logic`` but reads the result
set instead of a user's picks, so the "what really happened" overlay never
depends on anyone's predictions. Fixed seeds (opening round, bye seeds,
16-player Round of 16) are always known; everything else stays None until the
feeder match has a result.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from brackets.constants import (
    CONSOLATION_MATCH,
    DEFAULT_PLAYER_COUNT,
    FEEDER_ROUNDS,
    MATCHES_PER_ROUND,
    OPENING_ROUND_MATCHES,
    ROUND_OF_16_MATCHES,
    ROUND_OF_16_MATCHES_16P,
    MatchKey,
    Round,
    iter_match_keys,
)


@dataclass(frozen=True)
class ActualParticipants:
    actual_top: Optional[int]
    actual_bottom: Optional[int]


@dataclass(frozen=True)
class MatchResult:
    winner_seed: int
    loser_seed: int


UNKNOWN = ActualParticipants(actual_top=None, actual_bottom=None)


def field_value(obj: Any, name: str) -> Any:
    """Reads a field from a model instance or a plain mapping."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def result_key(result: Any) -> MatchKey:
    return MatchKey(field_value(result, "round"), field_value(result, "match_position"))


def build_result_map(results: Iterable[Any]) -> Dict[MatchKey, Any]:
    """Indexes results by match. A later duplicate replaces an earlier one."""
    return {result_key(result): result for result in results}


def _actual_winner(result_map, round, position):
    result = result_map.get(MatchKey(round, position))
    return field_value(result, "winner_seed") if result is not None else None


def _actual_loser(result_map, round, position):
    result = result_map.get(MatchKey(round, position))
    return field_value(result, "loser_seed") if result is not None else None


def get_actual_match_participants(
    result_map: Dict[MatchKey, Any],
    round: int,
    position: int,
    player_count: int = DEFAULT_PLAYER_COUNT,
) -> ActualParticipants:
    if round not in MATCHES_PER_ROUND or not 0 <= position < MATCHES_PER_ROUND[round]:
        return UNKNOWN

    if round == Round.OPENING:
        if player_count == 16:
            return UNKNOWN
        match = OPENING_ROUND_MATCHES[position]
        return ActualParticipants(match.top_seed, match.bottom_seed)

    if round == Round.ROUND_OF_16:
        if player_count == 16:
            match = ROUND_OF_16_MATCHES_16P[position]
            return ActualParticipants(match.top_seed, match.bottom_seed)
        match = ROUND_OF_16_MATCHES[position]
        return ActualParticipants(
            match.bye_seed,
            _actual_winner(result_map, Round.OPENING, match.opening_winner_position),
        )

    if round in FEEDER_ROUNDS:
        source_round, pairings = FEEDER_ROUNDS[round]
        match = pairings[position]
        return ActualParticipants(
            _actual_winner(result_map, source_round, match.top_source_position),
            _actual_winner(result_map, source_round, match.bottom_source_position),
        )

    if round == Round.CONSOLATION:
        return ActualParticipants(
            _actual_loser(result_map, Round.SEMIS, CONSOLATION_MATCH.top_source_position),
            _actual_loser(result_map, Round.SEMIS, CONSOLATION_MATCH.bottom_source_position),
        )

    return UNKNOWN


def compute_all_actual_participants(
    results: Iterable[Any], player_count: int = DEFAULT_PLAYER_COUNT
) -> Dict[MatchKey, ActualParticipants]:
    """Actual participants for every match of the format in one pass."""
    result_map = build_result_map(results)
    return {
        key: get_actual_match_participants(
            result_map, key.round, key.position, player_count
        )
        for key in iter_match_keys(player_count)
    }


def get_match_result_info(
    result_map: Dict[MatchKey, Any], round: int, position: int
) -> Optional[MatchResult]:
    result = result_map.get(MatchKey(round, position))
    if result is None:
        return None
    return MatchResult(
        winner_seed=field_value(result, "winner_seed"),
        loser_seed=field_value(result, "loser_seed"),
    )
