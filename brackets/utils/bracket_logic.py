"""
Pick propagation for a single user's bracket.

Every function here is a pure function of a prediction map
(``Dict[MatchKey, int]``, predicted winning seed per picked match). Nothing
mutates its input: ``apply_pick`` and ``clear_downstream_picks`` always return
a fresh dict, so callers holding an older map keep seeing the old state.

Participants of a match are never stored. They are derived from the map on
every query by following the topology in ``brackets.constants``:

- OPENING: fixed seeds (24-player only)
- ROUND_OF_16: bye seed + opening winner (24-player), or fixed seeds (16-player)
- QUARTERS / SEMIS / FINALS: winners of the feeder matches
- CONSOLATION: losers of both semifinals
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

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
    parse_match_key,
)

PicksMap = Mapping[MatchKey, int]


@dataclass(frozen=True)
class Participants:
    top_seed: Optional[int]
    bottom_seed: Optional[int]


EMPTY_PARTICIPANTS = Participants(top_seed=None, bottom_seed=None)


def _in_range(round, position):
    return round in MATCHES_PER_ROUND and 0 <= position < MATCHES_PER_ROUND[round]


def get_match_winner(picks: PicksMap, round: int, position: int) -> Optional[int]:
    """Predicted winner of a match, or None if undecided."""
    return picks.get(MatchKey(round, position))


def get_match_participants(
    picks: PicksMap, round: int, position: int, player_count: int = DEFAULT_PLAYER_COUNT
) -> Participants:
    """
    Resolves the two participants of a match from upstream picks.

    Each side is None while its feeder match is undecided. Unknown rounds or
    positions resolve to (None, None).
    """
    if not _in_range(round, position):
        return EMPTY_PARTICIPANTS

    if round == Round.OPENING:
        if player_count == 16:
            return EMPTY_PARTICIPANTS
        match = OPENING_ROUND_MATCHES[position]
        return Participants(match.top_seed, match.bottom_seed)

    if round == Round.ROUND_OF_16:
        if player_count == 16:
            match = ROUND_OF_16_MATCHES_16P[position]
            return Participants(match.top_seed, match.bottom_seed)
        match = ROUND_OF_16_MATCHES[position]
        opening_winner = get_match_winner(
            picks, Round.OPENING, match.opening_winner_position
        )
        return Participants(match.bye_seed, opening_winner)

    if round in FEEDER_ROUNDS:
        source_round, pairings = FEEDER_ROUNDS[round]
        match = pairings[position]
        return Participants(
            get_match_winner(picks, source_round, match.top_source_position),
            get_match_winner(picks, source_round, match.bottom_source_position),
        )

    if round == Round.CONSOLATION:
        return Participants(
            get_match_loser(
                picks, Round.SEMIS, CONSOLATION_MATCH.top_source_position, player_count
            ),
            get_match_loser(
                picks, Round.SEMIS, CONSOLATION_MATCH.bottom_source_position, player_count
            ),
        )

    return EMPTY_PARTICIPANTS


def get_match_loser(
    picks: PicksMap, round: int, position: int, player_count: int = DEFAULT_PLAYER_COUNT
) -> Optional[int]:
    """The participant that did not win, or None if undecided or inconsistent."""
    winner = get_match_winner(picks, round, position)
    if winner is None:
        return None

    participants = get_match_participants(picks, round, position, player_count)
    if participants.top_seed == winner:
        return participants.bottom_seed
    if participants.bottom_seed == winner:
        return participants.top_seed
    return None


def clear_downstream_picks(
    picks: PicksMap, from_round: int, seed_to_clear: int
) -> Dict[MatchKey, int]:
    """
    Removes every pick in a round after ``from_round`` whose winner is
    ``seed_to_clear``.

    This scans by seed value across all later rounds, it does not walk the
    topology edges from the changed match.
    """
    new_picks = dict(picks)
    for round_ in Round:
        if round_ <= from_round:
            continue
        for position in range(MATCHES_PER_ROUND[round_]):
            key = MatchKey(round_, position)
            if new_picks.get(key) == seed_to_clear:
                del new_picks[key]
    return new_picks


def apply_pick(
    picks: PicksMap, round: int, position: int, winner_seed: int
) -> Dict[MatchKey, int]:
    """
    Applies a pick with toggle semantics and cascade clearing.

    Picking the current winner again deselects it. Either way, later-round
    picks of the previous winner are removed.
    """
    key = MatchKey(round, position)
    old_winner = picks.get(key)
    new_picks = dict(picks)

    if old_winner == winner_seed:
        del new_picks[key]
        return clear_downstream_picks(new_picks, round, winner_seed)

    new_picks[key] = winner_seed
    if old_winner is not None:
        new_picks = clear_downstream_picks(new_picks, round, old_winner)
    return new_picks


def compute_all_participants(
    picks: PicksMap, player_count: int = DEFAULT_PLAYER_COUNT
) -> Dict[MatchKey, Participants]:
    """Participants of every match of the format, keyed in round order."""
    return {
        key: get_match_participants(picks, key.round, key.position, player_count)
        for key in iter_match_keys(player_count)
    }


def picks_from_wire(data: Mapping[str, int]) -> Dict[MatchKey, int]:
    """Converts ``{"round-position": seed}`` into a prediction map."""
    return {parse_match_key(key): int(seed) for key, seed in data.items()}


def picks_to_wire(picks: PicksMap) -> Dict[str, int]:
    return {str(key): seed for key, seed in sorted(picks.items())}
