# Bracket topology constants
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

from django.db import models

from .exceptions import InvalidMatchKeyError


class Round(models.IntegerChoices):
    """Rounds in dependency order. CONSOLATION is a sibling of FINALS."""

    OPENING = 0, "Opening Round"
    ROUND_OF_16 = 1, "Round of 16"
    QUARTERS = 2, "Quarterfinals"
    SEMIS = 3, "Semifinals"
    FINALS = 4, "Finals"
    CONSOLATION = 5, "3rd Place"


ROUND_NAMES: Dict[int, str] = {r.value: r.label for r in Round}

# Number of matches in each round
MATCHES_PER_ROUND: Dict[int, int] = {
    Round.OPENING: 8,
    Round.ROUND_OF_16: 8,
    Round.QUARTERS: 4,
    Round.SEMIS: 2,
    Round.FINALS: 1,
    Round.CONSOLATION: 1,
}

SUPPORTED_PLAYER_COUNTS: Tuple[int, int] = (16, 24)
DEFAULT_PLAYER_COUNT: int = 24

PLAYER_COUNT_CHOICES: List[Tuple[int, str]] = [
    (count, f"{count} players") for count in SUPPORTED_PLAYER_COUNTS
]

# Seeds that skip the opening round in the 24-player format
BYE_SEEDS: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8)

# Best-of-7 finals
MAX_WINNER_GAMES: int = 4
MAX_LOSER_GAMES: int = 3


@dataclass(frozen=True, order=True)
class MatchKey:
    """Composite (round, position) identifier of a match."""

    round: int
    position: int

    def __post_init__(self):
        # Round members and plain ints must hash and print the same
        object.__setattr__(self, "round", int(self.round))
        object.__setattr__(self, "position", int(self.position))

    def __str__(self) -> str:
        return f"{self.round}-{self.position}"

    @property
    def round_name(self) -> str:
        return ROUND_NAMES.get(self.round, "Unknown")


@dataclass(frozen=True)
class FixedPairing:
    position: int
    top_seed: int
    bottom_seed: int


@dataclass(frozen=True)
class ByePairing:
    position: int
    bye_seed: int
    opening_winner_position: int


@dataclass(frozen=True)
class FeederPairing:
    position: int
    top_source_position: int
    bottom_source_position: int


# Opening round: seeds 9-24 play, top + bottom always sums to 33
OPENING_ROUND_MATCHES: Tuple[FixedPairing, ...] = tuple(
    FixedPairing(position=i, top_seed=9 + i, bottom_seed=24 - i) for i in range(8)
)

# 24-player Round of 16: bye seed vs winner of an opening match
ROUND_OF_16_MATCHES: Tuple[ByePairing, ...] = (
    ByePairing(0, bye_seed=1, opening_winner_position=7),  # 1 vs 16/17
    ByePairing(1, bye_seed=8, opening_winner_position=0),  # 8 vs 9/24
    ByePairing(2, bye_seed=4, opening_winner_position=4),  # 4 vs 13/20
    ByePairing(3, bye_seed=5, opening_winner_position=3),  # 5 vs 12/21
    ByePairing(4, bye_seed=2, opening_winner_position=6),  # 2 vs 15/18
    ByePairing(5, bye_seed=7, opening_winner_position=1),  # 7 vs 10/23
    ByePairing(6, bye_seed=3, opening_winner_position=5),  # 3 vs 14/19
    ByePairing(7, bye_seed=6, opening_winner_position=2),  # 6 vs 11/22
)

# 16-player Round of 16: direct pairings, same quarterfinal flow as 24-player
ROUND_OF_16_MATCHES_16P: Tuple[FixedPairing, ...] = (
    FixedPairing(0, top_seed=1, bottom_seed=16),
    FixedPairing(1, top_seed=8, bottom_seed=9),
    FixedPairing(2, top_seed=4, bottom_seed=13),
    FixedPairing(3, top_seed=5, bottom_seed=12),
    FixedPairing(4, top_seed=2, bottom_seed=15),
    FixedPairing(5, top_seed=7, bottom_seed=10),
    FixedPairing(6, top_seed=3, bottom_seed=14),
    FixedPairing(7, top_seed=6, bottom_seed=11),
)

QUARTERS_MATCHES: Tuple[FeederPairing, ...] = (
    FeederPairing(0, top_source_position=0, bottom_source_position=1),
    FeederPairing(1, top_source_position=2, bottom_source_position=3),
    FeederPairing(2, top_source_position=4, bottom_source_position=5),
    FeederPairing(3, top_source_position=6, bottom_source_position=7),
)

SEMIS_MATCHES: Tuple[FeederPairing, ...] = (
    FeederPairing(0, top_source_position=0, bottom_source_position=1),
    FeederPairing(1, top_source_position=2, bottom_source_position=3),
)

# Winners of both semifinals
FINALS_MATCH = FeederPairing(0, top_source_position=0, bottom_source_position=1)

# Losers of both semifinals
CONSOLATION_MATCH = FeederPairing(0, top_source_position=0, bottom_source_position=1)

# Winner-edge feeders: round -> (source round, pairings)
FEEDER_ROUNDS: Dict[int, Tuple[int, Tuple[FeederPairing, ...]]] = {
    Round.QUARTERS: (Round.ROUND_OF_16, QUARTERS_MATCHES),
    Round.SEMIS: (Round.QUARTERS, SEMIS_MATCHES),
    Round.FINALS: (Round.SEMIS, (FINALS_MATCH,)),
}

# Maps display slot (0-7) to opening match position so that each opening
# match sits next to the Round of 16 match it feeds
OPENING_DISPLAY_ORDER: Tuple[int, ...] = (7, 0, 4, 3, 6, 1, 5, 2)

# Total predictions for a complete 24-player bracket
TOTAL_PREDICTIONS: int = sum(MATCHES_PER_ROUND.values())


def get_match_key(round: int, position: int) -> str:
    """Serializes a match to its "round-position" storage key."""
    return str(MatchKey(int(round), int(position)))


def parse_match_key(key: str) -> MatchKey:
    """Inverse of get_match_key."""
    parts = str(key).split("-")
    if len(parts) != 2 or not all(p.isdecimal() for p in parts):
        raise InvalidMatchKeyError(f"Invalid match key: {key!r}")
    return MatchKey(int(parts[0]), int(parts[1]))


def rounds_for_player_count(player_count: int = DEFAULT_PLAYER_COUNT) -> List[int]:
    """Rounds that are played; the 16-player format has no opening round."""
    first = Round.ROUND_OF_16 if player_count == 16 else Round.OPENING
    return [r.value for r in Round if r >= first]


def iter_match_keys(player_count: int = DEFAULT_PLAYER_COUNT) -> Iterator[MatchKey]:
    for round_ in rounds_for_player_count(player_count):
        for position in range(MATCHES_PER_ROUND[round_]):
            yield MatchKey(round_, position)


def expected_pick_count(player_count: int = DEFAULT_PLAYER_COUNT) -> int:
    return sum(MATCHES_PER_ROUND[r] for r in rounds_for_player_count(player_count))


def is_valid_match(round: int, position: int, player_count: int = DEFAULT_PLAYER_COUNT) -> bool:
    if round not in rounds_for_player_count(player_count):
        return False
    return 0 <= position < MATCHES_PER_ROUND[round]
