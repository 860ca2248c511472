from django.contrib.auth import get_user_model

from brackets.constants import DEFAULT_PLAYER_COUNT, iter_match_keys
from brackets.models import Bracket, Player, Result, Tournament
from brackets.utils.bracket_logic import get_match_participants


def chalk_picks(player_count=DEFAULT_PLAYER_COUNT):
    """A complete prediction map where the better (lower) seed always wins."""
    picks = {}
    for key in iter_match_keys(player_count):
        participants = get_match_participants(picks, key.round, key.position, player_count)
        picks[key] = min(participants.top_seed, participants.bottom_seed)
    return picks


def chalk_results(player_count=DEFAULT_PLAYER_COUNT, winner_games=4, loser_games=1):
    """Results (as dicts) matching chalk_picks exactly."""
    picks = chalk_picks(player_count)
    results = []
    for key, winner in picks.items():
        participants = get_match_participants(picks, key.round, key.position, player_count)
        loser = max(participants.top_seed, participants.bottom_seed)
        results.append(
            {
                "round": key.round,
                "match_position": key.position,
                "winner_seed": winner,
                "loser_seed": loser,
                "winner_games": winner_games,
                "loser_games": loser_games,
            }
        )
    return results


def make_user(username="player"):
    return get_user_model().objects.create_user(username=username, password="pass")


def make_tournament(name="Spring Open", player_count=DEFAULT_PLAYER_COUNT, **kwargs):
    tournament = Tournament.objects.create(name=name, player_count=player_count, **kwargs)
    Player.objects.bulk_create(
        [
            Player(tournament=tournament, name=f"Player {seed}", seed=seed)
            for seed in range(1, player_count + 1)
        ]
    )
    return tournament


def make_bracket(tournament, user, picks=None, **kwargs):
    bracket = Bracket.objects.create(tournament=tournament, user=user, **kwargs)
    if picks:
        bracket.set_picks(picks)
    return bracket


def create_results(tournament, results):
    return [Result.objects.create(tournament=tournament, **data) for data in results]
