import logging

from django import forms
from django.db import transaction

from brackets.constants import MAX_LOSER_GAMES, MAX_WINNER_GAMES, is_valid_match
from brackets.models import Bracket
from brackets.utils.bracket_logic import (
    get_match_participants,
    picks_from_wire,
    picks_to_wire,
)

from .base import BaseTournamentForm

logger = logging.getLogger(__name__)


class BracketPredictionForm(BaseTournamentForm):
    """
    Saves a user's whole bracket at once.

    Picks are posted as a JSON object of ``{"round-position": seed}``, which
    is what the interactive bracket keeps in memory.
    """

    name = forms.CharField(max_length=200, required=False)
    is_public = forms.BooleanField(required=False, initial=True)
    picks = forms.JSONField(required=False, widget=forms.HiddenInput())
    final_winner_games = forms.IntegerField(
        required=False, min_value=0, max_value=MAX_WINNER_GAMES
    )
    final_loser_games = forms.IntegerField(
        required=False, min_value=0, max_value=MAX_LOSER_GAMES
    )

    def __init__(self, tournament, user, *args, **kwargs):
        self.user = user
        super().__init__(tournament, *args, **kwargs)

    def _load_initial(self):
        bracket = Bracket.objects.filter(
            user=self.user, tournament=self.tournament
        ).first()
        if bracket is None:
            return
        self.initial.update(
            {
                "name": bracket.name,
                "is_public": bracket.is_public,
                "picks": picks_to_wire(bracket.get_picks_map()),
                "final_winner_games": bracket.final_winner_games,
                "final_loser_games": bracket.final_loser_games,
            }
        )

    def clean_picks(self):
        data = self.cleaned_data.get("picks") or {}
        if not isinstance(data, dict):
            raise forms.ValidationError("Picks must be an object of match keys to seeds")
        for key, seed in data.items():
            # bool is an int subclass
            if isinstance(seed, bool) or not isinstance(seed, int):
                raise forms.ValidationError(f"Seed for match {key} must be an integer")
        try:
            picks = picks_from_wire(data)
        except (TypeError, ValueError) as e:
            raise forms.ValidationError(str(e))

        player_count = self.tournament.player_count
        for key, seed in sorted(picks.items()):
            if not is_valid_match(key.round, key.position, player_count):
                raise forms.ValidationError(
                    f"No match {key} in a {player_count}-player bracket"
                )
            participants = get_match_participants(
                picks, key.round, key.position, player_count
            )
            if seed not in (participants.top_seed, participants.bottom_seed):
                raise forms.ValidationError(
                    f"Seed {seed} does not play in {key.round_name} match {key.position}"
                )
        return picks

    def clean(self):
        cleaned_data = super().clean()
        if self.tournament.is_locked:
            raise forms.ValidationError("Predictions for this tournament are locked")

        winner_games = cleaned_data.get("final_winner_games")
        loser_games = cleaned_data.get("final_loser_games")
        if (winner_games is None) != (loser_games is None):
            raise forms.ValidationError(
                "Enter both finals game counts or leave both empty"
            )
        return cleaned_data

    def save(self):
        if not self.is_valid():
            return False

        with transaction.atomic():
            self.bracket, created = Bracket.objects.get_or_create(
                user=self.user, tournament=self.tournament
            )
            self.bracket.name = self.cleaned_data["name"]
            self.bracket.is_public = self.cleaned_data["is_public"]
            self.bracket.final_winner_games = self.cleaned_data["final_winner_games"]
            self.bracket.final_loser_games = self.cleaned_data["final_loser_games"]
            self.bracket.save()

            self.bracket.set_picks(self.cleaned_data["picks"])
            self.bracket.update_score()

        logger.info(
            f"{'Created' if created else 'Updated'} bracket {self.bracket.pk} for "
            f"user {self.user.pk} with {len(self.cleaned_data['picks'])} picks"
        )
        return True
