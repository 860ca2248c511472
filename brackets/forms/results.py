from django import forms
from django.core.validators import MaxValueValidator

from brackets.constants import MAX_LOSER_GAMES, MAX_WINNER_GAMES, Round, is_valid_match
from brackets.services.results import save_result
from brackets.utils.actual_participants import (
    build_result_map,
    get_actual_match_participants,
)

from .base import BaseTournamentForm


class ResultForm(BaseTournamentForm):
    """Entry of one official match result."""

    round = forms.TypedChoiceField(choices=Round.choices, coerce=int)
    match_position = forms.IntegerField(min_value=0)
    winner_seed = forms.IntegerField(min_value=1)
    loser_seed = forms.IntegerField(min_value=1)
    winner_games = forms.IntegerField(min_value=0, max_value=MAX_WINNER_GAMES, initial=0)
    loser_games = forms.IntegerField(min_value=0, max_value=MAX_LOSER_GAMES, initial=0)

    def _build_form_fields(self):
        player_count = self.tournament.player_count
        for name in ("winner_seed", "loser_seed"):
            self.fields[name].max_value = player_count
            self.fields[name].validators.append(MaxValueValidator(player_count))

    def clean(self):
        cleaned_data = super().clean()
        round_ = cleaned_data.get("round")
        position = cleaned_data.get("match_position")
        winner = cleaned_data.get("winner_seed")
        loser = cleaned_data.get("loser_seed")
        if None in (round_, position, winner, loser):
            return cleaned_data

        player_count = self.tournament.player_count
        if not is_valid_match(round_, position, player_count):
            raise forms.ValidationError(
                f"There is no match {round_}-{position} in a {player_count}-player bracket"
            )
        if winner == loser:
            raise forms.ValidationError("Winner and loser must be different seeds")

        result_map = build_result_map(self.tournament.results.all())
        participants = get_actual_match_participants(
            result_map, round_, position, player_count
        )
        expected = {participants.actual_top, participants.actual_bottom}
        if None in expected:
            raise forms.ValidationError(
                "Both participants of this match must be decided before entering its result"
            )
        if {winner, loser} != expected:
            raise forms.ValidationError(
                f"This match is played between seeds {participants.actual_top} "
                f"and {participants.actual_bottom}"
            )
        return cleaned_data

    def save(self):
        if not self.is_valid():
            return False

        self.instance, self.created = save_result(
            self.tournament,
            self.cleaned_data["round"],
            self.cleaned_data["match_position"],
            self.cleaned_data["winner_seed"],
            self.cleaned_data["loser_seed"],
            winner_games=self.cleaned_data["winner_games"],
            loser_games=self.cleaned_data["loser_games"],
        )
        return True
