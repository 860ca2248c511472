class BracketError(Exception):
    """Base exception for the bracket app."""

    pass


class InvalidMatchKeyError(BracketError, ValueError):
    """Raised when a "round-position" key string cannot be parsed."""

    pass


class ScoringConfigError(BracketError):
    """Raised when a tournament is saved with an invalid scoring config."""

    pass


class PredictionsLockedError(BracketError):
    """Raised when a bracket is saved after the tournament lock date."""

    pass


class ScoreRecalculationError(BracketError):
    """Raised when one or more bracket score updates failed."""

    def __init__(self, tournament_id, failed_bracket_ids):
        self.tournament_id = tournament_id
        self.failed_bracket_ids = list(failed_bracket_ids)
        super().__init__(
            f"Failed to update {len(self.failed_bracket_ids)} brackets "
            f"for tournament {tournament_id}: {self.failed_bracket_ids}"
        )
