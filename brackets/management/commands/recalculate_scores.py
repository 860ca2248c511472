"""
Management command to recalculate all bracket scores of a tournament.

Usage:
    python manage.py recalculate_scores <tournament_id>
    python manage.py recalculate_scores <tournament_id> --async
    python manage.py recalculate_scores <tournament_id> --verbose
"""

import logging
from django.core.management.base import BaseCommand, CommandError

from brackets.exceptions import ScoreRecalculationError
from brackets.models import Tournament
from brackets.tasks.recalculate import queue_score_recalculation

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = """
    Re-score every bracket of a tournament against its current results.

    This command:
    1. Loads all results of the tournament once
    2. Updates each bracket in its own transaction
    3. Continues on errors and reports the failed brackets at the end
    """

    def add_arguments(self, parser):
        parser.add_argument("tournament_id", type=int, help="Tournament ID to re-score")
        parser.add_argument(
            "--async",
            action="store_true",
            dest="run_async",
            help="Queue the recalculation on the Django-Q cluster instead",
        )
        parser.add_argument(
            "--verbose", action="store_true", help="Increase logging verbosity"
        )

    def handle(self, *args, **options):
        tournament_id = options["tournament_id"]

        if options["verbose"]:
            logging.getLogger("brackets").setLevel(logging.DEBUG)

        try:
            tournament = Tournament.objects.get(id=tournament_id)
        except Tournament.DoesNotExist:
            raise CommandError(f"Tournament with ID {tournament_id} does not exist")

        if options["run_async"]:
            task_id = queue_score_recalculation(tournament)
            self.stdout.write(
                self.style.SUCCESS(f"Queued recalculation for {tournament.name} ({task_id})")
            )
            return

        self.stdout.write(
            f"Recalculating scores for tournament: {tournament.name} (ID: {tournament_id})"
        )

        try:
            updated = tournament.recalculate_scores()
        except ScoreRecalculationError as e:
            self.stdout.write(self.style.ERROR(f"✗ {e}"))
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(f"✓ Updated {updated} brackets"))
