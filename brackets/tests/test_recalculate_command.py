from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from brackets.exceptions import ScoreRecalculationError
from brackets.models import Tournament
from brackets.tasks import queue_score_recalculation, recalculate_tournament_scores_task

from .utils import chalk_picks, chalk_results, create_results, make_bracket, make_tournament, make_user


class RecalculateScoresCommandTest(TestCase):
    """Tests for the recalculate_scores management command."""

    def setUp(self):
        self.tournament = make_tournament()
        self.bracket = make_bracket(self.tournament, make_user(), chalk_picks())
        create_results(self.tournament, chalk_results())

    def test_recalculates_scores(self):
        out = StringIO()
        call_command("recalculate_scores", self.tournament.id, stdout=out)

        self.assertIn("Updated 1 brackets", out.getvalue())
        self.bracket.refresh_from_db()
        self.assertEqual(self.bracket.score, 53)

    def test_missing_tournament(self):
        with self.assertRaises(CommandError) as ctx:
            call_command("recalculate_scores", 9999, stdout=StringIO())
        self.assertIn("does not exist", str(ctx.exception))

    def test_failure_raises_command_error(self):
        """Test failed bracket updates are reported as a CommandError."""
        error = ScoreRecalculationError(self.tournament.id, [self.bracket.id])
        with patch.object(Tournament, "recalculate_scores", side_effect=error):
            with self.assertRaises(CommandError) as ctx:
                call_command("recalculate_scores", self.tournament.id, stdout=StringIO())
        self.assertIn("Failed to update 1 brackets", str(ctx.exception))

    @patch("django_q.tasks.async_task")
    def test_async_queues_task(self, mock_async_task):
        mock_async_task.return_value = "task-1"
        out = StringIO()
        call_command("recalculate_scores", self.tournament.id, "--async", stdout=out)

        mock_async_task.assert_called_once_with(
            "brackets.tasks.recalculate.recalculate_tournament_scores_task",
            self.tournament.id,
            task_name=f"recalculate_scores_{self.tournament.id}",
        )
        self.assertIn("task-1", out.getvalue())
        self.bracket.refresh_from_db()
        self.assertEqual(self.bracket.score, 0)


class RecalculateTaskTest(TestCase):
    """Tests for the Django-Q task wrapper."""

    @patch("brackets.tasks.recalculate.call_command")
    def test_task_runs_command(self, mock_call_command):
        recalculate_tournament_scores_task(42)
        mock_call_command.assert_called_once_with("recalculate_scores", 42, verbosity=2)

    @patch("brackets.tasks.recalculate.call_command")
    def test_task_reraises(self, mock_call_command):
        mock_call_command.side_effect = CommandError("boom")
        with self.assertRaises(CommandError):
            recalculate_tournament_scores_task(42)

    @patch("django_q.tasks.async_task")
    def test_queue_returns_task_id(self, mock_async_task):
        mock_async_task.return_value = "abc"
        tournament = make_tournament()
        self.assertEqual(queue_score_recalculation(tournament), "abc")
