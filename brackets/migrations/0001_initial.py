import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import brackets.utils.scoring_schema

ROUND_CHOICES = [
    (0, "Opening Round"),
    (1, "Round of 16"),
    (2, "Quarterfinals"),
    (3, "Semifinals"),
    (4, "Finals"),
    (5, "3rd Place"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Tournament",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=200)),
                ("slug", models.SlugField(blank=True, max_length=255)),
                ("player_count", models.PositiveSmallIntegerField(choices=[(16, "16 players"), (24, "24 players")], default=24)),
                ("status", models.CharField(choices=[("upcoming", "Upcoming"), ("in_progress", "In progress"), ("completed", "Completed")], default="upcoming", max_length=20)),
                ("lock_date", models.DateTimeField(blank=True, help_text="Predictions can't be changed after this", null=True)),
                ("start_date", models.DateTimeField(blank=True, null=True)),
                ("end_date", models.DateTimeField(blank=True, null=True)),
                ("scoring_config", models.JSONField(blank=True, default=brackets.utils.scoring_schema.get_default_scoring_config, help_text="Points per round: opening, round_of_16, quarters, semis, finals")),
                ("max_score", models.IntegerField(default=0)),
            ],
            options={
                "ordering": ["-start_date"],
            },
        ),
        migrations.CreateModel(
            name="Player",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=200)),
                ("seed", models.PositiveSmallIntegerField()),
                ("tournament", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="players", to="brackets.tournament")),
            ],
            options={
                "ordering": ["tournament", "seed"],
                "unique_together": {("tournament", "seed")},
            },
        ),
        migrations.CreateModel(
            name="Bracket",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(blank=True, max_length=200)),
                ("is_public", models.BooleanField(default=True)),
                ("final_winner_games", models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(4)])),
                ("final_loser_games", models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(3)])),
                ("score", models.IntegerField(default=0)),
                ("correct_champion", models.BooleanField(blank=True, null=True)),
                ("game_score_diff", models.PositiveIntegerField(blank=True, null=True)),
                ("total_correct", models.PositiveIntegerField(default=0)),
                ("tournament", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="brackets", to="brackets.tournament")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["tournament", "created_at"],
                "unique_together": {("user", "tournament")},
            },
        ),
        migrations.CreateModel(
            name="Pick",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("round", models.PositiveSmallIntegerField(choices=ROUND_CHOICES)),
                ("match_position", models.PositiveSmallIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("winner_seed", models.PositiveSmallIntegerField()),
                ("is_correct", models.BooleanField(blank=True, null=True)),
                ("actual_winner_seed", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("actual_loser_seed", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("bracket", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="picks", to="brackets.bracket")),
            ],
            options={
                "ordering": ["round", "match_position"],
                "unique_together": {("bracket", "round", "match_position")},
            },
        ),
        migrations.CreateModel(
            name="Result",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("round", models.PositiveSmallIntegerField(choices=ROUND_CHOICES)),
                ("match_position", models.PositiveSmallIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("winner_seed", models.PositiveSmallIntegerField()),
                ("loser_seed", models.PositiveSmallIntegerField()),
                ("winner_games", models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(4)])),
                ("loser_games", models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(3)])),
                ("tournament", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="results", to="brackets.tournament")),
            ],
            options={
                "ordering": ["tournament", "round", "match_position"],
                "unique_together": {("tournament", "round", "match_position")},
            },
        ),
    ]
