from django.db import models

from brackets.constants import MatchKey, Round


class TimestampMixin(models.Model):
    """Abstract mixin for created_at/updated_at timestamps"""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class NamedMixin(models.Model):
    """Abstract mixin for name field"""

    name = models.CharField(max_length=200)

    def __str__(self) -> str:
        return self.name

    class Meta:
        abstract = True


class MatchSlotMixin(models.Model):
    """Abstract mixin for rows addressed by (round, match_position)"""

    round = models.PositiveSmallIntegerField(choices=Round.choices)
    match_position = models.PositiveSmallIntegerField()

    class Meta:
        abstract = True

    @property
    def match_key(self) -> MatchKey:
        return MatchKey(self.round, self.match_position)
