from abc import ABCMeta, abstractmethod
from django import forms


class TournamentFormMeta(forms.forms.DeclarativeFieldsMetaclass, ABCMeta):
    """Combined metaclass for BaseTournamentForm to support both Django forms and ABC"""

    pass


class BaseTournamentForm(forms.Form, metaclass=TournamentFormMeta):
    """
    Abstract base class for forms that write data of one tournament.

    Subclasses declare their fields, load any existing data as initial values
    and implement ``save``.
    """

    def __init__(self, tournament, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tournament = tournament
        self._build_form_fields()
        self._load_initial()

    def _build_form_fields(self):
        """Hook for fields that depend on the tournament."""
        pass

    def _load_initial(self):
        """Hook for populating self.initial from stored data."""
        pass

    @abstractmethod
    def save(self):
        """
        Save the form data.

        Returns:
            bool: True if save was successful, False otherwise
        """
        pass

