"""
Schema validation for tournament scoring configurations.

A scoring configuration assigns a point value to each round tier:

    {"opening": 1, "round_of_16": 2, "quarters": 3, "semis": 4, "finals": 5}

The consolation match has no key of its own, it is scored with ``semis``.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

SCORING_KEYS = ("opening", "round_of_16", "quarters", "semis", "finals")


def get_default_scoring_config() -> Dict[str, int]:
    """One point for an opening round pick, up to five for the champion."""
    return {
        "opening": 1,
        "round_of_16": 2,
        "quarters": 3,
        "semis": 4,
        "finals": 5,
    }


@dataclass
class ValidationError:
    """Represents a validation error."""

    path: str
    message: str


class ScoringConfigValidator:
    """
    Validates scoring configurations against the expected schema.

    Every key of SCORING_KEYS is required and must be a non-negative integer.
    Unknown keys are reported so typos ("semi") don't silently score zero.
    """

    REQUIRED_KEYS = SCORING_KEYS

    def __init__(self):
        self.errors: List[ValidationError] = []

    def validate(self, config: Dict[str, Any]) -> tuple[bool, List[ValidationError]]:
        """
        Validates a scoring configuration.

        Returns:
            (is_valid, errors) tuple
        """
        self.errors = []

        if not isinstance(config, dict):
            self.errors.append(ValidationError("", "Config must be a dictionary"))
            return False, self.errors

        for key in self.REQUIRED_KEYS:
            if key not in config:
                self.errors.append(ValidationError(key, f"Missing point value '{key}'"))
            else:
                self._validate_points(config[key], key)

        for key in config:
            if key not in self.REQUIRED_KEYS:
                self.errors.append(
                    ValidationError(
                        key, f"Unknown key '{key}'. Valid: {list(self.REQUIRED_KEYS)}"
                    )
                )

        return len(self.errors) == 0, self.errors

    def _validate_points(self, value: Any, path: str):
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int):
            self.errors.append(ValidationError(path, "Point value must be an integer"))
        elif value < 0:
            self.errors.append(ValidationError(path, "Point value must not be negative"))


def validate_scoring_config(config: Dict[str, Any]) -> tuple[bool, List[ValidationError]]:
    """
    Convenience function to validate a scoring configuration.

    Example:
        >>> is_valid, errors = validate_scoring_config({"opening": 1})
        >>> is_valid
        False
    """
    validator = ScoringConfigValidator()
    return validator.validate(config)


def format_validation_errors(errors: List[ValidationError]) -> str:
    """Formats validation errors into a human-readable string."""
    if not errors:
        return "No errors"

    lines = ["Scoring configuration validation errors:"]
    for error in errors:
        if error.path:
            lines.append(f"  - {error.path}: {error.message}")
        else:
            lines.append(f"  - {error.message}")
    return "\n".join(lines)
