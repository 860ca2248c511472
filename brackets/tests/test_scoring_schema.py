from django.test import SimpleTestCase
from brackets.utils.scoring_schema import (
    validate_scoring_config,
    ScoringConfigValidator,
    format_validation_errors,
    get_default_scoring_config,
)


class ScoringSchemaValidationTest(SimpleTestCase):
    """Tests for scoring configuration schema validation."""

    def test_default_config_valid(self):
        """Test the default 1-2-3-4-5 config is valid."""
        config = get_default_scoring_config()
        is_valid, errors = validate_scoring_config(config)
        self.assertTrue(is_valid, format_validation_errors(errors))
        self.assertEqual(
            config,
            {"opening": 1, "round_of_16": 2, "quarters": 3, "semis": 4, "finals": 5},
        )

    def test_default_config_is_a_fresh_dict(self):
        config = get_default_scoring_config()
        config["finals"] = 100
        self.assertEqual(get_default_scoring_config()["finals"], 5)

    def test_zero_points_allowed(self):
        config = dict(get_default_scoring_config(), opening=0)
        is_valid, _ = validate_scoring_config(config)
        self.assertTrue(is_valid)

    def test_missing_key(self):
        """Test every round tier is required."""
        config = get_default_scoring_config()
        del config["semis"]
        is_valid, errors = validate_scoring_config(config)
        self.assertFalse(is_valid)
        self.assertEqual(errors[0].path, "semis")

    def test_unknown_key(self):
        config = dict(get_default_scoring_config(), consolation=4)
        is_valid, errors = validate_scoring_config(config)
        self.assertFalse(is_valid)
        self.assertIn("Unknown key 'consolation'", errors[0].message)

    def test_non_integer_values(self):
        for value in ["3", 2.5, None, True]:
            with self.subTest(value=value):
                config = dict(get_default_scoring_config(), quarters=value)
                is_valid, errors = validate_scoring_config(config)
                self.assertFalse(is_valid)
                self.assertEqual(errors[0].path, "quarters")

    def test_negative_value(self):
        config = dict(get_default_scoring_config(), finals=-1)
        is_valid, errors = validate_scoring_config(config)
        self.assertFalse(is_valid)
        self.assertIn("negative", errors[0].message)

    def test_not_a_dict(self):
        is_valid, errors = validate_scoring_config([1, 2, 3])
        self.assertFalse(is_valid)
        self.assertEqual(errors[0].message, "Config must be a dictionary")

    def test_validator_resets_between_runs(self):
        validator = ScoringConfigValidator()
        validator.validate({})
        is_valid, errors = validator.validate(get_default_scoring_config())
        self.assertTrue(is_valid)
        self.assertEqual(errors, [])


class FormatValidationErrorsTest(SimpleTestCase):
    """Tests for error formatting."""

    def test_no_errors(self):
        self.assertEqual(format_validation_errors([]), "No errors")

    def test_formats_paths(self):
        _, errors = validate_scoring_config({"opening": 1})
        message = format_validation_errors(errors)
        self.assertTrue(message.startswith("Scoring configuration validation errors:"))
        self.assertIn("  - finals: Missing point value 'finals'", message)
