from django.test import SimpleTestCase

from brackets.constants import (
    BYE_SEEDS,
    CONSOLATION_MATCH,
    FINALS_MATCH,
    MATCHES_PER_ROUND,
    OPENING_DISPLAY_ORDER,
    OPENING_ROUND_MATCHES,
    PLAYER_COUNT_CHOICES,
    QUARTERS_MATCHES,
    ROUND_NAMES,
    ROUND_OF_16_MATCHES,
    ROUND_OF_16_MATCHES_16P,
    SEMIS_MATCHES,
    SUPPORTED_PLAYER_COUNTS,
    TOTAL_PREDICTIONS,
    MatchKey,
    Round,
    expected_pick_count,
    get_match_key,
    is_valid_match,
    iter_match_keys,
    parse_match_key,
    rounds_for_player_count,
)
from brackets.exceptions import InvalidMatchKeyError


class MatchKeyTest(SimpleTestCase):
    """Tests for match key serialization."""

    def test_key_format(self):
        """Test keys are "round-position"."""
        self.assertEqual(get_match_key(Round.OPENING, 0), "0-0")
        self.assertEqual(get_match_key(Round.QUARTERS, 3), "2-3")
        self.assertEqual(str(MatchKey(Round.CONSOLATION, 0)), "5-0")

    def test_round_trip_for_every_match(self):
        """Test parsing a serialized key gives back the same integers."""
        for key in iter_match_keys(24):
            parsed = parse_match_key(get_match_key(key.round, key.position))
            self.assertEqual(parsed, key)
            self.assertIsInstance(parsed.round, int)
            self.assertIsInstance(parsed.position, int)

    def test_round_enum_and_int_keys_are_equal(self):
        """Test a key built from a Round member equals one built from an int."""
        self.assertEqual(MatchKey(Round.SEMIS, 1), MatchKey(3, 1))
        self.assertEqual(hash(MatchKey(Round.SEMIS, 1)), hash(MatchKey(3, 1)))
        self.assertEqual(str(MatchKey(Round.SEMIS, 1)), "3-1")

    def test_invalid_keys_raise(self):
        """Test malformed key strings are rejected."""
        for key in ["", "1", "1-2-3", "a-1", "1-", "-1-2", "1-²"]:
            with self.subTest(key=key):
                with self.assertRaises(InvalidMatchKeyError):
                    parse_match_key(key)

    def test_invalid_key_is_a_value_error(self):
        """Test InvalidMatchKeyError can be caught as ValueError."""
        with self.assertRaises(ValueError):
            parse_match_key("x-y")

    def test_round_name(self):
        self.assertEqual(MatchKey(Round.CONSOLATION, 0).round_name, "3rd Place")
        self.assertEqual(MatchKey(9, 0).round_name, "Unknown")


class TopologyTest(SimpleTestCase):
    """Tests for the static bracket topology."""

    def test_round_names(self):
        self.assertEqual(ROUND_NAMES[Round.OPENING], "Opening Round")
        self.assertEqual(ROUND_NAMES[Round.ROUND_OF_16], "Round of 16")
        self.assertEqual(ROUND_NAMES[Round.QUARTERS], "Quarterfinals")
        self.assertEqual(ROUND_NAMES[Round.SEMIS], "Semifinals")
        self.assertEqual(ROUND_NAMES[Round.FINALS], "Finals")
        self.assertEqual(ROUND_NAMES[Round.CONSOLATION], "3rd Place")

    def test_match_counts(self):
        self.assertEqual(
            [MATCHES_PER_ROUND[r] for r in Round], [8, 8, 4, 2, 1, 1]
        )
        self.assertEqual(TOTAL_PREDICTIONS, 24)

    def test_opening_round_pairings_sum_to_33(self):
        """Test each opening match pairs seed s with 33 - s."""
        self.assertEqual(len(OPENING_ROUND_MATCHES), 8)
        for match in OPENING_ROUND_MATCHES:
            self.assertEqual(match.top_seed + match.bottom_seed, 33)
        seeds = sorted(
            s for m in OPENING_ROUND_MATCHES for s in (m.top_seed, m.bottom_seed)
        )
        self.assertEqual(seeds, list(range(9, 25)))
        self.assertEqual(
            (OPENING_ROUND_MATCHES[0].top_seed, OPENING_ROUND_MATCHES[0].bottom_seed),
            (9, 24),
        )
        self.assertEqual(
            (OPENING_ROUND_MATCHES[7].top_seed, OPENING_ROUND_MATCHES[7].bottom_seed),
            (16, 17),
        )

    def test_round_of_16_byes_cover_seeds_and_opening_matches(self):
        """Test every bye seed and every opening match feeds exactly once."""
        self.assertEqual(sorted(m.bye_seed for m in ROUND_OF_16_MATCHES), list(BYE_SEEDS))
        self.assertEqual(
            sorted(m.opening_winner_position for m in ROUND_OF_16_MATCHES),
            list(range(8)),
        )

    def test_round_of_16_specific_pairings(self):
        self.assertEqual(ROUND_OF_16_MATCHES[0].bye_seed, 1)
        self.assertEqual(ROUND_OF_16_MATCHES[0].opening_winner_position, 7)
        self.assertEqual(ROUND_OF_16_MATCHES[1].bye_seed, 8)
        self.assertEqual(ROUND_OF_16_MATCHES[1].opening_winner_position, 0)

    def test_16_player_pairings_sum_to_17(self):
        seeds = []
        for match in ROUND_OF_16_MATCHES_16P:
            self.assertEqual(match.top_seed + match.bottom_seed, 17)
            seeds.extend([match.top_seed, match.bottom_seed])
        self.assertEqual(sorted(seeds), list(range(1, 17)))

    def test_16_player_top_seeds_follow_24_player_bye_order(self):
        """Test both formats share the same quarterfinal flow."""
        self.assertEqual(
            [m.top_seed for m in ROUND_OF_16_MATCHES_16P],
            [m.bye_seed for m in ROUND_OF_16_MATCHES],
        )

    def test_feeder_rounds_partition_previous_round(self):
        """Test each later match consumes distinct matches of the prior round."""
        for pairings, source_count in [
            (QUARTERS_MATCHES, 8),
            (SEMIS_MATCHES, 4),
            ((FINALS_MATCH,), 2),
            ((CONSOLATION_MATCH,), 2),
        ]:
            sources = sorted(
                p
                for m in pairings
                for p in (m.top_source_position, m.bottom_source_position)
            )
            self.assertEqual(sources, list(range(source_count)))

    def test_opening_display_order_is_permutation(self):
        self.assertEqual(sorted(OPENING_DISPLAY_ORDER), list(range(8)))
        self.assertEqual(
            list(OPENING_DISPLAY_ORDER),
            [m.opening_winner_position for m in ROUND_OF_16_MATCHES],
        )


class PlayerCountTest(SimpleTestCase):
    """Tests for format dependent helpers."""

    def test_16_player_format_skips_opening_round(self):
        self.assertNotIn(Round.OPENING, rounds_for_player_count(16))
        self.assertEqual(rounds_for_player_count(24)[0], Round.OPENING)

    def test_expected_pick_count(self):
        self.assertEqual(expected_pick_count(24), 24)
        self.assertEqual(expected_pick_count(16), 16)
        self.assertEqual(len(list(iter_match_keys(16))), 16)

    def test_is_valid_match(self):
        self.assertTrue(is_valid_match(Round.OPENING, 7, 24))
        self.assertFalse(is_valid_match(Round.OPENING, 0, 16))
        self.assertFalse(is_valid_match(Round.QUARTERS, 4, 24))
        self.assertFalse(is_valid_match(Round.FINALS, -1, 24))
        self.assertFalse(is_valid_match(7, 0, 24))

    def test_player_count_choices_cover_supported_formats(self):
        self.assertEqual(
            [value for value, _ in PLAYER_COUNT_CHOICES], list(SUPPORTED_PLAYER_COUNTS)
        )
        self.assertEqual(PLAYER_COUNT_CHOICES[0][1], "16 players")
        for count in SUPPORTED_PLAYER_COUNTS:
            self.assertEqual(expected_pick_count(count), count)
