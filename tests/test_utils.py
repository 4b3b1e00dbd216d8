"""Tests for utility functions in models/utils.py"""

import pytest

from models.light import LightResource
from models.utils import find_similar_strings, format_light_state, similarity_score


def _light(**overrides):
    fields = dict(id='l1', display_name='Desk lamp', archetype='sultan_bulb', on=True)
    fields.update(overrides)
    return LightResource(**fields)


class TestFormatLightState:

    def test_off(self):
        assert format_light_state(_light(on=False, brightness=40.0)) == "OFF"

    def test_on_with_brightness(self):
        assert format_light_state(_light(brightness=54.33)) == "ON, 54%"

    def test_colour_temperature_and_dimming(self):
        light = _light(brightness=80.0, color_temperature=366, pending_dimming_action='up')
        assert format_light_state(light) == "ON, 80%, 366 mirek, dimming up"

    def test_plug(self):
        assert format_light_state(_light(brightness=None)) == "ON"


class TestSimilarityScore:
    """Tests for similarity_score function."""

    def test_exact_match_case_insensitive(self):
        assert similarity_score("Desk Lamp", "desk lamp") == 100

    def test_prefix_match(self):
        assert similarity_score("desk", "desk lamp") == 80

    def test_substring_match(self):
        assert similarity_score("lamp", "desk lamp") == 60

    def test_character_sequence(self):
        score = similarity_score("dsklmp", "desk lamp")
        assert 0 < score <= 50

    def test_no_match(self):
        assert similarity_score("xyz", "desk lamp") == 0


class TestFindSimilarStrings:

    def test_sorted_by_score(self):
        candidates = ['Kitchen', 'Desk lamp', 'Desk']
        assert find_similar_strings('desk', candidates) == ['Desk', 'Desk lamp']

    def test_limit(self):
        candidates = ['lamp 1', 'lamp 2', 'lamp 3']
        assert len(find_similar_strings('lamp', candidates, limit=2)) == 2

    @pytest.mark.parametrize('target', ['zzz', 'qqqq'])
    def test_nothing_similar(self, target):
        assert find_similar_strings(target, ['Desk lamp', 'Kitchen']) == []
