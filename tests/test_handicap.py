import pytest

from models import CourseConfig, PlayerRef, Sex, TeeSetting
from teesheet.handicap import (
    calculate_handicaps,
    course_handicap,
    format_handicap,
    format_handicap_index,
    handicaps_for_player,
    has_tee_settings,
    playing_handicap,
    recommended_allowance,
    round_half_away_from_zero,
)


# ================================================================
# Course / Playing Handicap
# ================================================================

def test_course_and_playing_handicap_worked_example():
    ch = course_handicap(18.4, 130, 73.2, 71)
    assert ch == 23
    assert playing_handicap(ch, 95) == 22


def test_course_handicap_plus_handicap():
    # -2.0 x 1 + (70 - 72) = -4
    assert course_handicap(-2.0, 113, 70.0, 72) == -4


@pytest.mark.parametrize("args", [
    (None, 113, 72.0, 72),
    (10.0, None, 72.0, 72),
    (10.0, 113, None, 72),
    (10.0, 113, 72.0, None),
])
def test_course_handicap_missing_input_is_none(args):
    assert course_handicap(*args) is None


def test_playing_handicap_missing_input_is_none():
    assert playing_handicap(None, 95) is None
    assert playing_handicap(20, None) is None
    assert playing_handicap(20, 0) is None


def test_playing_handicap_full_allowance_keeps_course_handicap():
    assert playing_handicap(17, 100) == 17


@pytest.mark.parametrize("value,expected", [
    (2.5, 3),
    (-2.5, -3),
    (2.4, 2),
    (-2.6, -3),
    (21.85, 22),
    (0.0, 0),
])
def test_round_half_away_from_zero(value, expected):
    assert round_half_away_from_zero(value) == expected


# ================================================================
# Tee selection
# ================================================================

def test_calculate_handicaps_without_tee():
    result = calculate_handicaps(18.4, None, 95)
    assert result.handicap_index == 18.4
    assert result.course_handicap is None
    assert result.playing_handicap is None


def test_has_tee_settings(male_tee):
    assert has_tee_settings(male_tee)
    assert not has_tee_settings(None)
    assert not has_tee_settings(TeeSetting(par=72, course_rating=71.0))


def test_female_player_uses_female_tee(course_config, female_tee):
    player = PlayerRef(id="f1", name="Fran", handicap_index=18.4, sex=Sex.FEMALE)
    result = handicaps_for_player(player, course_config)
    assert result.tee_setting == female_tee
    # 18.4 x 128/113 + (74.0 - 72) = 22.84 -> 23; 23 x 0.95 = 21.85 -> 22
    assert result.course_handicap == 23
    assert result.playing_handicap == 22
    assert result.assumptions == []


def test_female_player_falls_back_to_male_tee(male_tee):
    config = CourseConfig(male_tee_setting=male_tee, allowance_percent=95)
    player = PlayerRef(id="f1", name="Fran", handicap_index=18.4, sex=Sex.FEMALE)
    result = handicaps_for_player(player, config)
    assert result.tee_setting == male_tee
    assert result.course_handicap == 23
    assert len(result.assumptions) == 1


def test_player_without_sex_has_no_handicap(course_config):
    player = PlayerRef(id="x", name="Unknown", handicap_index=12.0)
    result = handicaps_for_player(player, course_config)
    assert result.course_handicap is None
    assert result.playing_handicap is None


def test_player_without_index_has_no_handicap(course_config):
    player = PlayerRef(id="x", name="New Member", sex=Sex.MALE)
    assert handicaps_for_player(player, course_config).playing_handicap is None


# ================================================================
# Display and allowances
# ================================================================

def test_format_handicap():
    assert format_handicap(12) == "+12"
    assert format_handicap(0) == "+0"
    assert format_handicap(-2) == "-2"
    assert format_handicap(None) == "-"


def test_format_handicap_index():
    assert format_handicap_index(18.4) == "18.4"
    assert format_handicap_index(5) == "5.0"
    assert format_handicap_index(None) == "-"


@pytest.mark.parametrize("event_format,expected", [
    ("Fourball Better Ball", 85.0),
    ("better_ball", 85.0),
    ("Foursomes", 50.0),
    ("Texas Scramble", 75.0),
    ("Stableford", 95.0),
    (None, 95.0),
    ("", 95.0),
])
def test_recommended_allowance(event_format, expected):
    assert recommended_allowance(event_format) == expected
