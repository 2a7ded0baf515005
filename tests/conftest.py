import pytest
from datetime import date, datetime

from models import CourseConfig, MemberRecord, PlayerRef, Sex, TeeSetting
from teesheet.roster import member_to_player_ref


# ================================================================
# Shared fixtures
# ================================================================

@pytest.fixture
def male_tee():
    return TeeSetting(
        id="tee-white", course_id="course-1", tee_color="white",
        applies_to=Sex.MALE, par=71, course_rating=73.2, slope_rating=130,
    )


@pytest.fixture
def female_tee():
    return TeeSetting(
        id="tee-red", course_id="course-1", tee_color="red",
        applies_to=Sex.FEMALE, par=72, course_rating=74.0, slope_rating=128,
    )


@pytest.fixture
def course_config(male_tee, female_tee):
    return CourseConfig(
        male_tee_setting=male_tee, female_tee_setting=female_tee, allowance_percent=95,
    )


@pytest.fixture
def members():
    return [
        MemberRecord(id="m1", name="Alice Moss", handicap_index=18.4, sex=Sex.FEMALE),
        MemberRecord(id="m2", name="Ben Carter", handicap_index=10.0, sex=Sex.MALE),
        MemberRecord(id="m3", name="Cara Doyle", handicap_index=25.0, sex=Sex.FEMALE),
        MemberRecord(id="m4", name="Dev Patel", handicap_index=5.2, sex=Sex.MALE),
        MemberRecord(id="m5", name="Ed Flynn", handicap_index=30.1, sex=Sex.MALE),
    ]


@pytest.fixture
def roster(members):
    return [member_to_player_ref(m) for m in members]


@pytest.fixture
def event_date():
    return date(2026, 6, 1)


@pytest.fixture
def start_time():
    return datetime(2026, 6, 1, 8, 0)


@pytest.fixture
def make_players():
    """Factory for plain players without handicaps; generation keeps them in roster order."""
    def _make(count, prefix="p"):
        return [PlayerRef(id=f"{prefix}{i}", name=f"Player {i}") for i in range(1, count + 1)]
    return _make
