"""
Unit Tests for ProfileValidator

✅ Valid snapshots normalize into ExamProfile
✅ Every violation is reported at once
✅ Range boundaries
"""

import pytest
from datetime import date
from decimal import Decimal

from app.domain.models import ExamProfile, SubjectProfile
from app.domain.services.profile_validator import ProfileValidator


@pytest.fixture
def validator():
    return ProfileValidator()


@pytest.fixture
def snapshot():
    """Valid camelCase snapshot"""
    return {
        "name": "Receita Federal 2027",
        "examDate": "2027-03-14",
        "weeklyHours": 20,
        "isActive": True,
        "subjects": [
            {"subject": "Direito Tributário", "weight": 2, "currentLevel": 3, "goalLevel": 8},
            {"subject": "Português", "weight": 1, "currentLevel": 5, "goalLevel": 6},
        ],
    }


def fields(result):
    return [v.field for v in result.violations]


class TestValidSnapshots:
    """Snapshots that pass validation"""

    def test_valid_snapshot(self, validator, snapshot):
        result = validator.validate(snapshot)

        assert result.ok
        assert result.violations == []
        profile = result.profile
        assert profile.exam_date == date(2027, 3, 14)
        assert profile.weekly_hours == 20.0
        assert [s.subject for s in profile.subjects] == ["Direito Tributário", "Português"]

    def test_decimal_values_accepted(self, validator, snapshot):
        snapshot["weeklyHours"] = Decimal("20")
        snapshot["subjects"][0]["weight"] = Decimal("0.1")
        snapshot["subjects"][1]["weight"] = Decimal("10")

        result = validator.validate(snapshot)

        assert result.ok
        assert result.profile.weekly_hours == 20.0
        assert [s.weight for s in result.profile.subjects] == [0.1, 10.0]

    def test_position_defaults_to_list_index(self, validator, snapshot):
        result = validator.validate(snapshot)
        assert [s.position for s in result.profile.subjects] == [0, 1]

    def test_explicit_position_kept(self, validator, snapshot):
        snapshot["subjects"][0]["position"] = 5
        result = validator.validate(snapshot)
        assert result.profile.subjects[0].position == 5

    def test_snake_case_keys(self, validator):
        result = validator.validate({
            "name": "ENEM",
            "exam_date": date(2026, 11, 8),
            "weekly_hours": 12.5,
            "subjects": [
                {"subject": "Matemática", "weight": 1.5, "current_level": 4, "goal_level": 9},
            ],
        })

        assert result.ok
        assert result.profile.subjects[0].current_level == 4
        assert result.profile.subjects[0].goal_level == 9

    def test_exam_profile_entity_accepted(self, validator):
        profile = ExamProfile(
            name="OAB",
            exam_date=date(2026, 12, 1),
            weekly_hours=10,
            subjects=(SubjectProfile("Ética", 1.0, 2, 7, 0),),
        )
        result = validator.validate(profile)
        assert result.ok
        assert result.profile.subjects == profile.subjects

    def test_goal_below_current_level_is_allowed(self, validator, snapshot):
        snapshot["subjects"][0].update(currentLevel=9, goalLevel=2)
        assert validator.validate(snapshot).ok

    def test_iso_datetime_string_accepted(self, validator, snapshot):
        snapshot["examDate"] = "2027-03-14T00:00:00.000Z"
        assert validator.validate(snapshot).profile.exam_date == date(2027, 3, 14)

    @pytest.mark.parametrize("weight", [0.1, 10])
    def test_weight_boundaries(self, validator, snapshot, weight):
        snapshot["subjects"][0]["weight"] = weight
        assert validator.validate(snapshot).ok

    @pytest.mark.parametrize("hours", [1, 168])
    def test_weekly_hours_boundaries(self, validator, snapshot, hours):
        snapshot["weeklyHours"] = hours
        assert validator.validate(snapshot).ok


class TestViolations:
    """Snapshots that fail validation"""

    def test_all_violations_reported_together(self, validator):
        result = validator.validate({
            "name": "x" * 101,
            "examDate": "2026-02-30",
            "weeklyHours": 0,
            "subjects": [],
        })

        assert not result.ok
        assert result.profile is None
        assert fields(result) == ["name", "examDate", "weeklyHours", "subjects"]

    def test_subject_field_violations(self, validator, snapshot):
        snapshot["subjects"] = [
            {"subject": "", "weight": 0, "currentLevel": 3.5, "goalLevel": 11},
            {"subject": "Português", "weight": 11, "currentLevel": True, "goalLevel": 5, "position": -1},
        ]

        result = validator.validate(snapshot)

        assert fields(result) == [
            "subjects[0].subject",
            "subjects[0].weight",
            "subjects[0].currentLevel",
            "subjects[0].goalLevel",
            "subjects[1].weight",
            "subjects[1].currentLevel",
            "subjects[1].position",
        ]

    def test_weekly_hours_above_limit(self, validator, snapshot):
        snapshot["weeklyHours"] = 168.5
        assert fields(validator.validate(snapshot)) == ["weeklyHours"]

    @pytest.mark.parametrize(
        "value", [float("nan"), float("inf"), Decimal("NaN"), Decimal("Infinity"), "20", None]
    )
    def test_weekly_hours_must_be_finite_number(self, validator, snapshot, value):
        snapshot["weeklyHours"] = value
        assert fields(validator.validate(snapshot)) == ["weeklyHours"]

    def test_weight_below_minimum(self, validator, snapshot):
        snapshot["subjects"][1]["weight"] = 0.05
        assert fields(validator.validate(snapshot)) == ["subjects[1].weight"]

    def test_missing_subjects(self, validator, snapshot):
        del snapshot["subjects"]
        assert fields(validator.validate(snapshot)) == ["subjects"]

    def test_subject_not_an_object(self, validator, snapshot):
        snapshot["subjects"].append("Matemática")
        assert fields(validator.validate(snapshot)) == ["subjects[2]"]

    def test_missing_exam_date(self, validator, snapshot):
        del snapshot["examDate"]
        assert fields(validator.validate(snapshot)) == ["examDate"]

    def test_not_a_mapping(self, validator):
        result = validator.validate(["not", "a", "profile"])
        assert fields(result) == ["profile"]
