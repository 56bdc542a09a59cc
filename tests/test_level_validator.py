"""Unit tests for skill level list validation."""

import pytest

from skillpath.assessment.exceptions import InvalidLevelsException
from skillpath.assessment.models import SkillLevelDefinition
from skillpath.assessment.services.level_validator import validate_skill_levels


class TestValidateSkillLevels:
    def test_valid_levels_parsed_in_order(self, skill_levels):
        parsed = validate_skill_levels(skill_levels)

        assert [level.level for level in parsed] == [1, 2, 3, 4, 5]
        assert all(isinstance(level, SkillLevelDefinition) for level in parsed)
        assert parsed[0].resources[0].url == "https://learn.example.com/level-1"

    def test_resources_optional(self, skill_levels):
        for level in skill_levels:
            del level["resources"]

        parsed = validate_skill_levels(skill_levels)

        assert parsed[2].resources == []

    def test_gaps_allowed(self, skill_levels):
        parsed = validate_skill_levels([skill_levels[0], skill_levels[2], skill_levels[4]])

        assert [level.level for level in parsed] == [1, 3, 5]

    @pytest.mark.parametrize("levels", [[], None, "1,2,3"])
    def test_empty_or_non_list_rejected(self, levels):
        with pytest.raises(InvalidLevelsException) as exc_info:
            validate_skill_levels(levels)

        assert exc_info.value.reason == "levels must be a non-empty list"

    def test_non_dict_entry_rejected(self, skill_levels):
        with pytest.raises(InvalidLevelsException) as exc_info:
            validate_skill_levels([skill_levels[0], 2])

        assert exc_info.value.reason == "each level must be an object"

    @pytest.mark.parametrize("value", [0, -1, 1.5, "2", True])
    def test_bad_level_number_rejected(self, skill_levels, value):
        skill_levels[0]["level"] = value

        with pytest.raises(InvalidLevelsException) as exc_info:
            validate_skill_levels(skill_levels)

        assert exc_info.value.reason == "level numbers must be integers >= 1"

    def test_duplicate_level_rejected(self, skill_levels):
        skill_levels[1]["level"] = 1

        with pytest.raises(InvalidLevelsException) as exc_info:
            validate_skill_levels(skill_levels)

        assert exc_info.value.reason == "duplicate level value: 1"

    def test_out_of_order_rejected_not_sorted(self, skill_levels):
        with pytest.raises(InvalidLevelsException) as exc_info:
            validate_skill_levels([skill_levels[1], skill_levels[0]])

        assert exc_info.value.reason == "levels must be strictly increasing"

    @pytest.mark.parametrize("field", ["nameEn", "nameAr", "descriptionEn", "descriptionAr"])
    def test_blank_localized_field_rejected(self, skill_levels, field):
        skill_levels[2][field] = "   "

        with pytest.raises(InvalidLevelsException) as exc_info:
            validate_skill_levels(skill_levels)

        assert exc_info.value.reason == f"level 3: {field} must be non-empty"

    def test_missing_localized_field_rejected(self, skill_levels):
        del skill_levels[0]["descriptionAr"]

        with pytest.raises(InvalidLevelsException):
            validate_skill_levels(skill_levels)

    def test_malformed_resource_rejected(self, skill_levels):
        skill_levels[0]["resources"] = [{"title": "no url"}]

        with pytest.raises(InvalidLevelsException) as exc_info:
            validate_skill_levels(skill_levels)

        assert exc_info.value.detail["code"] == "INVALID_LEVELS"
