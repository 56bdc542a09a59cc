"""Tests for settings validation and service wiring."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from common.cache import NullCache
from skillpath import bootstrap
from skillpath.assessment import dependencies
from skillpath.assessment.services.assessment_service import AssessmentService
from skillpath.assessment import constants
from skillpath.config import Settings


@pytest.fixture(autouse=True)
def reset_services():
    yield
    dependencies._assessment_extractor = None
    dependencies._skill_catalog = None
    dependencies._assessment_service = None
    dependencies._learning_path_service = None


class TestSettings:
    def test_defaults_are_valid(self):
        settings = Settings()

        settings.validate_required()

        assert settings.ASSESSMENT_MIN_MODULES == 3
        assert settings.ASSESSMENT_MAX_MODULES == 6
        assert settings.LOG_LEVEL == "INFO"

    def test_defaults_come_from_assessment_constants(self):
        settings = Settings()

        assert settings.ASSESSMENT_MIN_MODULES == constants.MIN_MODULES
        assert settings.ASSESSMENT_MAX_MODULES == constants.MAX_MODULES
        assert settings.ASSESSMENT_MAX_REASONING_LENGTH == constants.MAX_REASONING_LENGTH
        assert settings.LOW_CONFIDENCE_THRESHOLD == constants.LOW_CONFIDENCE_THRESHOLD

    def test_inverted_module_bounds_rejected(self):
        settings = Settings(ASSESSMENT_MIN_MODULES=5, ASSESSMENT_MAX_MODULES=4)

        with pytest.raises(ValueError, match="ASSESSMENT_MIN_MODULES"):
            settings.validate_required()

    def test_missing_database_rejected(self):
        settings = Settings(MONGODB_URI="")

        with pytest.raises(ValueError, match="MONGODB_URI"):
            settings.validate_required()


class TestInitAssessmentServices:
    def test_getters_fail_before_init(self):
        with pytest.raises(RuntimeError):
            dependencies.get_assessment_service()

    def test_wires_services_from_settings(self, mock_db):
        settings = Settings(ASSESSMENT_MIN_MODULES=2, ASSESSMENT_MAX_MODULES=4)

        dependencies.init_assessment_services(mock_db, cache=NullCache(), app_settings=settings)

        extractor = dependencies.get_assessment_extractor()
        service = dependencies.get_assessment_service()
        assert extractor._min_modules == 2
        assert service._max_modules == 4
        assert service._skill_catalog is dependencies.get_skill_catalog()
        assert dependencies.get_learning_path_service() is not None

    def test_invalid_settings_refused(self, mock_db):
        settings = Settings(LOW_CONFIDENCE_THRESHOLD=2.0)

        with pytest.raises(ValueError):
            dependencies.init_assessment_services(mock_db, app_settings=settings)


class TestBootstrap:
    @pytest.mark.asyncio
    async def test_shutdown_without_startup_is_noop(self):
        await bootstrap.shutdown()

        assert bootstrap._main_db is None

    @pytest.mark.asyncio
    async def test_startup_connects_and_ensures_indexes(self, mock_db):
        mongo = MagicMock()
        mongo.connect = AsyncMock()
        mongo.disconnect = AsyncMock()
        mongo.is_connected = True
        mongo.db = mock_db
        settings = Settings(MONGODB_DATABASE="skillpath_test")

        with patch.object(bootstrap, "MongoDB", return_value=mongo), \
             patch.object(AssessmentService, "ensure_indexes", new_callable=AsyncMock) as ensure:
            result = await bootstrap.startup(settings)
            await bootstrap.shutdown()

        assert result is mongo
        mongo.connect.assert_awaited_once_with(
            uri=settings.MONGODB_URI,
            database_name="skillpath_test",
        )
        ensure.assert_awaited_once()
        mongo.disconnect.assert_awaited_once()
