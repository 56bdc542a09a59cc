"""
Application startup and shutdown.

Connects the main database, wires the assessment services and makes sure
the learning path constraints exist before any request is served.

Example:
    from contextlib import asynccontextmanager
    from skillpath.bootstrap import startup, shutdown

    @asynccontextmanager
    async def lifespan(app):
        await startup()
        yield
        await shutdown()
"""

import logging
from typing import Optional

from common.database import MongoDB
from skillpath.config import Settings, settings as default_settings
from skillpath.assessment.dependencies import init_assessment_services, get_assessment_service

logger = logging.getLogger(__name__)

_main_db: Optional[MongoDB] = None


def configure_logging(app_settings: Settings) -> None:
    """Configure root logging from settings."""
    level = logging.DEBUG if app_settings.DEBUG else app_settings.LOG_LEVEL.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


async def startup(app_settings: Optional[Settings] = None) -> MongoDB:
    """
    Connect to MongoDB and initialize services.

    Args:
        app_settings: Settings to use (module settings when omitted)

    Returns:
        Connected MongoDB instance
    """
    global _main_db

    app_settings = app_settings or default_settings
    configure_logging(app_settings)
    app_settings.validate_required()

    logger.info("Starting SkillPath assessment services...")

    _main_db = MongoDB()
    await _main_db.connect(
        uri=app_settings.MONGODB_URI,
        database_name=app_settings.MONGODB_DATABASE,
    )

    init_assessment_services(db=_main_db.db, app_settings=app_settings)
    await get_assessment_service().ensure_indexes()

    logger.info("SkillPath assessment services started")
    return _main_db


async def shutdown() -> None:
    """Close the database connection."""
    global _main_db

    if _main_db is not None and _main_db.is_connected:
        await _main_db.disconnect()
    _main_db = None
    logger.info("SkillPath assessment services shut down")
