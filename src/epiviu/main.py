from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import CONTAINER_KEY, register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_STAFF_PASSWORD, DEFAULT_TOKEN_MAX_AGE_SECONDS
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .reports.controller import register as register_reports
from .sectors.controller import register as register_sectors
from .staff.controller import register as register_staff
from .visits.controller import register as register_visits

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    prefix = str(getattr(settings, "API_PREFIX", "/api")).rstrip("/")

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            secret_key=app.secret_key,
            token_max_age=int(getattr(settings, "TOKEN_MAX_AGE_SECONDS", DEFAULT_TOKEN_MAX_AGE_SECONDS)),
            default_password=str(getattr(settings, "DEFAULT_STAFF_PASSWORD", DEFAULT_STAFF_PASSWORD)),
        )

    app.extensions[CONTAINER_KEY] = container
    register_error_handlers(app)

    register_staff(app, container, prefix=prefix)
    register_sectors(app, container, prefix=prefix)
    register_visits(app, container, prefix=prefix)
    register_reports(app, container, prefix=prefix)

    return app
