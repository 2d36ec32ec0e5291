from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .auth.controller import register as register_auth
from .container import Container, build_container
from .core.logging import setup_logging
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_members, list_tables
from .history.controller import register as register_history
from .profile.controller import register as register_profile
from .web.controller import register as register_web

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_members(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            token_ttl_hours=int(getattr(settings, "TOKEN_TTL_HOURS", 24)),
            remember_ttl_days=int(getattr(settings, "REMEMBER_TTL_DAYS", 14)),
        )

    register_auth(app, container)
    register_profile(app, container)
    register_history(app, container)
    # Catch-all routes go last.
    register_web(app, container)

    return app
