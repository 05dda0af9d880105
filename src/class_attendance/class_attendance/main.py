from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .core.settings import EngineSettings
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

REPO_ROOT = Path(__file__).resolve().parents[3]


def setup_logging(app: Flask, settings) -> None:
    """Route package and Flask logs to stderr, plus LOG_FILE when configured."""
    level = getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO)
    formatter = logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file = getattr(settings, "LOG_FILE", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    package_logger = logging.getLogger(__package__)
    package_logger.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        package_logger.addHandler(handler)
        app.logger.addHandler(handler)
    app.logger.setLevel(level)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(app, settings)
    app.logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        app.logger.info("demo seed ready")

    container = build_container(db_config=db_config, engine=EngineSettings.from_settings(settings))
    register_attendance(app, container)

    @app.route("/health")
    def health_check():
        return jsonify({"status": "healthy", "service": "class-attendance"})

    return app
