import logging

from flask import Flask
from werkzeug.exceptions import HTTPException

from library_api.config import Config
from library_api.extensions import db
from library_api.utils.responses import json_error


def _log_level(name):
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(_log_level(app.config["LOG_LEVEL"]))

    db.init_app(app)

    if app.config["AUTO_CREATE_SCHEMA"]:
        from library_api.db_schema import ensure_schema
        ensure_schema(app)

    from library_api.db_schema import init_db_command
    app.cli.add_command(init_db_command)

    # the service owns its repository, the repository owns the session
    from library_api.repositories.book_repo import BookRepo
    from library_api.services.book_service import BookService
    app.extensions["book_service"] = BookService(BookRepo(db.session))

    from library_api.controllers.book_controller import book_bp
    from library_api.controllers.health_controller import health_bp
    prefix = app.config["API_PREFIX"].rstrip("/")
    app.register_blueprint(health_bp)
    app.register_blueprint(health_bp, url_prefix=prefix, name="api_health")
    app.register_blueprint(book_bp, url_prefix=f"{prefix}/books")

    @app.errorhandler(HTTPException)
    def http_error(e):
        return json_error(e.name, e.code)

    @app.errorhandler(Exception)
    def unhandled_error(e):
        app.logger.exception(f"[app] unhandled error: {e}")
        return json_error("Internal server error", 500)

    return app
