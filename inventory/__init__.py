"""
Application factory for the Equipment Inventory web UI.

Usage::

    from inventory import create_app
    app = create_app()           # Uses FLASK_ENV to pick config.
    app = create_app("testing")  # Explicit config for tests.
"""

import logging
import os

from flask import Flask, render_template

from .config import config_by_name
from .extensions import csrf, login_manager


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: One of 'development', 'testing', or 'production'.
                     Defaults to the FLASK_ENV environment variable,
                     falling back to 'development'.

    Returns:
        A fully configured Flask application instance.
    """
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")
    config_class = config_by_name.get(config_name)
    if config_class is None:
        raise ValueError(
            f"Unknown config '{config_name}'. "
            f"Valid options: {list(config_by_name.keys())}"
        )

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Refuse to run production with insecure or missing settings.
    if config_name == "production":
        config_class.validate_production_secrets(app.config)

    # -- Initialize extensions ---------------------------------------------
    _register_extensions(app)

    # -- Register blueprints -----------------------------------------------
    _register_blueprints(app)

    # -- Register error handlers -------------------------------------------
    _register_error_handlers(app)

    # -- Register custom CLI commands --------------------------------------
    _register_cli_commands(app)

    # -- Configure logging -------------------------------------------------
    _configure_logging(app)

    return app


def _register_extensions(app: Flask) -> None:
    """Bind all Flask extensions to the application instance."""
    login_manager.init_app(app)
    csrf.init_app(app)

    # Imported here to avoid circular imports with services.
    from .services import auth_service  # pylint: disable=import-outside-toplevel

    @login_manager.user_loader
    def load_user(user_id: str):
        """Rebuild the signed-in user from the Flask session."""
        return auth_service.load_session_user(user_id)


def _register_blueprints(app: Flask) -> None:
    """
    Import and register each blueprint with its URL prefix.

    Blueprints are imported inside this function to avoid circular
    imports.
    """
    # pylint: disable=import-outside-toplevel

    # Main blueprint: landing redirect and health check.
    from .blueprints.main import bp as main_bp

    app.register_blueprint(main_bp)

    # Authentication: login, logout and dev login.
    from .blueprints.auth import bp as auth_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")

    # Equipment: inventory pages, export, terms and history.
    from .blueprints.equipment import bp as equipment_bp

    app.register_blueprint(equipment_bp, url_prefix="/equipment")


def _register_error_handlers(app: Flask) -> None:
    """Register custom error pages for common HTTP error codes."""

    @app.errorhandler(403)
    def forbidden(error):  # pylint: disable=unused-argument
        """Handle 403 Forbidden errors."""
        return render_template("errors/403.html"), 403

    @app.errorhandler(404)
    def not_found(error):  # pylint: disable=unused-argument
        """Handle 404 Not Found errors."""
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def internal_error(error):  # pylint: disable=unused-argument
        """Handle 500 Internal Server Error."""
        return render_template("errors/500.html"), 500


def _register_cli_commands(app: Flask) -> None:
    """Register custom Flask CLI commands (e.g., flask api-check)."""
    from .cli import register_commands  # pylint: disable=import-outside-toplevel

    register_commands(app)


def _configure_logging(app: Flask) -> None:
    """Set the root log level from ``LOG_LEVEL``."""
    log_level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO))

    # urllib3 logs every connection at DEBUG.
    if app.debug:
        logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
