"""
Application configuration classes.

Each class represents a deployment environment. The factory function
``create_app`` in ``inventory/__init__.py`` selects the appropriate
config based on the FLASK_ENV environment variable.

The application keeps no database of its own; every record lives
behind the remote inventory API configured by
``INVENTORY_API_BASE_URL``.
"""

import logging
import os

# Module-level logger for startup warnings emitted by config classes.
_logger = logging.getLogger(__name__)

# Sentinel for detecting an unset SECRET_KEY in production.
_DEFAULT_SECRET_KEY = "dev-secret-change-me"


class BaseConfig:
    """
    Shared configuration values inherited by all environments.

    Secrets and endpoints are loaded from environment variables so
    they never appear in source control.
    """

    # -- Flask core --------------------------------------------------------
    SECRET_KEY: str = os.environ.get("SECRET_KEY", _DEFAULT_SECRET_KEY)

    # -- Session cookie hardening ------------------------------------------
    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = "Lax"
    # ProductionConfig overrides this to True (requires HTTPS).
    SESSION_COOKIE_SECURE: bool = False

    # Expire idle sessions after 8 hours (one working day).
    PERMANENT_SESSION_LIFETIME: int = int(
        os.environ.get("PERMANENT_SESSION_LIFETIME", "28800")
    )

    # -- Remote inventory API ----------------------------------------------
    INVENTORY_API_BASE_URL: str = os.environ.get(
        "INVENTORY_API_BASE_URL", "http://localhost:3001/api"
    )
    # Optional bearer token sent with every request.
    INVENTORY_API_KEY: str = os.environ.get("INVENTORY_API_KEY", "")
    # Seconds to wait for the API before giving up on a request.
    INVENTORY_API_TIMEOUT: float = float(
        os.environ.get("INVENTORY_API_TIMEOUT", "10")
    )

    # -- Term documents ----------------------------------------------------
    # Company name printed on the responsibility term header.
    COMPANY_NAME: str = os.environ.get("COMPANY_NAME", "Minha Empresa")

    # -- Dev login guard ---------------------------------------------------
    # Even when DEBUG is True, the dev-login route stays disabled unless
    # this is explicitly set to "true" in the environment.
    DEV_LOGIN_ENABLED: bool = (
        os.environ.get("DEV_LOGIN_ENABLED", "false").lower() == "true"
    )

    # -- Logging -----------------------------------------------------------
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # =====================================================================
    # Production validation helpers
    # =====================================================================

    @classmethod
    def validate_production_secrets(cls, app_config: dict) -> None:
        """
        Verify that all required settings are present for production.

        Called by ``create_app()`` when ``config_name == 'production'``.
        Raises ``RuntimeError`` for hard requirements and logs warnings
        for soft requirements.

        Args:
            app_config: The ``app.config`` dict after loading the
                        config class.

        Raises:
            RuntimeError: If any critical setting is missing or still
                          set to its insecure default value.
        """
        errors: list[str] = []

        if app_config.get("SECRET_KEY") == _DEFAULT_SECRET_KEY:
            errors.append(
                "SECRET_KEY is still the insecure default. "
                "Generate one with: python -c "
                '"import secrets; print(secrets.token_hex(32))"'
            )

        if not app_config.get("INVENTORY_API_BASE_URL"):
            errors.append(
                "INVENTORY_API_BASE_URL is not set. "
                "The application cannot load or save equipment without it."
            )

        if errors:
            combined = "\n  - ".join(errors)
            raise RuntimeError(f"Production configuration errors:\n  - {combined}")

        # -- API key (soft warning) ----------------------------------------
        if not app_config.get("INVENTORY_API_KEY"):
            _logger.warning(
                "INVENTORY_API_KEY is not set — requests to the inventory "
                "API will be sent without an Authorization header."
            )

        # -- LOG_LEVEL sanity check (soft warning) -------------------------
        if app_config.get("LOG_LEVEL", "").upper() == "DEBUG":
            _logger.warning(
                "LOG_LEVEL=DEBUG is not recommended in production — "
                "request payloads may appear in logs. "
                "Consider INFO or WARNING."
            )


class DevelopmentConfig(BaseConfig):
    """Development environment: verbose logging, dev login enabled."""

    DEBUG: bool = True
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "DEBUG")

    DEV_LOGIN_ENABLED: bool = (
        os.environ.get("DEV_LOGIN_ENABLED", "true").lower() == "true"
    )


class TestingConfig(BaseConfig):
    """
    Testing environment.

    WTF_CSRF_ENABLED is disabled so form submissions in tests don't
    need CSRF tokens.  The API base URL points at a host that tests
    replace with a fake client.
    """

    TESTING: bool = True
    WTF_CSRF_ENABLED: bool = False
    SECRET_KEY: str = "testing-secret"

    INVENTORY_API_BASE_URL: str = "http://inventory-api.test/api"
    INVENTORY_API_KEY: str = ""
    COMPANY_NAME: str = "Empresa Teste"
    LOG_LEVEL: str = "DEBUG"

    DEV_LOGIN_ENABLED: bool = True


class ProductionConfig(BaseConfig):
    """
    Production environment: strict settings, no debug output.

    The application factory calls ``validate_production_secrets()`` at
    startup and will refuse to launch if critical values are missing.
    """

    DEBUG: bool = False
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "WARNING")

    SESSION_COOKIE_SECURE: bool = True

    # -- Dev login: always disabled in production --------------------------
    DEV_LOGIN_ENABLED: bool = False


# Lookup dict used by the application factory.
config_by_name: dict[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
