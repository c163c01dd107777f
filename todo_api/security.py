"""
Todo API - Security Validation

Startup checks for insecure configuration.
"""

import warnings

from todo_api.config import settings

DEFAULT_JWT_SECRET = "dev-secret-key-change-in-production"
MIN_SECRET_LENGTH = 32


def validate_security_config() -> None:
    """
    Validate security configuration on startup.

    Issues warnings for insecure configurations but does not crash the application
    (to allow tests and development to run).
    """
    if settings.is_production and settings.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
        warnings.warn(
            "SECURITY WARNING: Using default JWT_SECRET_KEY in production. "
            "Set JWT_SECRET_KEY environment variable to a strong secret.",
            UserWarning,
        )
    elif settings.is_production and len(settings.JWT_SECRET_KEY) < MIN_SECRET_LENGTH:
        warnings.warn(
            "SECURITY WARNING: JWT_SECRET_KEY is too short for production. "
            f"Use at least {MIN_SECRET_LENGTH} characters.",
            UserWarning,
        )

    if "*" in settings.CORS_ORIGINS:
        warnings.warn(
            "SECURITY WARNING: CORS wildcard (*) detected. "
            "Set specific origins via CORS_ORIGINS.",
            UserWarning,
        )
