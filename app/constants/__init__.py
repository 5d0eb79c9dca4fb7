"""Shared constants for the application."""

from app.constants.locales import (
    BASE_LOCALE,
    DEFAULT_LOCALE,
    SUPPORTED_LOCALES,
    TARGET_LOCALES,
    LOCALE_ALIASES,
    is_supported_locale,
)

__all__ = [
    'BASE_LOCALE',
    'DEFAULT_LOCALE',
    'SUPPORTED_LOCALES',
    'TARGET_LOCALES',
    'LOCALE_ALIASES',
    'is_supported_locale',
]
