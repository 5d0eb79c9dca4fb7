"""Locale constants shared by the models, services and routes.

Must stay in sync with:
  frontend: i18n.ts (locales, defaultLocale)
"""

# Base locale: content is authored in Japanese
BASE_LOCALE = 'ja'
DEFAULT_LOCALE = BASE_LOCALE

SUPPORTED_LOCALES = ('ja', 'en', 'zh-cn', 'zh-tw', 'ko', 'fr', 'es', 'de')

# Locales the bulk translator fills in for every translatable field
TARGET_LOCALES = tuple(locale for locale in SUPPORTED_LOCALES if locale != BASE_LOCALE)

# Alias -> supported locale (after lower-casing and '_' -> '-')
LOCALE_ALIASES = {
    'zh': 'zh-cn',
    'zh-hans': 'zh-cn',
    'zh-sg': 'zh-cn',
    'zh-hans-cn': 'zh-cn',
    'zh-hant': 'zh-tw',
    'zh-hk': 'zh-tw',
    'zh-mo': 'zh-tw',
    'zh-hant-tw': 'zh-tw',
    'jp': 'ja',
    'kr': 'ko',
}

# Translation status lifecycle for content records
TRANSLATION_STATUS_NONE = 'none'
TRANSLATION_STATUS_PENDING = 'pending'
TRANSLATION_STATUS_PARTIAL = 'partial'
TRANSLATION_STATUS_COMPLETE = 'complete'


def is_supported_locale(locale) -> bool:
    """Check if a locale tag is in the supported set (exact match)."""
    return locale in SUPPORTED_LOCALES
