"""Locale resolution for incoming requests.

Priority: explicit ``locale`` parameter > ``Accept-Language`` header >
default locale. Resolution never raises; garbage input resolves to the
default locale.
"""
import logging
import math

from app.constants.locales import (
    DEFAULT_LOCALE,
    LOCALE_ALIASES,
    is_supported_locale,
)

logger = logging.getLogger(__name__)


def normalize_locale(tag) -> str | None:
    """Normalize a language tag to a supported locale.

    Lower-cases, uses '-' as the region separator and maps known aliases
    (``zh_CN`` -> ``zh-cn``, ``zh-Hant`` -> ``zh-tw``). Tags with an
    unsupported region fall back to their primary subtag (``en-US`` ->
    ``en``). Returns None when nothing matches.
    """
    if not isinstance(tag, str):
        return None

    normalized = tag.strip().lower().replace('_', '-')
    if not normalized:
        return None

    normalized = LOCALE_ALIASES.get(normalized, normalized)
    if is_supported_locale(normalized):
        return normalized

    primary = normalized.split('-')[0]
    primary = LOCALE_ALIASES.get(primary, primary)
    if is_supported_locale(primary):
        return primary

    return None


def parse_accept_language(header) -> list[tuple[str, float]]:
    """Parse an Accept-Language header into (tag, q) pairs, best first.

    Malformed entries and entries with q=0 are dropped. Ties keep header
    order.
    """
    if not header or not isinstance(header, str):
        return []

    entries = []
    for position, part in enumerate(header.split(',')):
        pieces = [p.strip() for p in part.split(';')]
        tag = pieces[0]
        if not tag or tag == '*':
            continue

        q = 1.0
        for param in pieces[1:]:
            if param.lower().startswith('q='):
                try:
                    q = float(param[2:])
                except ValueError:
                    q = None
                break
        if q is None or math.isnan(q) or q <= 0 or q > 1:
            continue

        entries.append((position, tag, q))

    entries.sort(key=lambda e: (-e[2], e[0]))
    return [(tag, q) for _, tag, q in entries]


def resolve_locale(explicit=None, accept_language=None) -> str:
    """Determine the display locale for a request.

    Args:
        explicit: ``locale`` query parameter (may be None)
        accept_language: raw Accept-Language header (may be None)

    Returns:
        A supported locale tag; DEFAULT_LOCALE when nothing matches.
    """
    if explicit:
        locale = normalize_locale(explicit)
        if locale:
            return locale
        logger.debug(f"Unsupported locale parameter {explicit!r}, trying Accept-Language")

    for tag, _q in parse_accept_language(accept_language):
        locale = normalize_locale(tag)
        if locale:
            return locale

    return DEFAULT_LOCALE


def get_request_locale() -> str:
    """Resolve the locale of the current Flask request."""
    from flask import request

    return resolve_locale(
        request.args.get('locale'),
        request.headers.get('Accept-Language'),
    )
