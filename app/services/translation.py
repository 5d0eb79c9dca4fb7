"""Translation service with caching, glossary support and swappable providers.

Providers:
- google: Cloud Translation v3 REST API. Supports per-language-pair
  glossaries (``pokemon-cards-{src}-{tgt}``) so card names come out right.
- deepl: DeepL REST API, no glossary.

Failure policy: ``translate`` never raises. Any provider problem is logged
and the source text is returned unchanged. ``translate_or_raise`` exposes
the failure for callers (the bulk translator) that record their own
fallback.
"""
import logging
import time
from collections import namedtuple

import requests
from flask import current_app

from app.services.errors import GlossaryUnavailableError, ProviderError
from app.services.locale import normalize_locale

logger = logging.getLogger(__name__)

SERVICE_GOOGLE_GLOSSARY = 'google-translate-with-glossary'
SERVICE_GOOGLE = 'google-translate'
SERVICE_DEEPL = 'deepl'

GOOGLE_API_BASE = 'https://translation.googleapis.com/v3'
GLOSSARY_ID_TEMPLATE = 'pokemon-cards-{source}-{target}'

# App locale -> provider language code (anything missing passes through)
GOOGLE_LANGUAGE_CODES = {
    'zh-cn': 'zh-CN',
    'zh-tw': 'zh-TW',
}
DEEPL_SOURCE_CODES = {
    'zh-cn': 'ZH',
    'zh-tw': 'ZH',
}
DEEPL_TARGET_CODES = {
    'en': 'EN-US',
    'zh-cn': 'ZH-HANS',
    'zh-tw': 'ZH-HANT',
}

TranslationResult = namedtuple('TranslationResult', ['translated_text', 'cached', 'skipped'])

# Track API key validity; once the key is known bad, stop calling the provider
_api_key_invalid = False

# Circuit breaker: after N consecutive failures, pause for a cooldown
_consecutive_failures = 0
_MAX_CONSECUTIVE_FAILURES = 3
_failure_cooldown_until = 0  # timestamp when we can retry
_COOLDOWN_SECONDS = 300      # 5 minutes

# Card-name dictionary: target locale -> {japanese term: localized term}
_term_dictionaries = {}
_term_dictionaries_loaded_at = {}
TERM_DICTIONARY_TTL = 3600  # 1 hour


def is_translation_enabled() -> bool:
    """Check if the configured provider has credentials."""
    service = current_app.config.get('TRANSLATION_SERVICE')

    if service == 'google':
        return bool(current_app.config.get('GOOGLE_TRANSLATE_API_KEY', '').strip())
    if service == 'deepl':
        return bool(current_app.config.get('DEEPL_API_KEY', '').strip())
    return False


def reset_provider_state():
    """Forget breaker state and cached dictionaries (tests, admin resets)."""
    global _api_key_invalid, _consecutive_failures, _failure_cooldown_until
    _api_key_invalid = False
    _consecutive_failures = 0
    _failure_cooldown_until = 0
    clear_card_name_cache()


def _is_circuit_open() -> bool:
    """Check if we should skip translation due to too many failures."""
    global _consecutive_failures, _failure_cooldown_until

    # Key is permanently invalid (got API_KEY_INVALID error)
    if _api_key_invalid:
        return True

    if _consecutive_failures >= _MAX_CONSECUTIVE_FAILURES:
        if time.time() < _failure_cooldown_until:
            return True
        # Cooldown expired, reset and allow retry
        _consecutive_failures = 0
        _failure_cooldown_until = 0
        logger.info("Translation circuit breaker reset, retrying")

    return False


def _record_success():
    global _consecutive_failures
    _consecutive_failures = 0


def _record_failure(permanent: bool = False):
    global _consecutive_failures, _failure_cooldown_until, _api_key_invalid

    if permanent:
        _api_key_invalid = True
        logger.error(
            "Translation API key is INVALID. Translation is now DISABLED. "
            "Set a valid key or remove it to skip translation."
        )
        return

    _consecutive_failures += 1
    if _consecutive_failures >= _MAX_CONSECUTIVE_FAILURES:
        _failure_cooldown_until = time.time() + _COOLDOWN_SECONDS
        logger.warning(
            f"Translation failed {_consecutive_failures} times in a row. "
            f"Pausing for {_COOLDOWN_SECONDS}s."
        )


def to_provider_code(locale: str, service: str = 'google', role: str = 'target') -> str:
    """Convert an app locale (``zh-tw``) to the provider's code (``zh-TW``)."""
    locale = locale.lower()
    if service == 'deepl':
        mapping = DEEPL_TARGET_CODES if role == 'target' else DEEPL_SOURCE_CODES
        return mapping.get(locale, locale.upper())
    return GOOGLE_LANGUAGE_CODES.get(locale, locale)


def glossary_name(source_lang: str, target_lang: str) -> str:
    """Full resource name of the glossary for a language pair."""
    config = current_app.config
    glossary_id = GLOSSARY_ID_TEMPLATE.format(source=source_lang, target=target_lang)
    return (
        f"projects/{config['GOOGLE_CLOUD_PROJECT_ID']}"
        f"/locations/{config['GOOGLE_GLOSSARY_LOCATION']}"
        f"/glossaries/{glossary_id}"
    )


def _is_glossary_error(error: dict) -> bool:
    message = str(error.get('message', '')).lower()
    return error.get('status') == 'NOT_FOUND' or 'glossary' in message


def _is_invalid_key_error(error: dict) -> bool:
    for detail in error.get('details', []) or []:
        if isinstance(detail, dict) and detail.get('reason') == 'API_KEY_INVALID':
            return True
    return False


def google_translate(text: str, source_lang: str, target_lang: str,
                     glossary: str | None = None) -> str:
    """Translate using the Cloud Translation v3 API.

    When ``glossary`` is given the request is sent to the glossary's region
    and the glossary-biased output is preferred over the generic one.

    Raises:
        GlossaryUnavailableError: the glossary does not exist or was rejected
        ProviderError: any other failure
    """
    config = current_app.config
    location = config['GOOGLE_GLOSSARY_LOCATION'] if glossary else 'global'
    url = f"{GOOGLE_API_BASE}/projects/{config['GOOGLE_CLOUD_PROJECT_ID']}/locations/{location}:translateText"

    payload = {
        'contents': [text],
        'mimeType': 'text/plain',
        'sourceLanguageCode': to_provider_code(source_lang),
        'targetLanguageCode': to_provider_code(target_lang),
    }
    if glossary:
        payload['glossaryConfig'] = {'glossary': glossary}

    try:
        response = requests.post(
            url,
            params={'key': config['GOOGLE_TRANSLATE_API_KEY']},
            json=payload,
            timeout=config['TRANSLATION_TIMEOUT'],
        )
        result = response.json()
    except requests.Timeout:
        _record_failure()
        raise ProviderError('Google Translate timeout')
    except (requests.RequestException, ValueError) as e:
        _record_failure()
        raise ProviderError(f'Google Translate request failed: {e}')

    if not isinstance(result, dict):
        _record_failure()
        raise ProviderError('Google Translate unexpected response format')

    if 'error' in result:
        error = result['error'] if isinstance(result['error'], dict) else {}
        message = error.get('message', 'unknown')

        if _is_invalid_key_error(error):
            _record_failure(permanent=True)
            raise ProviderError(f'Google Translate rejected API key: {message}', retryable=False)

        if glossary and _is_glossary_error(error):
            raise GlossaryUnavailableError(f'Glossary {glossary} unavailable: {message}')

        _record_failure()
        raise ProviderError(f'Google Translate error: {message}')

    # Prefer glossary output when the provider returned it
    for key in ('glossaryTranslations', 'translations'):
        translations = result.get(key) or []
        if translations and translations[0].get('translatedText'):
            _record_success()
            return translations[0]['translatedText']

    _record_failure()
    raise ProviderError('Google Translate returned no translations')


def deepl_translate(text: str, source_lang: str, target_lang: str) -> str:
    """Translate using the DeepL API."""
    config = current_app.config

    headers = {'Authorization': f"DeepL-Auth-Key {config['DEEPL_API_KEY']}"}
    data = {
        'text': [text],
        'source_lang': to_provider_code(source_lang, 'deepl', role='source'),
        'target_lang': to_provider_code(target_lang, 'deepl'),
    }

    try:
        response = requests.post(
            config['DEEPL_API_URL'],
            headers=headers,
            data=data,
            timeout=config['TRANSLATION_TIMEOUT'],
        )
        if response.status_code == 403:
            _record_failure(permanent=True)
            raise ProviderError('DeepL rejected API key', retryable=False)
        result = response.json()
    except requests.Timeout:
        _record_failure()
        raise ProviderError('DeepL timeout')
    except (requests.RequestException, ValueError) as e:
        _record_failure()
        raise ProviderError(f'DeepL request failed: {e}')

    translations = result.get('translations') if isinstance(result, dict) else None
    if translations:
        _record_success()
        return translations[0]['text']

    _record_failure()
    message = result.get('message', 'unknown') if isinstance(result, dict) else 'unknown'
    raise ProviderError(f'DeepL error: {message}')


def _normalize_pair(source_lang: str, target_lang: str) -> tuple[str, str]:
    source = normalize_locale(source_lang) or str(source_lang).lower()
    target = normalize_locale(target_lang) or str(target_lang).lower()
    return source, target


def translate_or_raise(text: str, source_lang: str, target_lang: str,
                       use_glossary: bool = True) -> tuple[str, str | None]:
    """Translate text, raising ProviderError on failure.

    Returns:
        (translated text, service label). The label is None when no
        provider call was needed.
    """
    source, target = _normalize_pair(source_lang, target_lang)

    if source == target or not text or not text.strip():
        return text, None

    if not is_translation_enabled():
        raise ProviderError('Translation service not configured', retryable=False)

    if _is_circuit_open():
        raise ProviderError('Translation paused after repeated failures')

    service = current_app.config.get('TRANSLATION_SERVICE')

    if service == 'google':
        if use_glossary:
            glossary = glossary_name(source, target)
            try:
                return google_translate(text, source, target, glossary=glossary), SERVICE_GOOGLE_GLOSSARY
            except ProviderError as e:
                # Any glossary-path failure gets one plain attempt, unless the
                # key is bad or this failure just tripped the breaker
                if not e.retryable:
                    raise
                if not isinstance(e, GlossaryUnavailableError) and _is_circuit_open():
                    raise
                logger.warning(f"Glossary translation failed ({e}); using standard translation")
        return google_translate(text, source, target), SERVICE_GOOGLE

    if service == 'deepl':
        return deepl_translate(text, source, target), SERVICE_DEEPL

    raise ProviderError(f'Unknown translation service: {service}', retryable=False)


def translate(text: str, source_lang: str, target_lang: str, use_glossary: bool = True) -> str:
    """Translate text; returns the original text if anything goes wrong."""
    try:
        translated, _service = translate_or_raise(text, source_lang, target_lang, use_glossary)
        return translated
    except Exception as e:
        logger.warning(f"Translation {source_lang}->{target_lang} failed: {e}")
        return text


def get_term_dictionary(target_lang: str) -> dict:
    """Japanese term -> localized term for ``target_lang``.

    Built from card names plus glossary entries (glossary wins) and cached
    in-process for an hour.
    """
    from app.models import Card, GlossaryEntry

    now = time.time()
    loaded_at = _term_dictionaries_loaded_at.get(target_lang, 0)
    if target_lang in _term_dictionaries and now - loaded_at < TERM_DICTIONARY_TTL:
        return _term_dictionaries[target_lang]

    dictionary = {}
    for name, name_multilingual in Card.query.with_entities(Card.name, Card.name_multilingual):
        localized = (name_multilingual or {}).get(target_lang)
        ja_name = (name_multilingual or {}).get('ja') or name
        if localized and ja_name:
            dictionary[ja_name] = localized

    entries = GlossaryEntry.query.filter_by(source_language='ja', target_language=target_lang)
    for entry in entries:
        dictionary[entry.source_term] = entry.target_term

    _term_dictionaries[target_lang] = dictionary
    _term_dictionaries_loaded_at[target_lang] = now
    return dictionary


def replace_card_names(text: str, target_lang: str) -> str:
    """Swap Japanese card names the provider left untouched for localized ones.

    Longest names are replaced first so ``ピカチュウex`` wins over
    ``ピカチュウ``.
    """
    try:
        dictionary = get_term_dictionary(target_lang)
    except Exception as e:
        logger.warning(f"Error loading card name dictionary: {e}")
        return text

    result = text
    for ja_name in sorted(dictionary, key=len, reverse=True):
        localized = dictionary[ja_name]
        if localized != ja_name and ja_name in result:
            result = result.replace(ja_name, localized)
    return result


def clear_card_name_cache():
    """Drop the cached dictionaries (call after importing new cards)."""
    _term_dictionaries.clear()
    _term_dictionaries_loaded_at.clear()


def translate_text_cached(text: str, source_lang: str, target_lang: str, cache=None) -> TranslationResult:
    """
    Translate free text through the translation cache.

    FAST PATHS (no API call):
    - Source and target language are the same (skipped=True)
    - Cached translation exists (cached=True)

    Args:
        text: Text to translate
        source_lang: Source locale
        target_lang: Target locale
        cache: TranslationCacheStore-like object (lookup/store)

    Returns:
        TranslationResult; translated_text is the original text if the
        provider failed.
    """
    source, target = _normalize_pair(source_lang, target_lang)

    if source == target:
        return TranslationResult(text, False, True)

    if cache is None:
        from app.services.translation_cache import TranslationCacheStore
        cache = TranslationCacheStore()

    try:
        cached = cache.lookup(text, source, target)
    except Exception as e:
        logger.warning(f"Cache lookup error: {e}")
        cached = None

    if cached is not None:
        return TranslationResult(cached, True, False)

    try:
        translated, service = translate_or_raise(text, source, target, use_glossary=True)
    except Exception as e:
        logger.warning(f"Translation {source}->{target} failed, returning original: {e}")
        return TranslationResult(text, False, False)

    # Blank text never reaches the provider; nothing to cache
    if service is None:
        return TranslationResult(translated, False, False)

    if service != SERVICE_GOOGLE_GLOSSARY:
        translated = replace_card_names(translated, target)

    try:
        cache.store(text, source, target, translated, service)
    except Exception as e:
        logger.warning(f"Cache storage error: {e}")

    return TranslationResult(translated, False, False)
