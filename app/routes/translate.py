"""Comment translation route.

Translates user comments through the translation cache, with glossary
support for accurate card names. Translation is best-effort: when the
provider fails the original text comes back with a 200.
"""

import logging
from flask import Blueprint, request, jsonify

from app.services.locale import normalize_locale
from app.services.translation import translate_text_cached

logger = logging.getLogger(__name__)

translate_bp = Blueprint('translate', __name__)


@translate_bp.route('/translate-comment', methods=['POST'])
def translate_comment():
    """Translate a comment.

    Body:
    - text: Text to translate
    - sourceLang: Language of the text
    - targetLang: Language to translate into

    Returns {translatedText, cached} plus skipped=true when both languages
    are the same.
    """
    data = request.get_json(silent=True) or {}
    text = data.get('text')
    source_lang = data.get('sourceLang')
    target_lang = data.get('targetLang')

    if not text or not source_lang or not target_lang or not isinstance(text, str):
        return jsonify({'error': 'Missing required fields: text, sourceLang, targetLang'}), 400

    source = normalize_locale(source_lang)
    target = normalize_locale(target_lang)
    if not source or not target:
        return jsonify({'error': 'Unsupported language'}), 400

    logger.info(f"Translation request {source}->{target}: {text[:50]!r}")

    try:
        result = translate_text_cached(text, source, target)
    except Exception:
        logger.exception('Translation API error')
        return jsonify({'error': 'Translation failed'}), 500

    response = {
        'translatedText': result.translated_text,
        'cached': result.cached,
    }
    if result.skipped:
        response['skipped'] = True

    return jsonify(response), 200
