"""Admin routes for content translation."""
from flask import Blueprint, jsonify, request
import logging

from app.services.bulk_translation import (
    ALLOWED_TABLES,
    schedule_record_translation,
    translate_record,
)
from app.services.errors import PersistenceError, RecordNotFoundError
from app.services.translation_cache import TranslationCacheStore
from app.utils.auth import admin_required

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)


def _parse_record_id(value):
    """Accept an int or a numeric string; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


# ============================================================================
# CONTENT TRANSLATION
# ============================================================================

@admin_bp.route('/translate', methods=['POST'])
@admin_required
def translate_content():
    """Translate an info page, deck page or tournament into every target locale.

    Body:
    - table: 'info_pages' | 'deck_pages' | 'tournaments'
    - id: Record id
    - fields: Fields to translate (default: title, description)
    - async: Run on the background worker and return 202 immediately
    """
    data = request.get_json(silent=True) or {}
    table = data.get('table')
    raw_id = data.get('id')
    fields = data.get('fields')

    if not table or raw_id is None or raw_id == '':
        return jsonify({'error': 'Missing required fields: table, id'}), 400

    if table not in ALLOWED_TABLES:
        return jsonify({'error': 'Invalid table name'}), 400

    record_id = _parse_record_id(raw_id)
    if record_id is None:
        return jsonify({'error': 'Invalid id'}), 400

    if fields is not None and (
        not isinstance(fields, list) or not all(isinstance(f, str) for f in fields)
    ):
        return jsonify({'error': 'fields must be a list of field names'}), 400

    try:
        if data.get('async'):
            schedule_record_translation(table, record_id, fields)
            return jsonify({
                'success': True,
                'status': 'pending',
                'message': 'Translation scheduled',
            }), 202

        result = translate_record(table, record_id, fields)
    except RecordNotFoundError:
        return jsonify({'error': 'Content not found'}), 404
    except PersistenceError:
        return jsonify({'success': False, 'error': 'Failed to update content'}), 500
    except Exception:
        logger.exception(f'[Admin Translate] Error for {table}/{record_id}')
        return jsonify({'error': 'Internal server error'}), 500

    return jsonify({
        'success': True,
        'message': 'Translation completed',
        'fieldsTranslated': result.fields_translated,
        'languagesCount': result.languages_count,
        'translationStatus': result.status,
    }), 200


@admin_bp.route('/translation-cache/stats', methods=['GET'])
@admin_required
def translation_cache_stats():
    """Size and usage of the translation cache."""
    try:
        return jsonify(TranslationCacheStore().stats()), 200
    except Exception:
        logger.exception('Translation cache stats failed')
        return jsonify({'error': 'Internal server error'}), 500
