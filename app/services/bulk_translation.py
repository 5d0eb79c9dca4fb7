"""Bulk translation of admin-managed content.

Fills the ``<field>_multilingual`` maps of info pages, deck pages and
tournaments for every target locale. Provider calls run one at a time with
a delay between them to stay inside the provider quota, so a run takes
roughly fields x locales x delay. Never call this from a page-render path;
admins trigger it through /api/admin/translate or scripts/bulk_translate.py.
"""
import logging
import time
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.constants.locales import (
    BASE_LOCALE,
    TARGET_LOCALES,
    TRANSLATION_STATUS_COMPLETE,
    TRANSLATION_STATUS_PARTIAL,
    TRANSLATION_STATUS_PENDING,
)
from app.models import DeckPage, InfoPage, Tournament
from app.services.errors import InvalidTableError, PersistenceError, RecordNotFoundError
from app.services.localization import multilingual_key
from app.services.translation import translate_or_raise

logger = logging.getLogger(__name__)

# Admin translation may only touch these tables
ALLOWED_TABLES = {
    'info_pages': InfoPage,
    'deck_pages': DeckPage,
    'tournaments': Tournament,
}

DEFAULT_FIELDS = ('title', 'description')

BulkTranslationResult = namedtuple(
    'BulkTranslationResult', ['fields_translated', 'languages_count', 'status']
)

# One worker: jobs run sequentially so the provider quota is shared fairly
_JOB_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix='bulk-translate')


def get_model_for_table(table):
    """Resolve an allow-listed table name to its model."""
    model = ALLOWED_TABLES.get(table) if isinstance(table, str) else None
    if model is None:
        raise InvalidTableError(f'Invalid table name: {table}')
    return model


def _rate_limit_delay(text: str) -> float:
    config = current_app.config
    if len(text) > config['TRANSLATION_LONG_TEXT_THRESHOLD']:
        return config['TRANSLATION_LONG_DELAY']
    return config['TRANSLATION_SHORT_DELAY']


class _Run:
    """Per-invocation state: target locales, sleep function, fallback count."""

    def __init__(self, table, record_id, target_locales, sleep):
        self.table = table
        self.record_id = record_id
        self.target_locales = tuple(target_locales)
        self.sleep = sleep
        self.fallbacks = 0

    def translate(self, text, locale, label):
        """Translate one value; on failure count it and return the original."""
        try:
            translated, _service = translate_or_raise(text, BASE_LOCALE, locale, use_glossary=True)
            if not translated:
                raise ValueError('empty translation')
            logger.debug(f"[Bulk Translate] {self.table}/{self.record_id} {label} -> {locale}")
            return translated
        except Exception as e:
            logger.error(
                f"[Bulk Translate] {self.table}/{self.record_id} {label} -> {locale} failed, "
                f"keeping original: {e}"
            )
            self.fallbacks += 1
            return text
        finally:
            self.sleep(_rate_limit_delay(text))

    def translate_field(self, base_value, field):
        multilingual = {BASE_LOCALE: base_value}
        for locale in self.target_locales:
            multilingual[locale] = self.translate(base_value, locale, field)
        return multilingual

    def translate_deck_cards(self, cards):
        cards_multilingual = {BASE_LOCALE: cards}

        for locale in self.target_locales:
            # Decks repeat pack names; translate each distinct name once per locale
            pack_names = {}
            translated_cards = []

            for card in cards:
                if not isinstance(card, dict) or not card.get('pack_name'):
                    translated_cards.append(card)
                    continue

                pack_name = card['pack_name']
                if pack_name not in pack_names:
                    pack_names[pack_name] = self.translate(pack_name, locale, 'deck_cards.pack_name')

                translated_card = dict(card)
                translated_card['pack_name'] = pack_names[pack_name]
                translated_cards.append(translated_card)

            cards_multilingual[locale] = translated_cards

        return cards_multilingual


def translate_record(table, record_id, fields=None, target_locales=TARGET_LOCALES,
                     sleep=time.sleep) -> BulkTranslationResult:
    """
    Translate the fields of one content record into every target locale.

    Args:
        table: 'info_pages', 'deck_pages' or 'tournaments'
        record_id: Primary key of the record
        fields: Field names to translate (default: title, description)
        target_locales: Locales to fill in besides the base locale
        sleep: Delay function between provider calls

    Returns:
        BulkTranslationResult with the multilingual columns written.

    Raises:
        InvalidTableError, RecordNotFoundError, PersistenceError
    """
    model = get_model_for_table(table)
    record = db.session.get(model, record_id)
    if record is None:
        raise RecordNotFoundError(f'{table}/{record_id} not found')

    fields = list(fields) if fields else list(DEFAULT_FIELDS)
    run = _Run(table, record_id, target_locales, sleep)
    updates = {}

    logger.info(f"[Bulk Translate] Starting {table}/{record_id}, fields: {', '.join(fields)}")

    for field in fields:
        column = multilingual_key(field)
        if field.endswith('_multilingual') or not hasattr(model, field) or not hasattr(model, column):
            logger.warning(f"[Bulk Translate] {table} has no translatable field {field!r}, skipping")
            continue

        base_value = getattr(record, field)
        if not isinstance(base_value, str) or not base_value.strip():
            continue

        updates[column] = run.translate_field(base_value, field)

    deck_cards = getattr(record, 'deck_cards', None)
    if isinstance(deck_cards, list) and deck_cards:
        updates['deck_cards_multilingual'] = run.translate_deck_cards(deck_cards)

    status = record.translation_status
    if updates:
        status = TRANSLATION_STATUS_PARTIAL if run.fallbacks else TRANSLATION_STATUS_COMPLETE

    # Single write-back; nothing is committed if this fails
    try:
        for column, value in updates.items():
            setattr(record, column, value)
        record.translation_status = status
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"[Bulk Translate] Update error for {table}/{record_id}: {e}")
        raise PersistenceError(f'Failed to update {table}/{record_id}') from e

    logger.info(
        f"[Bulk Translate] Completed {table}/{record_id}: {len(updates)} fields, "
        f"{run.fallbacks} fallbacks, status={status}"
    )

    return BulkTranslationResult(list(updates), len(run.target_locales), status)


def schedule_record_translation(table, record_id, fields=None):
    """Mark a record pending and translate it on the background worker.

    Validation errors are raised immediately; the returned future resolves
    to the BulkTranslationResult (or None if the job failed).
    """
    model = get_model_for_table(table)
    record = db.session.get(model, record_id)
    if record is None:
        raise RecordNotFoundError(f'{table}/{record_id} not found')

    previous_status = record.translation_status
    record.translation_status = TRANSLATION_STATUS_PENDING
    db.session.commit()

    app = current_app._get_current_object()

    def _job():
        with app.app_context():
            try:
                return translate_record(table, record_id, fields)
            except Exception:
                logger.exception(f"[Bulk Translate] Background job failed for {table}/{record_id}")
                _restore_status(model, record_id, previous_status)
                return None

    return _JOB_EXECUTOR.submit(_job)


def _restore_status(model, record_id, status):
    try:
        record = db.session.get(model, record_id)
        if record is not None:
            record.translation_status = status
            db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning(f"Could not restore translation status of {model.__tablename__}/{record_id}: {e}")
