"""Read-through cache of translated free text (comments, trade notes).

Entries are keyed on the exact source text plus the language pair. A hit
bumps ``access_count``/``last_accessed_at`` on a best-effort basis: the
bookkeeping runs on a small background executor (or inline when
TRANSLATION_CACHE_ASYNC_TOUCH is off) and its failures are only logged.

Entries are never evicted.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from flask import current_app
from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from app import db
from app.models import TranslationCache

logger = logging.getLogger(__name__)

# Small executor for access bookkeeping. Module-scoped to bound thread growth.
_TOUCH_EXECUTOR = ThreadPoolExecutor(max_workers=2, thread_name_prefix='translation-cache')

_KEY_COLUMNS = ['source_text', 'source_language', 'target_language']

_UPSERT_DIALECTS = {
    'postgresql': pg_insert,
    'sqlite': sqlite_insert,
}


class TranslationCacheStore:
    """Cache interface injected into translation callers.

    Uses the Flask-SQLAlchemy session of the current app context.
    """

    def lookup(self, text: str, source_lang: str, target_lang: str) -> str | None:
        """Return the cached translation or None. Exact text match only."""
        cached = TranslationCache.query.filter_by(
            source_text=text,
            source_language=source_lang,
            target_language=target_lang,
        ).first()

        if not cached:
            logger.debug(f"Cache miss {source_lang}->{target_lang} ({len(text)} chars)")
            return None

        logger.debug(f"Cache hit {source_lang}->{target_lang} (id={cached.id})")
        translated = cached.translated_text
        self._schedule_touch(text, source_lang, target_lang)
        return translated

    def store(self, text: str, source_lang: str, target_lang: str,
              translated_text: str, service_used: str | None = None) -> None:
        """Insert or overwrite the entry for this key.

        Concurrent writers for the same key do not raise; the last writer's
        translation is kept and exactly one row exists.
        """
        values = {
            'source_text': text,
            'source_language': source_lang,
            'target_language': target_lang,
            'translated_text': translated_text,
            'service_used': service_used,
            'char_count': len(text),
        }

        insert = _UPSERT_DIALECTS.get(db.session.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(TranslationCache).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=_KEY_COLUMNS,
                set_={
                    'translated_text': stmt.excluded.translated_text,
                    'service_used': stmt.excluded.service_used,
                    'char_count': stmt.excluded.char_count,
                },
            )
            try:
                db.session.execute(stmt)
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise
            return

        try:
            db.session.add(TranslationCache(**values))
            db.session.commit()
        except IntegrityError:
            # Another request stored the same key first
            db.session.rollback()
            TranslationCache.query.filter_by(
                source_text=text,
                source_language=source_lang,
                target_language=target_lang,
            ).update({
                TranslationCache.translated_text: translated_text,
                TranslationCache.service_used: service_used,
                TranslationCache.char_count: values['char_count'],
            }, synchronize_session=False)
            db.session.commit()

    def touch(self, text: str, source_lang: str, target_lang: str) -> None:
        """Record a cache hit. Never raises."""
        try:
            TranslationCache.query.filter_by(
                source_text=text,
                source_language=source_lang,
                target_language=target_lang,
            ).update({
                TranslationCache.access_count: TranslationCache.access_count + 1,
                TranslationCache.last_accessed_at: datetime.utcnow(),
            }, synchronize_session=False)
            db.session.commit()
        except Exception as e:
            logger.warning(f"Cache access tracking failed: {e}")
            db.session.rollback()

    def stats(self) -> dict:
        """Size and usage figures for the admin dashboard."""
        entries, hits, chars = db.session.query(
            func.count(TranslationCache.id),
            func.coalesce(func.sum(TranslationCache.access_count), 0),
            func.coalesce(func.sum(TranslationCache.char_count), 0),
        ).one()
        return {
            'entries': entries,
            'total_hits': int(hits),
            'total_chars': int(chars),
        }

    def _schedule_touch(self, text, source_lang, target_lang):
        if not current_app.config.get('TRANSLATION_CACHE_ASYNC_TOUCH'):
            self.touch(text, source_lang, target_lang)
            return

        app = current_app._get_current_object()

        def _run():
            with app.app_context():
                self.touch(text, source_lang, target_lang)

        try:
            _TOUCH_EXECUTOR.submit(_run)
        except RuntimeError as e:
            # Executor already shut down (interpreter exit)
            logger.warning(f"Could not schedule cache access tracking: {e}")
