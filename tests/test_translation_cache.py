"""
Tests for the translation cache store.
"""

import threading
from unittest.mock import patch

from app import db
from app.models import TranslationCache
from app.services.translation_cache import TranslationCacheStore


class TestLookup:

    def test_miss_returns_none(self, db_session):
        assert TranslationCacheStore().lookup('テスト', 'ja', 'en') is None

    def test_hit_returns_translation_and_tracks_access(self, db_session):
        store = TranslationCacheStore()
        store.store('テスト', 'ja', 'en', 'Test', 'google-translate')

        assert store.lookup('テスト', 'ja', 'en') == 'Test'
        assert store.lookup('テスト', 'ja', 'en') == 'Test'

        entry = TranslationCache.query.one()
        db.session.refresh(entry)
        assert entry.access_count == 2
        assert entry.last_accessed_at is not None

    def test_exact_match_only(self, db_session):
        store = TranslationCacheStore()
        store.store('テスト', 'ja', 'en', 'Test')

        assert store.lookup('テスト ', 'ja', 'en') is None
        assert store.lookup('テスト', 'ja', 'ko') is None
        assert store.lookup('テスト', 'en', 'en') is None

    def test_bookkeeping_failure_does_not_break_read(self, db_session):
        store = TranslationCacheStore()
        store.store('テスト', 'ja', 'en', 'Test')

        with patch('app.services.translation_cache.datetime') as clock:
            clock.utcnow.side_effect = RuntimeError('clock unavailable')
            assert store.lookup('テスト', 'ja', 'en') == 'Test'


class TestStore:

    def test_store_twice_keeps_one_entry(self, db_session):
        store = TranslationCacheStore()
        store.store('テスト', 'ja', 'en', 'Test', 'google-translate')
        store.store('テスト', 'ja', 'en', 'Test', 'google-translate')

        assert TranslationCache.query.filter_by(
            source_text='テスト', source_language='ja', target_language='en'
        ).count() == 1

    def test_last_writer_wins(self, db_session):
        store = TranslationCacheStore()
        store.store('テスト', 'ja', 'en', 'Test', 'deepl')
        store.store('テスト', 'ja', 'en', 'A test', 'google-translate-with-glossary')

        entry = TranslationCache.query.one()
        db.session.refresh(entry)
        assert entry.translated_text == 'A test'
        assert entry.service_used == 'google-translate-with-glossary'

    def test_records_char_count(self, db_session):
        TranslationCacheStore().store('こんにちは', 'ja', 'ko', '안녕하세요')
        assert TranslationCache.query.one().char_count == 5

    def test_language_pairs_are_separate_entries(self, db_session):
        store = TranslationCacheStore()
        store.store('テスト', 'ja', 'en', 'Test')
        store.store('テスト', 'ja', 'fr', 'Essai')

        assert TranslationCache.query.count() == 2

    def test_insert_then_update_without_native_upsert(self, db_session):
        store = TranslationCacheStore()
        with patch.dict('app.services.translation_cache._UPSERT_DIALECTS', clear=True):
            store.store('テスト', 'ja', 'en', 'Test', 'deepl')
            store.store('テスト', 'ja', 'en', 'A longer test', 'google-translate')

        db.session.expire_all()
        entry = TranslationCache.query.one()
        assert entry.translated_text == 'A longer test'
        assert entry.service_used == 'google-translate'
        assert entry.char_count == 3

    def test_concurrent_stores_of_same_key(self, app, db_session):
        errors = []

        def worker(translated_text):
            with app.app_context():
                try:
                    TranslationCacheStore().store('テスト', 'ja', 'en', translated_text)
                except Exception as e:
                    errors.append(e)

        threads = [threading.Thread(target=worker, args=(text,)) for text in ('Test', 'A test')]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert errors == []
        db.session.expire_all()
        entries = TranslationCache.query.all()
        assert len(entries) == 1
        assert entries[0].translated_text in ('Test', 'A test')


class TestStats:

    def test_empty(self, db_session):
        assert TranslationCacheStore().stats() == {'entries': 0, 'total_hits': 0, 'total_chars': 0}

    def test_counts(self, db_session):
        store = TranslationCacheStore()
        store.store('テスト', 'ja', 'en', 'Test')
        store.store('こんにちは', 'ja', 'en', 'Hello')
        store.lookup('テスト', 'ja', 'en')

        assert store.stats() == {'entries': 2, 'total_hits': 1, 'total_chars': 8}
