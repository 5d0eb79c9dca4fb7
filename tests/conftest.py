"""
Pytest configuration and fixtures for testing the localization API.
"""

import os
import sys
from unittest.mock import Mock, patch

import pytest
import requests
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app, db
from app.models import Card, DeckPage, InfoPage, Tournament, TradePost
from app.services.translation import reset_provider_state

fake = Faker(['ja_JP'])

ADMIN_SECRET = 'test-admin-secret'


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture(autouse=True)
def reset_translation_state():
    """Circuit breaker and term dictionaries are module-level; reset per test."""
    reset_provider_state()
    yield
    reset_provider_state()


@pytest.fixture
def admin_headers():
    return {'X-Admin-Secret': ADMIN_SECRET}


def google_response(translated_text=None, glossary_text=None, error=None):
    """Build a fake Cloud Translation v3 response."""
    response = Mock(status_code=200 if error is None else error.get('code', 400))
    if error is not None:
        body = {'error': error}
    else:
        body = {'translations': [{'translatedText': translated_text}]}
        if glossary_text is not None:
            body['glossaryTranslations'] = [{'translatedText': glossary_text}]
    response.json.return_value = body
    return response


def fake_google_translate(url, params=None, json=None, timeout=None, **kwargs):
    """Echo translator: '[<target>] <text>', via the glossary when one is sent."""
    translated = f"[{json['targetLanguageCode']}] {json['contents'][0]}"
    if 'glossaryConfig' in json:
        return google_response(translated, glossary_text=translated)
    return google_response(translated)


@pytest.fixture
def mock_provider():
    """Patch the HTTP seam of the translation provider."""
    with patch('app.services.translation.requests.post', side_effect=fake_google_translate) as post:
        yield post


@pytest.fixture
def failing_provider():
    """Provider whose every call fails at the network level."""
    with patch(
        'app.services.translation.requests.post',
        side_effect=requests.ConnectionError('connection refused'),
    ) as post:
        yield post


def _add(instance):
    db.session.add(instance)
    db.session.commit()
    return instance


@pytest.fixture
def info_page(app, db_session):
    """An untranslated info page."""
    return _add(InfoPage(
        title='新パック発売',
        description='最新の拡張パックの情報をまとめました。',
        is_published=True,
    ))


@pytest.fixture
def deck_page(app, db_session):
    """A deck page with a card list."""
    return _add(DeckPage(
        title='ピカチュウexデッキ',
        description='速攻型のデッキです。',
        deck_cards=[
            {'card_id': 1, 'name': 'ピカチュウex', 'quantity': 2, 'pack_name': '最強の遺伝子'},
            {'card_id': 2, 'name': 'ゼブライカ', 'quantity': 2, 'pack_name': '最強の遺伝子'},
            {'card_id': 3, 'name': 'モンスターボール', 'quantity': 2},
        ],
    ))


@pytest.fixture
def tournament(app, db_session):
    return _add(Tournament(
        title='週末大会',
        description=fake.text(max_nb_chars=80),
        title_multilingual={'ja': '週末大会', 'en': 'Weekend Tournament'},
    ))


@pytest.fixture
def card(app, db_session):
    return _add(Card(
        name='ピカチュウex',
        name_multilingual={'ja': 'ピカチュウex', 'en': 'Pikachu ex', 'ko': '피카츄ex'},
        image_url='https://cdn.example.com/ja/pikachu.webp',
        image_url_multilingual={'en': 'https://cdn.example.com/en/pikachu.webp'},
        thumb_url='https://cdn.example.com/thumb/pikachu.webp',
        pack_id=1,
    ))


@pytest.fixture
def trade_post(app, db_session, card):
    return _add(TradePost(
        title='ピカチュウex求む',
        title_multilingual={'ja': 'ピカチュウex求む', 'en': 'Looking for Pikachu ex'},
        comment='よろしくお願いします',
        wanted_card_ids=[card.id],
        offered_card_ids=[],
        owner_id=fake.uuid4(),
    ))
