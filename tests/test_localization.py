"""
Tests for projecting multilingual records onto a locale.
"""

import copy

import pytest

from app.constants.locales import SUPPORTED_LOCALES
from app.services.localization import (
    localize_card,
    localize_deck_page,
    localize_record,
    localize_trade_post,
    localized_array,
    localized_card_image,
    localized_value,
)


class TestLocalizedValue:

    def test_returns_translation(self):
        assert localized_value('こんにちは', {'ja': 'こんにちは', 'en': 'Hello'}, 'en') == 'Hello'

    def test_base_locale_ignores_map(self):
        # A stale ja entry in the map never overrides the base value
        assert localized_value('新しい', {'ja': '古い'}, 'ja') == '新しい'

    @pytest.mark.parametrize('multilingual', [None, {}, {'en': 'Hello'}, 'not-a-map', ['en']])
    def test_missing_key_falls_back_to_base(self, multilingual):
        assert localized_value('こんにちは', multilingual, 'ko') == 'こんにちは'

    @pytest.mark.parametrize('empty', ['', None])
    def test_empty_translation_falls_back_to_base(self, empty):
        assert localized_value('こんにちは', {'en': empty}, 'en') == 'こんにちは'

    @pytest.mark.parametrize('locale', SUPPORTED_LOCALES)
    def test_fallback_for_every_locale(self, locale):
        assert localized_value('テスト', {}, locale) == 'テスト'


class TestLocalizedArray:

    def test_returns_locale_list(self):
        assert localized_array(['一'], {'en': ['one']}, 'en') == ['one']

    def test_empty_or_wrong_type_falls_back(self):
        assert localized_array(['一'], {'en': []}, 'en') == ['一']
        assert localized_array(['一'], {'en': 'one'}, 'en') == ['一']


class TestLocalizeRecord:

    def test_projects_fields_without_mutating_input(self):
        record = {
            'id': 1,
            'title': 'タイトル',
            'title_multilingual': {'ja': 'タイトル', 'en': 'Title'},
            'comment': 'コメント',
            'comment_multilingual': None,
        }
        original = copy.deepcopy(record)

        result = localize_trade_post(record, 'en')

        assert result['title'] == 'Title'
        assert result['comment'] == 'コメント'
        assert result['title_multilingual'] == record['title_multilingual']
        assert record == original

    def test_unknown_fields_are_ignored(self):
        result = localize_record({'title': 'タイトル'}, 'en', ['title', 'subtitle'])
        assert result['title'] == 'タイトル'
        assert result['subtitle'] is None

    def test_deck_cards_use_locale_array(self):
        page = {
            'title': 'デッキ',
            'deck_cards': [{'card_id': 1, 'pack_name': '最強の遺伝子'}],
            'deck_cards_multilingual': {
                'en': [{'card_id': 1, 'pack_name': 'Genetic Apex'}],
            },
        }
        result = localize_deck_page(page, 'en')
        assert result['deck_cards'] == [{'card_id': 1, 'pack_name': 'Genetic Apex'}]

    def test_deck_cards_degrade_per_element(self):
        page = {
            'title': 'デッキ',
            'deck_cards': [
                {'card_id': 1, 'pack_name': '最強の遺伝子',
                 'pack_name_multilingual': {'en': 'Genetic Apex'}},
                {'card_id': 2, 'pack_name': '幻のいる島'},
                'corrupted-entry',
            ],
        }
        result = localize_deck_page(page, 'en')

        assert result['deck_cards'][0]['pack_name'] == 'Genetic Apex'
        assert result['deck_cards'][1]['pack_name'] == '幻のいる島'
        assert result['deck_cards'][2] == 'corrupted-entry'


class TestCards:

    @pytest.fixture
    def card_dict(self):
        return {
            'id': 1,
            'name': 'ピカチュウex',
            'name_multilingual': {'ja': 'ピカチュウex', 'en': 'Pikachu ex'},
            'image_url': 'https://cdn.example.com/ja.webp',
            'image_url_multilingual': {'en': 'https://cdn.example.com/en.webp'},
            'thumb_url': 'https://cdn.example.com/thumb.webp',
            'description': None,
        }

    def test_localize_card(self, card_dict):
        result = localize_card(card_dict, 'en')
        assert result['name'] == 'Pikachu ex'
        assert result['image_url'] == 'https://cdn.example.com/en.webp'

    def test_localize_card_untranslated_locale(self, card_dict):
        result = localize_card(card_dict, 'fr')
        assert result['name'] == 'ピカチュウex'
        assert result['image_url'] == 'https://cdn.example.com/ja.webp'

    def test_card_image_variant(self, card_dict):
        assert localized_card_image(card_dict, 'en') == 'https://cdn.example.com/en.webp'

    def test_card_image_prefers_thumbnail_fallback(self, card_dict):
        assert localized_card_image(card_dict, 'ko') == 'https://cdn.example.com/thumb.webp'
        card_dict['thumb_url'] = None
        assert localized_card_image(card_dict, 'ko') == 'https://cdn.example.com/ja.webp'
