"""Project multilingual records onto a single display locale.

Every translatable field ``f`` has a sibling ``f_multilingual`` map keyed
by locale. A missing map, a missing key or an empty value all fall back to
the base (Japanese) value, so a partially translated record still renders.

Usage:
    name = localized_value(card['name'], card['name_multilingual'], 'en')
    page = localize_deck_page(page_dict, 'ko')
"""
from collections.abc import Mapping

from app.constants.locales import BASE_LOCALE

CARD_FIELDS = ('name', 'image_url', 'description')

DECK_PAGE_FIELDS = (
    'title',
    'description',
    'deck_name',
    'deck_description',
    'deck_badge',
    'tier_name',
    'thumbnail_alt',
    'thumbnail_image_url',
    'how_to_play_steps',
    'deck_cards',
)

# Info pages share the deck page layout
INFO_PAGE_FIELDS = DECK_PAGE_FIELDS

TOURNAMENT_FIELDS = ('title', 'description')

TRADE_POST_FIELDS = ('title', 'comment')


def multilingual_key(field: str) -> str:
    return f'{field}_multilingual'


def localized_value(base_value, multilingual, locale, base_locale=BASE_LOCALE):
    """Return the value of a scalar field for ``locale``.

    Falls back to ``base_value`` for the base locale, a missing or
    malformed map, a missing key, or a None/empty translation.
    """
    if locale == base_locale or not isinstance(multilingual, Mapping):
        return base_value

    value = multilingual.get(locale)
    if value is None or value == '':
        return base_value
    return value


def localized_array(base_items, multilingual, locale, base_locale=BASE_LOCALE):
    """Return the list stored for ``locale`` in a multilingual list map."""
    if locale == base_locale or not isinstance(multilingual, Mapping):
        return base_items

    items = multilingual.get(locale)
    if not isinstance(items, list) or not items:
        return base_items
    return items


def localize_deck_cards(cards, locale):
    """Localize ``pack_name`` on each card of a deck list.

    Each entry may carry its own ``pack_name_multilingual`` map. Entries
    without a translation keep their original pack name; a malformed entry
    is passed through as-is.
    """
    if not isinstance(cards, list):
        return cards

    localized = []
    for card in cards:
        if not isinstance(card, Mapping):
            localized.append(card)
            continue
        entry = dict(card)
        if 'pack_name' in entry:
            entry['pack_name'] = localized_value(
                entry.get('pack_name'), entry.get('pack_name_multilingual'), locale
            )
        localized.append(entry)
    return localized


def localize_record(record: dict, locale: str, fields) -> dict:
    """Return a copy of ``record`` with ``fields`` projected onto ``locale``.

    The ``*_multilingual`` maps are left in the result so clients can
    switch locale without refetching.
    """
    result = dict(record)

    for field in fields:
        multilingual = record.get(multilingual_key(field))
        base_value = record.get(field)

        if isinstance(base_value, list):
            value = localized_array(base_value, multilingual, locale)
        elif base_value is None and isinstance(multilingual, Mapping) \
                and isinstance(multilingual.get(locale), list):
            value = localized_array(base_value, multilingual, locale)
        else:
            value = localized_value(base_value, multilingual, locale)

        if field == 'deck_cards':
            value = localize_deck_cards(value, locale)

        result[field] = value

    return result


def localize_card(card: dict, locale: str) -> dict:
    return localize_record(card, locale, CARD_FIELDS)


def localize_deck_page(page: dict, locale: str) -> dict:
    return localize_record(page, locale, DECK_PAGE_FIELDS)


def localize_info_page(page: dict, locale: str) -> dict:
    return localize_record(page, locale, INFO_PAGE_FIELDS)


def localize_tournament(tournament: dict, locale: str) -> dict:
    return localize_record(tournament, locale, TOURNAMENT_FIELDS)


def localize_trade_post(post: dict, locale: str) -> dict:
    # Card data for wanted/offered ids is localized separately via the cards table
    return localize_record(post, locale, TRADE_POST_FIELDS)


def localized_card_image(card: dict, locale: str) -> str | None:
    """Image URL for a card in ``locale``, else the thumbnail, else the base image."""
    variants = card.get('image_url_multilingual')
    if locale != BASE_LOCALE and isinstance(variants, Mapping) and variants.get(locale):
        return variants[locale]
    return card.get('thumb_url') or card.get('image_url')
