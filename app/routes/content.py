"""Localized read routes for cards, pages, tournaments and trade posts.

Every response embeds the resolved ``locale``. Locale priority:
``?locale=`` > Accept-Language > default.
"""

import logging
from flask import Blueprint, request, jsonify

from app import db
from app.models import Card, DeckPage, InfoPage, Tournament, TradePost
from app.services.locale import get_request_locale
from app.services.localization import (
    localize_card,
    localize_deck_page,
    localize_info_page,
    localize_tournament,
    localize_trade_post,
    localized_card_image,
)

logger = logging.getLogger(__name__)

content_bp = Blueprint('content', __name__)

MAX_CARDS_PER_PAGE = 500


def _parse_id(raw_id):
    try:
        return int(raw_id)
    except (TypeError, ValueError):
        return None


def _localized_card_dict(card, locale):
    card_dict = localize_card(card.to_dict(), locale)
    card_dict['display_image_url'] = localized_card_image(card.to_dict(), locale)
    return card_dict


@content_bp.route('/info/<page_id>', methods=['GET'])
def get_info_page(page_id):
    """Get an info page localized to the request locale."""
    locale = get_request_locale()
    pk = _parse_id(page_id)
    if pk is None:
        return jsonify({'error': 'Invalid page ID'}), 400

    try:
        page = db.session.get(InfoPage, pk)
        if not page:
            return jsonify({'error': 'Page not found'}), 404
        return jsonify({'page': localize_info_page(page.to_dict(), locale), 'locale': locale}), 200
    except Exception:
        logger.exception('Info page fetch error')
        return jsonify({'error': 'Internal server error'}), 500


@content_bp.route('/deck-pages/<page_id>', methods=['GET'])
def get_deck_page(page_id):
    """Get a deck page localized to the request locale."""
    locale = get_request_locale()
    pk = _parse_id(page_id)
    if pk is None:
        return jsonify({'error': 'Invalid page ID'}), 400

    try:
        page = db.session.get(DeckPage, pk)
        if not page:
            return jsonify({'error': 'Page not found'}), 404
        return jsonify({'page': localize_deck_page(page.to_dict(), locale), 'locale': locale}), 200
    except Exception:
        logger.exception('Deck page fetch error')
        return jsonify({'error': 'Internal server error'}), 500


@content_bp.route('/tournaments', methods=['GET'])
def get_tournaments():
    """List tournaments, newest start date first."""
    locale = get_request_locale()
    try:
        tournaments = Tournament.query.order_by(
            Tournament.starts_at.desc(), Tournament.id.desc()
        ).all()
        return jsonify({
            'tournaments': [localize_tournament(t.to_dict(), locale) for t in tournaments],
            'locale': locale,
        }), 200
    except Exception:
        logger.exception('Tournaments fetch error')
        return jsonify({'error': 'Internal server error'}), 500


@content_bp.route('/cards', methods=['GET'])
def get_cards():
    """List cards.

    Query params:
    - locale: Language code (e.g. en, ja, ko)
    - pack_id: Filter by pack
    - limit: Page size (default: 100, max: 500)
    - offset: Offset for pagination
    """
    locale = get_request_locale()
    pack_id = request.args.get('pack_id', type=int)
    limit = min(max(request.args.get('limit', 100, type=int), 1), MAX_CARDS_PER_PAGE)
    offset = max(request.args.get('offset', 0, type=int), 0)

    try:
        query = Card.query
        if pack_id is not None:
            query = query.filter_by(pack_id=pack_id)

        total = query.count()
        cards = query.order_by(Card.id.asc()).offset(offset).limit(limit).all()

        return jsonify({
            'cards': [_localized_card_dict(card, locale) for card in cards],
            'total': total,
            'locale': locale,
        }), 200
    except Exception:
        logger.exception('Cards fetch error')
        return jsonify({'error': 'Internal server error'}), 500


@content_bp.route('/cards/<int:card_id>', methods=['GET'])
def get_card(card_id):
    """Get a single card."""
    locale = get_request_locale()
    card = db.session.get(Card, card_id)
    if not card:
        return jsonify({'error': 'Card not found'}), 404
    return jsonify({'card': _localized_card_dict(card, locale), 'locale': locale}), 200


@content_bp.route('/trades/<int:trade_id>', methods=['GET'])
def get_trade(trade_id):
    """Get a trade post with its wanted/offered cards localized."""
    locale = get_request_locale()
    try:
        trade = db.session.get(TradePost, trade_id)
        if not trade:
            return jsonify({'error': 'Trade not found'}), 404

        trade_dict = localize_trade_post(trade.to_dict(), locale)

        card_ids = set(trade_dict['wanted_card_ids']) | set(trade_dict['offered_card_ids'])
        cards = {}
        if card_ids:
            for card in Card.query.filter(Card.id.in_(card_ids)).all():
                cards[card.id] = _localized_card_dict(card, locale)

        trade_dict['wanted_cards'] = [cards[i] for i in trade_dict['wanted_card_ids'] if i in cards]
        trade_dict['offered_cards'] = [cards[i] for i in trade_dict['offered_card_ids'] if i in cards]

        return jsonify({'trade': trade_dict, 'locale': locale}), 200
    except Exception:
        logger.exception('Trade fetch error')
        return jsonify({'error': 'Internal server error'}), 500
