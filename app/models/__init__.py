"""Database models for the application."""

from .card import Card
from .content_page import InfoPage, DeckPage
from .tournament import Tournament
from .trade_post import TradePost
from .translation_cache import TranslationCache
from .glossary import GlossaryEntry

__all__ = [
    'Card',
    'InfoPage',
    'DeckPage',
    'Tournament',
    'TradePost',
    'TranslationCache',
    'GlossaryEntry',
]
