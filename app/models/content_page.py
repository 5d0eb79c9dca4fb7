"""Info (article) pages and deck pages.

Both page types share one layout: a Japanese base value per field plus a
``<field>_multilingual`` JSON map that the bulk translator fills in.
"""

from datetime import datetime
from app import db
from app.constants.locales import TRANSLATION_STATUS_NONE


class ContentPageMixin:
    """Columns shared by info pages and deck pages."""

    id = db.Column(db.Integer, primary_key=True)
    slug = db.Column(db.String(255), nullable=True, index=True)

    title = db.Column(db.String(255), nullable=False)
    title_multilingual = db.Column(db.JSON, nullable=True)
    description = db.Column(db.Text, nullable=True)
    description_multilingual = db.Column(db.JSON, nullable=True)

    deck_name = db.Column(db.String(255), nullable=True)
    deck_name_multilingual = db.Column(db.JSON, nullable=True)
    deck_description = db.Column(db.Text, nullable=True)
    deck_description_multilingual = db.Column(db.JSON, nullable=True)
    deck_badge = db.Column(db.String(100), nullable=True)
    deck_badge_multilingual = db.Column(db.JSON, nullable=True)
    tier_name = db.Column(db.String(100), nullable=True)
    tier_name_multilingual = db.Column(db.JSON, nullable=True)

    thumbnail_alt = db.Column(db.String(255), nullable=True)
    thumbnail_alt_multilingual = db.Column(db.JSON, nullable=True)
    thumbnail_image_url = db.Column(db.String(500), nullable=True)
    thumbnail_image_url_multilingual = db.Column(db.JSON, nullable=True)

    how_to_play_steps = db.Column(db.JSON, nullable=True)  # Array of strings
    how_to_play_steps_multilingual = db.Column(db.JSON, nullable=True)

    # Array of {card_id, name, quantity, pack_name, ...}
    deck_cards = db.Column(db.JSON, nullable=True)
    deck_cards_multilingual = db.Column(db.JSON, nullable=True)

    translation_status = db.Column(db.String(20), default=TRANSLATION_STATUS_NONE, nullable=False)
    is_published = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self):
        """Convert page to dictionary (every column, dates as ISO strings)."""
        data = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            data[column.name] = value
        return data


class InfoPage(ContentPageMixin, db.Model):
    """Informational article page."""

    __tablename__ = 'info_pages'

    def __repr__(self):
        return f'<InfoPage {self.id}: {self.title}>'


class DeckPage(ContentPageMixin, db.Model):
    """Deck guide page."""

    __tablename__ = 'deck_pages'

    def __repr__(self):
        return f'<DeckPage {self.id}: {self.title}>'
