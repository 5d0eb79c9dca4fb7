"""Card model for the trading-card catalogue."""

from datetime import datetime
from app import db


class Card(db.Model):
    """A single trading card.

    ``name`` is always the Japanese card name; localized names and image
    variants live in the ``*_multilingual`` maps keyed by locale.
    """

    __tablename__ = 'cards'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    name_multilingual = db.Column(db.JSON, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    image_url_multilingual = db.Column(db.JSON, nullable=True)
    thumb_url = db.Column(db.String(500), nullable=True)
    description = db.Column(db.Text, nullable=True)
    description_multilingual = db.Column(db.JSON, nullable=True)
    pack_id = db.Column(db.Integer, nullable=True, index=True)
    type_code = db.Column(db.String(20), nullable=True)
    rarity_code = db.Column(db.String(20), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        """Convert card to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'name_multilingual': self.name_multilingual,
            'image_url': self.image_url,
            'image_url_multilingual': self.image_url_multilingual,
            'thumb_url': self.thumb_url,
            'description': self.description,
            'description_multilingual': self.description_multilingual,
            'pack_id': self.pack_id,
            'type_code': self.type_code,
            'rarity_code': self.rarity_code,
        }

    def __repr__(self):
        return f'<Card {self.id}: {self.name}>'
