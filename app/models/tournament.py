"""Tournament model."""

from datetime import datetime
from app import db
from app.constants.locales import TRANSLATION_STATUS_NONE


class Tournament(db.Model):
    """Community tournament announcement."""

    __tablename__ = 'tournaments'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    title_multilingual = db.Column(db.JSON, nullable=True)
    description = db.Column(db.Text, nullable=True)
    description_multilingual = db.Column(db.JSON, nullable=True)
    event_url = db.Column(db.String(500), nullable=True)
    starts_at = db.Column(db.DateTime, nullable=True, index=True)
    translation_status = db.Column(db.String(20), default=TRANSLATION_STATUS_NONE, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self):
        """Convert tournament to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'title_multilingual': self.title_multilingual,
            'description': self.description,
            'description_multilingual': self.description_multilingual,
            'event_url': self.event_url,
            'starts_at': self.starts_at.isoformat() if self.starts_at else None,
            'translation_status': self.translation_status,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }

    def __repr__(self):
        return f'<Tournament {self.id}: {self.title}>'
