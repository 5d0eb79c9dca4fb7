"""Translation cache model for storing translated free text."""
from datetime import datetime
from app import db


class TranslationCache(db.Model):
    """Cache translations to avoid re-translating the same text.

    Keyed on the exact source text plus the language pair. Rows are never
    rewritten except for the access-tracking columns.
    """
    __tablename__ = 'translation_cache'

    id = db.Column(db.Integer, primary_key=True)
    source_text = db.Column(db.Text, nullable=False)
    source_language = db.Column(db.String(10), nullable=False)
    target_language = db.Column(db.String(10), nullable=False)
    translated_text = db.Column(db.Text, nullable=False)
    service_used = db.Column(db.String(50), nullable=True)
    char_count = db.Column(db.Integer, default=0, nullable=False)
    access_count = db.Column(db.Integer, default=0, nullable=False)
    last_accessed_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('source_text', 'source_language', 'target_language',
                            name='unique_translation'),
    )

    def __repr__(self):
        return f'<TranslationCache {self.source_language}->{self.target_language}: {self.source_text[:20]}>'
