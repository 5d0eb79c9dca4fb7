"""Glossary entries for domain nouns (card and product names)."""
from datetime import datetime
from app import db


class GlossaryEntry(db.Model):
    """A fixed source-term -> target-term pair for one language pair.

    Read-only at request time; maintained by an offline glossary job that
    also pushes the same terms to the provider-side glossary resource.
    """
    __tablename__ = 'glossary_entries'

    id = db.Column(db.Integer, primary_key=True)
    source_language = db.Column(db.String(10), nullable=False)
    target_language = db.Column(db.String(10), nullable=False)
    source_term = db.Column(db.String(255), nullable=False)
    target_term = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('source_language', 'target_language', 'source_term',
                            name='unique_glossary_term'),
    )

    def __repr__(self):
        return f'<GlossaryEntry {self.source_term} -> {self.target_term}>'
