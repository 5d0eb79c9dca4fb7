"""Trade post model."""

from datetime import datetime
from app import db


class TradePost(db.Model):
    """A user's trade offer: cards wanted and cards offered."""

    __tablename__ = 'trade_posts'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    title_multilingual = db.Column(db.JSON, nullable=True)
    comment = db.Column(db.Text, nullable=True)
    comment_multilingual = db.Column(db.JSON, nullable=True)
    wanted_card_ids = db.Column(db.JSON, nullable=True)  # Array of card ids
    offered_card_ids = db.Column(db.JSON, nullable=True)  # Array of card ids
    owner_id = db.Column(db.String(64), nullable=True, index=True)
    status = db.Column(db.String(20), default='open', nullable=False, index=True)  # 'open', 'closed'
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def to_dict(self):
        """Convert trade post to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'title_multilingual': self.title_multilingual,
            'comment': self.comment,
            'comment_multilingual': self.comment_multilingual,
            'wanted_card_ids': self.wanted_card_ids or [],
            'offered_card_ids': self.offered_card_ids or [],
            'owner_id': self.owner_id,
            'status': self.status,
            'created_at': self.created_at.isoformat(),
        }

    def __repr__(self):
        return f'<TradePost {self.id}: {self.title}>'
