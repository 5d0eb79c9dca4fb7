"""Create content tables with multilingual maps, translation cache and glossary.

Revision ID: create_multilingual_content_tables
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_multilingual_content_tables'
down_revision = None
branch_labels = None
depends_on = None


def _page_columns():
    """Columns shared by info_pages and deck_pages."""
    columns = [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('deck_name', sa.String(length=255), nullable=True),
        sa.Column('deck_description', sa.Text(), nullable=True),
        sa.Column('deck_badge', sa.String(length=100), nullable=True),
        sa.Column('tier_name', sa.String(length=100), nullable=True),
        sa.Column('thumbnail_alt', sa.String(length=255), nullable=True),
        sa.Column('thumbnail_image_url', sa.String(length=500), nullable=True),
        sa.Column('how_to_play_steps', sa.JSON(), nullable=True),
        sa.Column('deck_cards', sa.JSON(), nullable=True),
    ]
    for field in ('title', 'description', 'deck_name', 'deck_description', 'deck_badge',
                  'tier_name', 'thumbnail_alt', 'thumbnail_image_url', 'how_to_play_steps',
                  'deck_cards'):
        columns.append(sa.Column(f'{field}_multilingual', sa.JSON(), nullable=True))
    columns += [
        sa.Column('translation_status', sa.String(length=20), nullable=False, server_default='none'),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    ]
    return columns


def upgrade():
    op.create_table('cards',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('name_multilingual', sa.JSON(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('image_url_multilingual', sa.JSON(), nullable=True),
        sa.Column('thumb_url', sa.String(length=500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('description_multilingual', sa.JSON(), nullable=True),
        sa.Column('pack_id', sa.Integer(), nullable=True),
        sa.Column('type_code', sa.String(length=20), nullable=True),
        sa.Column('rarity_code', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_cards_name'), 'cards', ['name'], unique=False)
    op.create_index(op.f('ix_cards_pack_id'), 'cards', ['pack_id'], unique=False)

    op.create_table('info_pages', *_page_columns())
    op.create_index(op.f('ix_info_pages_slug'), 'info_pages', ['slug'], unique=False)

    op.create_table('deck_pages', *_page_columns())
    op.create_index(op.f('ix_deck_pages_slug'), 'deck_pages', ['slug'], unique=False)

    op.create_table('tournaments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('title_multilingual', sa.JSON(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('description_multilingual', sa.JSON(), nullable=True),
        sa.Column('event_url', sa.String(length=500), nullable=True),
        sa.Column('starts_at', sa.DateTime(), nullable=True),
        sa.Column('translation_status', sa.String(length=20), nullable=False, server_default='none'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tournaments_starts_at'), 'tournaments', ['starts_at'], unique=False)

    op.create_table('trade_posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('title_multilingual', sa.JSON(), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('comment_multilingual', sa.JSON(), nullable=True),
        sa.Column('wanted_card_ids', sa.JSON(), nullable=True),
        sa.Column('offered_card_ids', sa.JSON(), nullable=True),
        sa.Column('owner_id', sa.String(length=64), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='open'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_trade_posts_owner_id'), 'trade_posts', ['owner_id'], unique=False)
    op.create_index(op.f('ix_trade_posts_status'), 'trade_posts', ['status'], unique=False)
    op.create_index(op.f('ix_trade_posts_created_at'), 'trade_posts', ['created_at'], unique=False)

    op.create_table('translation_cache',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('source_text', sa.Text(), nullable=False),
        sa.Column('source_language', sa.String(length=10), nullable=False),
        sa.Column('target_language', sa.String(length=10), nullable=False),
        sa.Column('translated_text', sa.Text(), nullable=False),
        sa.Column('service_used', sa.String(length=50), nullable=True),
        sa.Column('char_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('access_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_accessed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('source_text', 'source_language', 'target_language',
                            name='unique_translation')
    )

    op.create_table('glossary_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('source_language', sa.String(length=10), nullable=False),
        sa.Column('target_language', sa.String(length=10), nullable=False),
        sa.Column('source_term', sa.String(length=255), nullable=False),
        sa.Column('target_term', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('source_language', 'target_language', 'source_term',
                            name='unique_glossary_term')
    )


def downgrade():
    op.drop_table('glossary_entries')
    op.drop_table('translation_cache')

    op.drop_index(op.f('ix_trade_posts_created_at'), table_name='trade_posts')
    op.drop_index(op.f('ix_trade_posts_status'), table_name='trade_posts')
    op.drop_index(op.f('ix_trade_posts_owner_id'), table_name='trade_posts')
    op.drop_table('trade_posts')

    op.drop_index(op.f('ix_tournaments_starts_at'), table_name='tournaments')
    op.drop_table('tournaments')

    op.drop_index(op.f('ix_deck_pages_slug'), table_name='deck_pages')
    op.drop_table('deck_pages')

    op.drop_index(op.f('ix_info_pages_slug'), table_name='info_pages')
    op.drop_table('info_pages')

    op.drop_index(op.f('ix_cards_pack_id'), table_name='cards')
    op.drop_index(op.f('ix_cards_name'), table_name='cards')
    op.drop_table('cards')
