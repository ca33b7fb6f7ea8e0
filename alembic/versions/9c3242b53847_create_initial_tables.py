"""Create initial tables

Revision ID: 9c3242b53847
Revises: 
Create Date: 2026-10-19 10:12:41.318604

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9c3242b53847'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('username', sa.String, nullable=False, unique=True, index=True),
        sa.Column('email', sa.String, nullable=False, unique=True, index=True),
        sa.Column('full_name', sa.String, nullable=False, index=True),
        sa.Column('hashed_password', sa.String, nullable=False),
        sa.Column('avatar', sa.String, nullable=False),
        sa.Column('cover_image', sa.String, nullable=True),
        sa.Column('refresh_token_hash', sa.String, nullable=True),
        sa.Column('watching_video_id', sa.Integer, nullable=True, index=True),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    op.create_table(
        'videos',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('owner_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('video_file', sa.Text, nullable=False),
        sa.Column('thumbnail', sa.Text, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('duration', sa.Float, nullable=False),
        sa.Column('views', sa.Integer, nullable=False, server_default='0'),
        sa.Column('is_published', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    op.create_table(
        'tweets',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('owner_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('owner_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('video_id', sa.Integer, sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    op.create_table(
        'likes',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('liked_by', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('target_type', sa.String(16), nullable=False),
        sa.Column('target_id', sa.Integer, nullable=False),
        sa.Column('created_at', sa.DateTime),
        sa.UniqueConstraint('liked_by', 'target_type', 'target_id', name='uq_likes_user_target'),
        sa.CheckConstraint("target_type IN ('video', 'comment', 'tweet')", name='check_like_target_type'),
    )

    op.create_table(
        'playlists',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('owner_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    op.create_table(
        'playlist_videos',
        sa.Column('playlist_id', sa.Integer, sa.ForeignKey('playlists.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('video_id', sa.Integer, sa.ForeignKey('videos.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('added_at', sa.DateTime),
    )

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('subscriber_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('channel_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscriptions_subscriber_channel'),
    )


def downgrade() -> None:
    op.drop_table('subscriptions')
    op.drop_table('playlist_videos')
    op.drop_table('playlists')
    op.drop_table('likes')
    op.drop_table('comments')
    op.drop_table('tweets')
    op.drop_table('videos')
    op.drop_table('users')
