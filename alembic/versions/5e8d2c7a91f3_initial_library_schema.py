"""initial_library_schema

Revision ID: 5e8d2c7a91f3
Revises:
Create Date: 2026-10-18 09:00:00.000000

라이브러리 스키마 생성: libraries, series, volumes, chapters, manga_files,
app_users, app_user_progresses, app_user_ratings.
Create the library schema and per-user progress/rating tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5e8d2c7a91f3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'libraries',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('last_modified', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # series — 이름은 유일 제약 없음, 정확히 일치 조회에서 중복 검사
    # Series names carry no unique constraint; exact-name lookups check cardinality
    op.create_table(
        'series',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('original_name', sa.String(500), nullable=True),
        sa.Column('sort_name', sa.String(500), nullable=False),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('cover_image', sa.Text(), nullable=True),
        sa.Column('pages', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('library_id', sa.Integer(), sa.ForeignKey('libraries.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('last_modified', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_series_name', 'series', ['name'])
    op.create_index('ix_series_library_id', 'series', ['library_id'])

    op.create_table(
        'volumes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('number', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('pages', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('cover_image', sa.Text(), nullable=True),
        sa.Column('series_id', sa.Integer(), sa.ForeignKey('series.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('last_modified', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_volumes_series_id', 'volumes', ['series_id'])

    op.create_table(
        'chapters',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('range', sa.String(50), nullable=False),
        sa.Column('number', sa.String(50), nullable=False),
        sa.Column('pages', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('volume_id', sa.Integer(), sa.ForeignKey('volumes.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_chapters_volume_id', 'chapters', ['volume_id'])

    op.create_table(
        'manga_files',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('file_path', sa.Text(), nullable=False),
        sa.Column('number_of_pages', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('format', sa.String(50), nullable=False, server_default='archive'),
        sa.Column('volume_id', sa.Integer(), sa.ForeignKey('volumes.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_manga_files_volume_id', 'manga_files', ['volume_id'])

    op.create_table(
        'app_users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(255), nullable=False, unique=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # 진행도 — 사용자, 권 단위 (Progress per user and volume)
    op.create_table(
        'app_user_progresses',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('app_user_id', sa.Integer(), sa.ForeignKey('app_users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('series_id', sa.Integer(), sa.ForeignKey('series.id', ondelete='CASCADE'), nullable=False),
        sa.Column('volume_id', sa.Integer(), sa.ForeignKey('volumes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('pages_read', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_modified', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_app_user_progresses_app_user_id', 'app_user_progresses', ['app_user_id'])

    # 평점 — 사용자, 시리즈 단위 하나 (One rating per user and series)
    op.create_table(
        'app_user_ratings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('app_user_id', sa.Integer(), sa.ForeignKey('app_users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('series_id', sa.Integer(), sa.ForeignKey('series.id', ondelete='CASCADE'), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('review', sa.Text(), nullable=True),
        sa.UniqueConstraint('app_user_id', 'series_id', name='uq_rating_user_series'),
    )
    op.create_index('ix_app_user_ratings_app_user_id', 'app_user_ratings', ['app_user_id'])


def downgrade() -> None:
    op.drop_table('app_user_ratings')
    op.drop_table('app_user_progresses')
    op.drop_table('app_users')
    op.drop_table('manga_files')
    op.drop_table('chapters')
    op.drop_table('volumes')
    op.drop_table('series')
    op.drop_table('libraries')
