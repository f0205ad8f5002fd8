"""initial_todo_schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18 09:00:00.000000

초기 스키마:
1. users, refresh_tokens, view_preferences — 계정과 사용자 설정
2. categories, tags, recurrence_rules — 분류와 반복 규칙
3. todos, todo_tags, subtasks, attachments, reminders — 할일과 하위 리소스
4. activity_logs, saved_filters — 활동 기록과 저장된 필터
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID, JSONB


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def _user_fk() -> sa.Column:
    return sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)


def upgrade() -> None:
    # ── 1. users — 사용자 ──
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('display_name', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('timezone', sa.String(64), server_default='UTC', nullable=False),
        sa.Column('settings', JSONB, server_default=sa.text("'{}'::jsonb"), nullable=False),
        *_timestamps(),
    )

    # ── 2. refresh_tokens — 리프레시 토큰 ──
    op.create_table(
        'refresh_tokens',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column('token', sa.String(512), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])

    # ── 3. view_preferences — 뷰별 필터/정렬 ──
    op.create_table(
        'view_preferences',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column('view_type', sa.String(20), nullable=False),
        sa.Column('filters', JSONB, server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column('sorting', JSONB, server_default=sa.text("'{}'::jsonb"), nullable=False),
        *_timestamps(),
    )
    op.create_unique_constraint('uq_view_pref_user_type', 'view_preferences', ['user_id', 'view_type'])

    # ── 4. categories / tags — 분류 ──
    op.create_table(
        'categories',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('color', sa.String(7), nullable=False),
        sa.Column('ordering', sa.Integer(), server_default=sa.text('0'), nullable=False),
        *_timestamps(),
    )
    op.create_unique_constraint('uq_category_user_name', 'categories', ['user_id', 'name'])

    op.create_table(
        'tags',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('color', sa.String(7), nullable=False),
        *_timestamps(),
    )
    op.create_unique_constraint('uq_tag_user_name', 'tags', ['user_id', 'name'])

    # ── 5. recurrence_rules — 반복 규칙 ──
    op.create_table(
        'recurrence_rules',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column('frequency', sa.String(20), nullable=False),
        sa.Column('interval', sa.Integer(), server_default=sa.text('1'), nullable=False),
        sa.Column('by_weekday', JSONB, nullable=True),
        sa.Column('by_month_day', JSONB, nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_recurrence_rules_user_id', 'recurrence_rules', ['user_id'])

    # ── 6. todos — 할일 ──
    op.create_table(
        'todos',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column('category_id', UUID(as_uuid=True), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('recurrence_rule_id', UUID(as_uuid=True), sa.ForeignKey('recurrence_rules.id', ondelete='SET NULL'), nullable=True),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), server_default='', nullable=False),
        sa.Column('status', sa.String(20), server_default='TODO', nullable=False),
        sa.Column('priority', sa.String(20), server_default='MEDIUM', nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reminder_lead_time', sa.Integer(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_todos_user_status', 'todos', ['user_id', 'status'])
    op.create_index('ix_todos_user_due_date', 'todos', ['user_id', 'due_date'])

    op.create_table(
        'todo_tags',
        sa.Column('todo_id', UUID(as_uuid=True), sa.ForeignKey('todos.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('tag_id', UUID(as_uuid=True), sa.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
    )

    # ── 7. subtasks / attachments — 할일 하위 리소스 ──
    op.create_table(
        'subtasks',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('todo_id', UUID(as_uuid=True), sa.ForeignKey('todos.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('completed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('ordering', sa.Integer(), server_default=sa.text('0'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_subtasks_todo_id', 'subtasks', ['todo_id'])

    op.create_table(
        'attachments',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('todo_id', UUID(as_uuid=True), sa.ForeignKey('todos.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('mime_type', sa.String(255), nullable=False),
        sa.Column('url', sa.String(2048), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_attachments_todo_id', 'attachments', ['todo_id'])

    # ── 8. reminders — 리마인더 ──
    op.create_table(
        'reminders',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('todo_id', UUID(as_uuid=True), sa.ForeignKey('todos.id', ondelete='CASCADE'), nullable=False),
        _user_fk(),
        sa.Column('scheduled_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('channel', sa.String(20), server_default='IN_APP', nullable=False),
        sa.Column('sent', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_reminders_user_sent_scheduled', 'reminders', ['user_id', 'sent', 'scheduled_at'])

    # ── 9. activity_logs — 활동 로그 (할일 삭제 후에도 유지) ──
    op.create_table(
        'activity_logs',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column('todo_id', UUID(as_uuid=True), sa.ForeignKey('todos.id', ondelete='SET NULL'), nullable=True),
        sa.Column('type', sa.String(30), nullable=False),
        sa.Column('changes', JSONB, server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_activity_logs_user_created', 'activity_logs', ['user_id', 'created_at'])

    # ── 10. saved_filters — 저장된 필터 ──
    op.create_table(
        'saved_filters',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('filters', JSONB, server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column('is_default', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_saved_filters_user_id', 'saved_filters', ['user_id'])


def downgrade() -> None:
    op.drop_table('saved_filters')
    op.drop_table('activity_logs')
    op.drop_table('reminders')
    op.drop_table('attachments')
    op.drop_table('subtasks')
    op.drop_table('todo_tags')
    op.drop_table('todos')
    op.drop_table('recurrence_rules')
    op.drop_table('tags')
    op.drop_table('categories')
    op.drop_table('view_preferences')
    op.drop_table('refresh_tokens')
    op.drop_table('users')
