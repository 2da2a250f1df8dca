"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("username", sa.String(length=40), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("ix_members_id", "members", ["id"], unique=True)

    op.create_table(
        "opinion_questions",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("prompt", sa.String(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_opinion_questions_id", "opinion_questions", ["id"])

    op.create_table(
        "opinion_responses",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("member_id", sa.Uuid(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("question_id", sa.String(), sa.ForeignKey("opinion_questions.id"), nullable=False),
        sa.Column("selected_value", sa.Float(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("member_id", "question_id", name="uq_opinion_response_member_question"),
    )
    op.create_index("ix_opinion_responses_id", "opinion_responses", ["id"])
    op.create_index("ix_opinion_responses_member_id", "opinion_responses", ["member_id"])

    op.create_table(
        "orientation_profiles",
        sa.Column("member_id", sa.Uuid(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("member_id"),
    )

    op.create_table(
        "matches",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("member_a_id", sa.Uuid(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("member_b_id", sa.Uuid(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("member_a_id <> member_b_id", name="ck_match_distinct_members"),
        sa.CheckConstraint("status IN ('active', 'ended')", name="ck_match_status"),
    )
    op.create_index("ix_matches_id", "matches", ["id"], unique=True)
    op.create_index("ix_matches_member_a_id", "matches", ["member_a_id"])
    op.create_index("ix_matches_member_b_id", "matches", ["member_b_id"])
    op.create_index("ix_matches_status", "matches", ["status"])

    op.create_table(
        "match_active_members",
        sa.Column("member_id", sa.Uuid(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("match_id", sa.Uuid(), sa.ForeignKey("matches.id"), nullable=False),
        sa.PrimaryKeyConstraint("member_id"),
    )
    op.create_index("ix_match_active_members_match_id", "match_active_members", ["match_id"])

    op.create_table(
        "match_messages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("match_id", sa.Uuid(), sa.ForeignKey("matches.id"), nullable=False),
        sa.Column("sender_id", sa.Uuid(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("sent_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_match_messages_id", "match_messages", ["id"])
    op.create_index("ix_match_messages_match_sent", "match_messages", ["match_id", "sent_at", "id"])

    op.create_table(
        "direct_messages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sender_id", sa.Uuid(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("recipient_id", sa.Uuid(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("sent_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("sender_id <> recipient_id", name="ck_direct_message_distinct_members"),
    )
    op.create_index("ix_direct_messages_id", "direct_messages", ["id"])
    op.create_index("ix_direct_messages_pair_sent", "direct_messages", ["sender_id", "recipient_id", "sent_at"])


def downgrade() -> None:
    op.drop_table("direct_messages")
    op.drop_table("match_messages")
    op.drop_table("match_active_members")
    op.drop_table("matches")
    op.drop_table("orientation_profiles")
    op.drop_table("opinion_responses")
    op.drop_table("opinion_questions")
    op.drop_table("members")
