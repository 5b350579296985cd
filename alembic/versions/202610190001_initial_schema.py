"""Initial schema: users, ratings, reviews

Revision ID: 202610190001
Revises:
Create Date: 2026-10-19 00:01:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "202610190001"
down_revision = None
branch_labels = None
depends_on = None

user_role_enum = sa.Enum("learner", "teacher", name="user_role")


def _timestamp() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("fullname", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", user_role_enum, nullable=False, server_default="learner"),
        _timestamp(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "ratings",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "learner_id",
            sa.String(length=32),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("teacher_id", sa.String(length=32), nullable=False),
        sa.Column("listing_id", sa.String(length=64), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        _timestamp(),
        sa.UniqueConstraint("learner_id", "listing_id", name="uq_rating_learner_listing"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_rating_range"),
    )
    for column in ("learner_id", "teacher_id", "listing_id"):
        op.create_index(f"ix_ratings_{column}", "ratings", [column])

    op.create_table(
        "reviews",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column(
            "learner_id",
            sa.String(length=32),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("teacher_id", sa.String(length=32), nullable=False),
        sa.Column("listing_id", sa.String(length=64), nullable=False),
        sa.Column("review_text", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        _timestamp(),
        sa.UniqueConstraint("learner_id", "listing_id", name="uq_review_learner_listing"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )
    for column in ("learner_id", "teacher_id", "listing_id"):
        op.create_index(f"ix_reviews_{column}", "reviews", [column])


def downgrade() -> None:
    for column in ("learner_id", "teacher_id", "listing_id"):
        op.drop_index(f"ix_reviews_{column}", "reviews")
        op.drop_index(f"ix_ratings_{column}", "ratings")
    op.drop_table("reviews")
    op.drop_table("ratings")
    op.drop_index("ix_users_email", "users")
    op.drop_table("users")
    user_role_enum.drop(op.get_bind(), checkfirst=True)
