"""initial_schema

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-19 09:12:44.518302

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


revision: str = '3f1c9a2b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("slug", sa.String(320), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("location", sa.String(300), nullable=False),
        sa.Column("participants", sa.Integer(), nullable=False),
        sa.Column("thumbnail", sa.String(500), nullable=True),
        sa.Column("image", sa.String(500), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("slug", name="events_slug_key"),
    )

    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("slug", sa.String(320), nullable=False),
        sa.Column("uploader", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("file_path", sa.String(500), nullable=True),
        sa.Column("thumbnail", sa.String(500), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("slug", name="courses_slug_key"),
    )
    op.create_index("ix_courses_author_id", "courses", ["author_id"])

    op.create_table(
        "certificates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("certificate_code", sa.String(100), nullable=False),
        sa.Column("hash", sa.String(64), nullable=False),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("issued_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "revoked",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        *_timestamps(),
        sa.UniqueConstraint("certificate_code", name="certificates_certificate_code_key"),
        sa.UniqueConstraint("hash", name="certificates_hash_key"),
    )
    op.create_index("ix_certificates_event_id", "certificates", ["event_id"])
    op.create_index("ix_certificates_updated_at", "certificates", ["updated_at"])


def downgrade() -> None:
    op.drop_index("ix_certificates_updated_at", table_name="certificates")
    op.drop_index("ix_certificates_event_id", table_name="certificates")
    op.drop_table("certificates")
    op.drop_index("ix_courses_author_id", table_name="courses")
    op.drop_table("courses")
    op.drop_table("events")
