"""Initial schema: users and pet_posts

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("access_token", sa.String(512), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_access_token", "users", ["access_token"], unique=True)

    op.create_table(
        "pet_posts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("status", sa.Enum("lost", "found", name="pet_status", native_enum=False), nullable=False),
        sa.Column("species", sa.String(100), nullable=True),
        sa.Column("pet_name", sa.String(255), nullable=True),
        sa.Column("sex", sa.String(50), nullable=True),
        sa.Column("breed", sa.String(255), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=True),
        sa.Column("owner_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pet_posts_status", "pet_posts", ["status"], unique=False)
    op.create_index("ix_pet_posts_species", "pet_posts", ["species"], unique=False)
    op.create_index("ix_pet_posts_owner_id", "pet_posts", ["owner_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_pet_posts_owner_id", "pet_posts")
    op.drop_index("ix_pet_posts_species", "pet_posts")
    op.drop_index("ix_pet_posts_status", "pet_posts")
    op.drop_table("pet_posts")
    op.drop_index("ix_users_access_token", "users")
    op.drop_index("ix_users_username", "users")
    op.drop_table("users")
