"""Create users, pets and pet_traits tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema: accounts, pets (owned or public) and one row per pet trait.
How:   Portable column types (sa.Uuid, DateTime with timezone) so the same
       migration applies to PostgreSQL and SQLite.

Rollback: downgrade() drops all three tables (all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Unique identifier"),
        sa.Column("username", sa.String(50), nullable=False, comment="Login name, globally unique"),
        sa.Column("email", sa.String(255), nullable=False, comment="Contact address, globally unique"),
        sa.Column(
            "password_hash",
            sa.String(255),
            nullable=False,
            comment="argon2 hash of the password; plaintext is never stored",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When the account was registered (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "pets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("species", sa.String(20), nullable=False),
        sa.Column("rarity", sa.String(50), nullable=False, server_default=sa.text("'Common'")),
        sa.Column("hunger", sa.Integer(), nullable=False, server_default=sa.text("50")),
        sa.Column("happiness", sa.Integer(), nullable=False, server_default=sa.text("50")),
        sa.Column("energy", sa.Integer(), nullable=False, server_default=sa.text("50")),
        sa.Column("image", sa.String(500), nullable=False, server_default=sa.text("''")),
        sa.Column("owner_id", sa.Uuid(), nullable=True, comment="NULL means the pet is public"),
        sa.Column("created_by", sa.String(20), nullable=True, comment="'api' for API-created pets"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="SET NULL"),
        sa.CheckConstraint("hunger BETWEEN 0 AND 100", name="ck_pets_hunger_range"),
        sa.CheckConstraint("happiness BETWEEN 0 AND 100", name="ck_pets_happiness_range"),
        sa.CheckConstraint("energy BETWEEN 0 AND 100", name="ck_pets_energy_range"),
    )
    # Web listing filters by owner; the API filters by species
    op.create_index("idx_pets_owner_id", "pets", ["owner_id"])
    op.create_index("idx_pets_species", "pets", ["species"])

    op.create_table(
        "pet_traits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("pet_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["pet_id"], ["pets.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_pet_traits_name", "pet_traits", ["name"])
    op.create_index("idx_pet_traits_pet_id", "pet_traits", ["pet_id"])


def downgrade() -> None:
    op.drop_index("idx_pet_traits_pet_id", table_name="pet_traits")
    op.drop_index("idx_pet_traits_name", table_name="pet_traits")
    op.drop_table("pet_traits")
    op.drop_index("idx_pets_species", table_name="pets")
    op.drop_index("idx_pets_owner_id", table_name="pets")
    op.drop_table("pets")
    op.drop_table("users")
