"""Create pokemons table

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the `pokemons` document table.
How:   One JSONB column holds the whole record; the application-level id is
       copied into its own unique column so lookups and duplicate checks do
       not have to reach into the document.

Rollback: downgrade() drops the table and every stored record with it.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pokemons",

        sa.Column(
            "pk",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
            comment="Storage identifier, never exposed by the API",
        ),

        sa.Column(
            "id",
            sa.Integer(),
            nullable=False,
            comment="Pokedex number supplied by the client",
        ),

        sa.Column(
            "document",
            postgresql.JSONB(),
            nullable=False,
            comment="Full record: id, name{english,japanese,chinese,french}, type, base, extras",
        ),

        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),

        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),

        sa.PrimaryKeyConstraint("pk"),
    )

    # Enforces one record per pokedex number; a duplicate insert fails here
    op.create_index("uq_pokemons_id", "pokemons", ["id"], unique=True)

    # Listing and search return records in insertion order
    op.create_index("idx_pokemons_created_at", "pokemons", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_pokemons_created_at", table_name="pokemons")
    op.drop_index("uq_pokemons_id", table_name="pokemons")
    op.drop_table("pokemons")
