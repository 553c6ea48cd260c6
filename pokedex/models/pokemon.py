"""
Pokedex Backend — Pokemon SQLAlchemy Model
============================================

What:  ORM model representing the `pokemons` document table.
How:   Each row stores one pokemon record as a JSON document, alongside the
       application-level `id` pulled out into its own unique column for
       lookups. Alembic reads this for migrations.
Who:   Used by PokemonService for CRUD operations.

Table Design:
    - pk: Storage-generated UUID, never exposed by the API
    - id: Application pokedex number; unique constraint is the only
      duplicate guard
    - document: The full record as submitted (JSONB on PostgreSQL, JSON
      elsewhere); name, type, base stats and any extra attributes
    - created_at / updated_at: UTC timestamps; created_at gives the
      insertion order used by list and search
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Index, Integer, Uuid, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from pokedex.database import Base

# Localized name keys searched by GET /pokemons/search/{name}
NAME_LANGUAGES = ("english", "japanese", "chinese", "french")

# Largest value the 32-bit `id` column holds
MAX_POKEMON_ID = 2**31 - 1

DocumentType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Pokemon(Base):
    """
    A single pokemon document.

    Query Patterns:
        - Get/update/delete by id: WHERE id = :id → unique index lookup
        - List: ORDER BY created_at
        - Search: WHERE document #>> '{name,<lang>}' ILIKE '%:name%' for each
          language, OR-ed together, first row by created_at
    """

    __tablename__ = "pokemons"

    pk: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Storage identifier, distinct from the application id",
    )

    id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        unique=True,
        comment="Application-level pokedex number",
    )

    document: Mapped[Dict[str, Any]] = mapped_column(
        DocumentType,
        nullable=False,
        comment="Complete pokemon record as submitted by the client",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this record was inserted (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this record was last replaced (UTC)",
    )

    __table_args__ = (
        Index("idx_pokemons_created_at", "created_at"),
    )

    @classmethod
    def localized_name(cls, language: str):
        """SQL expression for `document.name.<language>` as text."""
        return cls.document[("name", language)].as_string()

    def to_record(self) -> Dict[str, Any]:
        """The record exactly as clients see it."""
        return dict(self.document)

    def __repr__(self) -> str:
        english = (self.document or {}).get("name", {}).get("english")
        return f"<Pokemon(id={self.id}, name='{english}')>"
