"""
Pokedex Backend — Pokemon Service (Record Operations)
=======================================================

What:  List, search, get, create, replace and delete pokemon documents.
How:   Each operation is a single query against the `pokemons` table through
       the request's AsyncSession. Writes are flushed inside the service so
       constraint violations surface here; the session dependency commits.
Who:   Called by the /pokemons and /pokemon route handlers.

Error Mapping:
    - No matching record                  → NotFoundError (404)
    - Read/delete query failure           → DatabaseError (500, raw message)
    - Create/update validation or
      constraint failure (e.g. duplicate) → ValidationError (400, raw message)

NotFoundError and ValidationError pass through the database error wrappers
unchanged.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokedex.exceptions import DatabaseError, NotFoundError, ValidationError
from pokedex.models.pokemon import MAX_POKEMON_ID, NAME_LANGUAGES, Pokemon
from pokedex.schemas.pokemon import (
    PokemonDocument,
    PokemonListResponse,
    PokemonMutationResponse,
)

logger = logging.getLogger(__name__)


def _error_message(exc: SQLAlchemyError) -> str:
    """The driver's own message when there is one, else SQLAlchemy's."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class PokemonService:
    """
    Stateless record operations; every method receives the session to use.
    """

    async def _find_by_id(self, db: AsyncSession, pokemon_id: int) -> Optional[Pokemon]:
        # No stored id lies outside this range; oversized values cannot be bound
        if not 1 <= pokemon_id <= MAX_POKEMON_ID:
            return None
        result = await db.execute(select(Pokemon).where(Pokemon.id == pokemon_id))
        return result.scalar_one_or_none()

    async def list_pokemons(self, db: AsyncSession) -> PokemonListResponse:
        """
        Every record in insertion order, with the count of records returned.

        No pagination: the full collection is loaded.
        """
        try:
            result = await db.execute(
                select(Pokemon).order_by(Pokemon.created_at, Pokemon.id)
            )
            pokemons: List[Dict[str, Any]] = [p.to_record() for p in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing pokemons: %s", str(e), exc_info=True)
            raise DatabaseError(message=_error_message(e))

        return PokemonListResponse(pokemons=pokemons, total_pokemons=len(pokemons))

    async def search_by_name(self, db: AsyncSession, name: str) -> Dict[str, Any]:
        """
        First record whose english, japanese, chinese or french name contains
        `name`, ignoring case.

        LIKE wildcards in `name` are escaped, so "%" matches a literal percent
        sign.

        Raises:
            NotFoundError: no localized name matches
        """
        conditions = [
            Pokemon.localized_name(language).icontains(name, autoescape=True)
            for language in NAME_LANGUAGES
        ]
        try:
            result = await db.execute(
                select(Pokemon)
                .where(or_(*conditions))
                .order_by(Pokemon.created_at, Pokemon.id)
                .limit(1)
            )
            pokemon = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Database error searching pokemons for %r: %s", name, str(e))
            raise DatabaseError(message=_error_message(e), context={"name": name})

        if pokemon is None:
            raise NotFoundError(lookup=name)
        return pokemon.to_record()

    async def get_pokemon(self, db: AsyncSession, pokemon_id: int) -> Dict[str, Any]:
        """
        Record with the given application id.

        Raises:
            NotFoundError: no record has this id
        """
        try:
            pokemon = await self._find_by_id(db, pokemon_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching pokemon %s: %s", pokemon_id, str(e))
            raise DatabaseError(message=_error_message(e), context={"id": pokemon_id})

        if pokemon is None:
            raise NotFoundError(lookup=str(pokemon_id))
        return pokemon.to_record()

    async def create_pokemon(
        self, db: AsyncSession, payload: PokemonDocument
    ) -> PokemonMutationResponse:
        """
        Insert a new record.

        Duplicate ids are rejected by the unique constraint on `id`, not by a
        lookup beforehand.

        Raises:
            ValidationError: the database refused the insert
        """
        pokemon = Pokemon(id=payload.id, document=payload.to_document())
        try:
            db.add(pokemon)
            await db.flush()
        except SQLAlchemyError as e:
            logger.warning("Pokemon %s rejected on insert: %s", payload.id, _error_message(e))
            raise ValidationError(message=_error_message(e), context={"id": payload.id})

        logger.info("Pokemon %s created", pokemon.id)
        return PokemonMutationResponse(
            message="Pokemon created successfully",
            pokemon=pokemon.to_record(),
        )

    async def update_pokemon(
        self, db: AsyncSession, pokemon_id: int, payload: PokemonDocument
    ) -> PokemonMutationResponse:
        """
        Replace the whole document of the record with the given id.

        Fields missing from `payload` are dropped from the stored record. The
        record's id becomes `payload.id`, which may differ from `pokemon_id`.

        Raises:
            NotFoundError: no record has `pokemon_id`
            ValidationError: the database refused the update
        """
        try:
            pokemon = await self._find_by_id(db, pokemon_id)
            if pokemon is None:
                raise NotFoundError(lookup=str(pokemon_id))

            pokemon.id = payload.id
            pokemon.document = payload.to_document()
            await db.flush()
        except SQLAlchemyError as e:
            logger.warning("Pokemon %s rejected on update: %s", pokemon_id, _error_message(e))
            raise ValidationError(message=_error_message(e), context={"id": pokemon_id})

        logger.info("Pokemon %s replaced (now id %s)", pokemon_id, pokemon.id)
        return PokemonMutationResponse(
            message="Pokemon updated successfully",
            pokemon=pokemon.to_record(),
        )

    async def delete_pokemon(self, db: AsyncSession, pokemon_id: int) -> PokemonMutationResponse:
        """
        Remove the record with the given id and return what it contained.

        Raises:
            NotFoundError: no record has this id
        """
        try:
            pokemon = await self._find_by_id(db, pokemon_id)
            if pokemon is None:
                raise NotFoundError(lookup=str(pokemon_id))

            record = pokemon.to_record()
            await db.delete(pokemon)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting pokemon %s: %s", pokemon_id, str(e))
            raise DatabaseError(message=_error_message(e), context={"id": pokemon_id})

        logger.info("Pokemon %s deleted", pokemon_id)
        return PokemonMutationResponse(
            message="Pokemon deleted successfully",
            pokemon=record,
        )


pokemon_service = PokemonService()
