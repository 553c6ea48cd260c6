"""
Pokedex Backend — Pokemon Record Route Handlers
=================================================

What:  CRUD endpoints over the pokemon collection.
How:   Extracts path parameters and the validated body, delegates to
       PokemonService, returns JSON. Errors are raised as application
       exceptions and formatted by the global handlers.

Route Inventory:
    GET    /pokemons                 list all (+ totalPokemons)
    GET    /pokemons/search/{name}   first case-insensitive name match
    GET    /pokemons/{id}            one record
    POST   /pokemons                 create (201)
    PUT    /pokemon/{id}             full replace
    DELETE /pokemon/{id}             remove
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from pokedex.database import get_db_session
from pokedex.exceptions import NotFoundError
from pokedex.schemas.pokemon import (
    ErrorResponse,
    PokemonDocument,
    PokemonListResponse,
    PokemonMutationResponse,
)
from pokedex.services.pokemon_service import pokemon_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pokemons"])


def parse_pokemon_id(
    pokemon_id: str = Path(description="Pokedex number of the record"),
) -> int:
    """
    Path id as an int. A value that is not an integer cannot name any
    record, so it is reported as not found rather than as a bad request.
    """
    try:
        return int(pokemon_id)
    except ValueError:
        raise NotFoundError(lookup=pokemon_id)


@router.get(
    "/pokemons",
    response_model=PokemonListResponse,
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List every pokemon",
)
async def list_pokemons(
    db: AsyncSession = Depends(get_db_session),
) -> PokemonListResponse:
    """Returns all records with `totalPokemons` equal to the array length."""
    return await pokemon_service.list_pokemons(db)


@router.get(
    "/pokemons/search/{name}",
    response_model=Dict[str, Any],
    responses={
        404: {"description": "No name matches", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Find a pokemon by any localized name",
    description=(
        "Case-insensitive substring match against the english, japanese, chinese "
        "and french names. Returns the first match only."
    ),
)
async def search_pokemon(
    name: str,
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    return await pokemon_service.search_by_name(db, name)


@router.get(
    "/pokemons/{pokemon_id}",
    response_model=Dict[str, Any],
    responses={
        404: {"description": "Pokemon not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Get a pokemon by id",
)
async def get_pokemon(
    pokemon_id: int = Depends(parse_pokemon_id),
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    return await pokemon_service.get_pokemon(db, pokemon_id)


@router.post(
    "/pokemons",
    status_code=201,
    response_model=PokemonMutationResponse,
    responses={400: {"description": "Invalid record or duplicate id", "model": ErrorResponse}},
    summary="Create a pokemon",
)
async def create_pokemon(
    payload: PokemonDocument,
    db: AsyncSession = Depends(get_db_session),
) -> PokemonMutationResponse:
    logger.info("Create request for pokemon %s", payload.id)
    return await pokemon_service.create_pokemon(db, payload)


@router.put(
    "/pokemon/{pokemon_id}",
    response_model=PokemonMutationResponse,
    responses={
        400: {"description": "Invalid record or duplicate id", "model": ErrorResponse},
        404: {"description": "Pokemon not found", "model": ErrorResponse},
    },
    summary="Replace a pokemon",
    description="Full-document replace: fields omitted from the body are removed.",
)
async def update_pokemon(
    payload: PokemonDocument,
    pokemon_id: int = Depends(parse_pokemon_id),
    db: AsyncSession = Depends(get_db_session),
) -> PokemonMutationResponse:
    return await pokemon_service.update_pokemon(db, pokemon_id, payload)


@router.delete(
    "/pokemon/{pokemon_id}",
    response_model=PokemonMutationResponse,
    responses={
        404: {"description": "Pokemon not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Delete a pokemon",
)
async def delete_pokemon(
    pokemon_id: int = Depends(parse_pokemon_id),
    db: AsyncSession = Depends(get_db_session),
) -> PokemonMutationResponse:
    return await pokemon_service.delete_pokemon(db, pokemon_id)
