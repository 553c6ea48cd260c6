"""
Pokedex Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract of the Pokedex service.
How:   FastAPI validates request bodies against these models, serializes
       responses through them, and generates the OpenAPI docs from them.

Record bodies are validated structurally (id, localized name, optional type
and base stats) while any additional attribute is accepted and stored as-is.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from pokedex.models.pokemon import MAX_POKEMON_ID


# ══════════════════════════════════════════════════════════════════════════
# Record Models: the pokemon document accepted by create/update
# ══════════════════════════════════════════════════════════════════════════


def _dump_set_fields(model: BaseModel) -> Dict[str, Any]:
    document = model.model_dump(mode="json", exclude_unset=True)
    document.update(model.model_extra or {})
    return document


class PokemonName(BaseModel):
    """Localized names keyed by language code."""

    english: str = Field(min_length=1, description="English name (required)")
    japanese: Optional[str] = Field(default=None, description="Japanese name")
    chinese: Optional[str] = Field(default=None, description="Chinese name")
    french: Optional[str] = Field(default=None, description="French name")

    model_config = {"extra": "allow"}

    def to_document(self) -> Dict[str, Any]:
        return _dump_set_fields(self)


class PokemonDocument(BaseModel):
    """
    What:  A full pokemon record as sent to POST /pokemons and PUT /pokemon/{id}.
    How:   `to_document()` keeps only the fields the client actually sent, so
           an update replaces the stored document instead of merging into it.
    """

    id: int = Field(ge=1, le=MAX_POKEMON_ID, description="Application-level pokedex number")
    name: PokemonName = Field(description="Localized names")
    type: Optional[List[str]] = Field(default=None, description="Elemental types")
    base: Optional[Dict[str, Union[int, float]]] = Field(
        default=None,
        description="Base stats (HP, Attack, Defense, Sp. Attack, Sp. Defense, Speed)",
    )

    model_config = {"extra": "allow"}

    def to_document(self) -> Dict[str, Any]:
        document = _dump_set_fields(self)
        document["name"] = self.name.to_document()
        return document


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PokemonListResponse(BaseModel):
    """Returned by GET /pokemons; totalPokemons always equals len(pokemons)."""

    pokemons: List[Dict[str, Any]] = Field(description="Every stored record")
    total_pokemons: int = Field(alias="totalPokemons", description="Number of records returned")

    model_config = {"populate_by_name": True}


class PokemonMutationResponse(BaseModel):
    """Returned by create, update and delete."""

    message: str = Field(description="Human-readable outcome")
    pokemon: Dict[str, Any] = Field(description="The created, updated or deleted record")


# ══════════════════════════════════════════════════════════════════════════
# Upload Models
# ══════════════════════════════════════════════════════════════════════════


class ImageUploadRequest(BaseModel):
    """
    What:  Body of POST /upload/pokemon/{id}.

    Either `dataUrl` (data:image/<png|jpeg|webp>;base64,<payload>) or the
    explicit `imageBase64` + `mimeType` pair. A well-formed `dataUrl` wins
    over the explicit fields.
    """

    data_url: Optional[str] = Field(default=None, alias="dataUrl")
    image_base64: Optional[str] = Field(default=None, alias="imageBase64")
    mime_type: Optional[str] = Field(default=None, alias="mimeType")

    model_config = {"populate_by_name": True}


class ImageUploadResponse(BaseModel):
    url: str = Field(description="Public URL of the stored image")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "Pokemon not found"}
    """

    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
