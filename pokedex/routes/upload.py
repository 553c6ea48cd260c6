"""
Pokedex Backend — Image Upload Route Handler
==============================================

What:  Handles POST /upload/pokemon/{id} for base64 pokemon artwork.
How:   Reads the JSON body, delegates decoding and storage to ImageService,
       and answers with the public URL built from the request's own
       scheme and host.

Request Flow:
    1. Client sends JSON: {"dataUrl": "data:image/png;base64,..."}
       or {"imageBase64": "...", "mimeType": "image/png"}
    2. ImageService validates, decodes and writes assets/pokemons/<id>.<ext>
    3. Return 200 {"url": "http://host/assets/pokemons/<id>.<ext>"}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Request

from pokedex.schemas.pokemon import ErrorResponse, ImageUploadRequest, ImageUploadResponse
from pokedex.services.image_service import image_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])

ASSETS_URL_PREFIX = "/assets"


@router.post(
    "/upload/pokemon/{pokemon_id}",
    response_model=ImageUploadResponse,
    responses={
        400: {"description": "Malformed data URL, missing fields or disallowed type", "model": ErrorResponse},
        413: {"description": "Body larger than the configured limit", "model": ErrorResponse},
        500: {"description": "Image could not be written", "model": ErrorResponse},
    },
    summary="Upload a pokemon image",
    description=(
        "Accepts a base64 PNG, JPEG or WebP image, either as a data URL or as "
        "imageBase64 + mimeType, and stores it as the artwork of the given pokemon id. "
        "A later upload for the same id replaces the earlier file."
    ),
)
async def upload_pokemon_image(
    pokemon_id: int,
    request: Request,
    payload: Optional[ImageUploadRequest] = Body(default=None),
) -> ImageUploadResponse:
    payload = payload or ImageUploadRequest()

    relative_path = await image_service.save_upload(
        pokemon_id,
        data_url=payload.data_url,
        image_base64=payload.image_base64,
        mime_type=payload.mime_type,
    )

    base_url = str(request.base_url).rstrip("/")
    url = f"{base_url}{ASSETS_URL_PREFIX}/{relative_path}"
    logger.info("Image for pokemon %s available at %s", pokemon_id, url)
    return ImageUploadResponse(url=url)
