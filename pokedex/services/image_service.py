"""
Pokedex Backend — Image Upload Service
========================================

What:  Decodes base64 image payloads and stores them as pokemon artwork.
How:   Resolves the MIME type and payload (data URL or explicit fields),
       checks the MIME type against an allow-list, decodes the base64 and
       writes `<assets_root>/pokemons/<id>.<ext>`, overwriting any previous
       upload for the same id.
Who:   Called by the POST /upload/pokemon/{id} route.

Validation order:
    1. dataUrl (when present) must match data:image/<png|jpeg|webp>;base64,...
    2. A payload and a MIME type must both be available
    3. MIME type must be in ALLOWED_MIME_TYPES
    4. Payload must decode to at least one byte
    Nothing touches the disk until all four pass.

Concurrent uploads for the same id are not coordinated: the last completed
write wins.
"""

import base64
import binascii
import logging
import re
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from pokedex.config import settings
from pokedex.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

# ── Allowed File Types ────────────────────────────────────────────────────
# MIME type → stored file extension. The extension never comes from the client.
ALLOWED_MIME_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}

DATA_URL_PATTERN = re.compile(r"^data:(image/(?:png|jpeg|webp));base64,(.+)$")

URL_SAFE_TO_STANDARD = str.maketrans("-_", "+/")

# Sub-directory of assets_root, also the public URL segment under /assets
IMAGE_SUBDIR = "pokemons"


class ImageService:
    """
    Manages validation and storage of uploaded pokemon images.

    Directory Structure:
        assets/
        └── pokemons/
            ├── 1.png
            ├── 25.jpg
            └── 150.webp
    """

    def __init__(self, assets_root: Optional[str] = None):
        """
        Args:
            assets_root: Override the default assets path (used in tests).
                         If None, uses settings.assets_root.
        """
        self.assets_root = Path(assets_root or settings.assets_root).resolve()

    @property
    def image_dir(self) -> Path:
        return self.assets_root / IMAGE_SUBDIR

    def resolve_payload(
        self,
        data_url: Optional[str],
        image_base64: Optional[str],
        mime_type: Optional[str],
    ) -> Tuple[str, str]:
        """
        Work out the effective (mime_type, base64_payload) pair.

        A present dataUrl overrides the explicit fields; a malformed one is
        rejected rather than silently ignored.

        Raises:
            ValidationError: malformed data URL, or missing payload/MIME type
        """
        effective_mime = mime_type
        payload = image_base64

        if data_url:
            match = DATA_URL_PATTERN.match(data_url)
            if not match:
                raise ValidationError(message="Invalid data URL format", field="dataUrl")
            effective_mime, payload = match.group(1), match.group(2)

        if not payload or not effective_mime:
            raise ValidationError(message="imageBase64 and mimeType are required")

        return effective_mime, payload

    def validate_mime_type(self, mime_type: str) -> str:
        """
        Check the MIME type against the allow-list.

        Returns:
            The file extension to store the image under.
        """
        extension = ALLOWED_MIME_TYPES.get(mime_type)
        if extension is None:
            raise ValidationError(
                message="Only image/png, image/jpeg, image/webp are allowed",
                field="mimeType",
                context={"mime_type": mime_type, "allowed": list(ALLOWED_MIME_TYPES)},
            )
        return extension

    def decode_payload(self, payload: str) -> bytes:
        """
        Decode base64 in either the standard or the URL-safe alphabet (or a
        mix of both), tolerating embedded whitespace and missing padding.
        """
        cleaned = "".join(payload.split()).translate(URL_SAFE_TO_STANDARD)
        cleaned += "=" * (-len(cleaned) % 4)
        try:
            content = base64.b64decode(cleaned, validate=False)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(
                message="Image payload is not valid base64",
                field="imageBase64",
                context={"decode_error": str(e)},
            )
        if not content:
            raise ValidationError(message="Image payload is not valid base64", field="imageBase64")
        return content

    async def store_image(self, pokemon_id: int, content: bytes, extension: str) -> str:
        """
        Write the decoded image to disk, replacing any earlier upload.

        Returns:
            The stored file name (e.g. "25.png").

        Raises:
            FileStorageError if directory creation or file write fails.
        """
        file_name = f"{pokemon_id}.{extension}"
        absolute_path = self.image_dir / file_name

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store image at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                context={"path": str(absolute_path), "os_error": str(e)},
            )

        logger.info("Image stored: %s/%s (%d bytes)", IMAGE_SUBDIR, file_name, len(content))
        return file_name

    async def save_upload(
        self,
        pokemon_id: int,
        data_url: Optional[str] = None,
        image_base64: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> str:
        """
        Complete validation and storage pipeline for one upload.

        Returns:
            Path of the stored image relative to the /assets mount
            (e.g. "pokemons/25.png").
        """
        effective_mime, payload = self.resolve_payload(data_url, image_base64, mime_type)
        extension = self.validate_mime_type(effective_mime)
        content = self.decode_payload(payload)
        file_name = await self.store_image(pokemon_id, content, extension)
        return f"{IMAGE_SUBDIR}/{file_name}"


image_service = ImageService()
