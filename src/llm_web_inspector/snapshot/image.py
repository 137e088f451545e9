"""
Screenshot inspection.
"""

import base64
import binascii
import io

from PIL import Image, UnidentifiedImageError

from llm_web_inspector.exceptions import InvalidInputError
from llm_web_inspector.snapshot.models import Size


def decode_base64_image(data: str) -> bytes:
    """Decode a ``data:image/...;base64,`` URL or bare base64 string."""
    if data.startswith("data:"):
        _, _, data = data.partition(",")
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"Screenshot is not valid base64: {e}") from e


def image_info_of_base64(data: str) -> Size:
    """
    Read the pixel size of a base64 screenshot.

    Raises:
        InvalidInputError: If the data is empty or not a decodable image
    """
    if not data:
        raise InvalidInputError("Screenshot is empty; cannot derive page size")

    raw = decode_base64_image(data)
    try:
        with Image.open(io.BytesIO(raw)) as img:
            width, height = img.size
    except UnidentifiedImageError as e:
        raise InvalidInputError(f"Screenshot is not a recognized image: {e}") from e
    return Size(width=width, height=height)
