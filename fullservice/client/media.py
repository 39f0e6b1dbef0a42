"""Image payloads as data URLs, plus the locally cached profile image."""
import base64
import mimetypes
from pathlib import Path
from typing import Optional, Union

from fullservice.client.store import LocalStore
from fullservice.core.errors import ValidationError


def to_data_url(data: bytes, content_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def file_to_data_url(path: Union[str, Path]) -> str:
    path = Path(path)
    content_type, _ = mimetypes.guess_type(path.name)
    if content_type is None or not content_type.startswith("image/"):
        raise ValidationError(f"Not an image file: {path.name}")
    return to_data_url(path.read_bytes(), content_type)


def _profile_image_key(user_id: int) -> str:
    return f"profile_image_{user_id}"


def save_profile_image(store: LocalStore, user_id: int, data_url: str) -> None:
    store.set(_profile_image_key(user_id), data_url)


def load_profile_image(store: LocalStore, user_id: int) -> Optional[str]:
    return store.get(_profile_image_key(user_id))
