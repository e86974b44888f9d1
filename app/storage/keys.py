import uuid

_EXT_BY_CONTENT_TYPE = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/heic": "heic",
    "image/heif": "heif",
    "image/gif": "gif",
}


def ext_from_content_type(content_type: str) -> str:
    return _EXT_BY_CONTENT_TYPE.get((content_type or "").lower(), "jpg")


def item_image_key(user_id: str, ext: str = "jpg") -> str:
    return f"u/{user_id}/items/{uuid.uuid4().hex}.{ext}"
