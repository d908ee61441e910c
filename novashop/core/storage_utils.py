# novashop/core/storage_utils.py
import uuid

from supabase import Client

from novashop.core.errors import StorageUnavailableError, ValidationError

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class ImageStorage:
    """
    Thin wrapper around one Supabase Storage bucket.

    Built once at startup (see create_image_storage) and shared by all
    requests through app.state.storage.
    """

    def __init__(self, client: Client, bucket: str):
        self.client = client
        self.bucket = bucket

    def upload(self, path: str, file_bytes: bytes, content_type: str) -> str:
        """
        Upload raw bytes and return the public URL.

        If a file already exists at this path, it will be overwritten
        thanks to the 'upsert' option.

        Args:
            path: Full object path inside the bucket.
                  Example: "users/<uuid>.png"
            file_bytes: File content in bytes.
            content_type: MIME type stored with the object.
        """
        store = self.client.storage.from_(self.bucket)
        store.upload(path, file_bytes, {"upsert": "true", "content-type": content_type})
        return store.get_public_url(path)

    def delete_public_url(self, url: str) -> None:
        """
        Delete a file by its public URL.
        No-op if the URL does not belong to this bucket.
        """
        path = extract_path_from_public_url(url, self.bucket)
        if path:
            self.client.storage.from_(self.bucket).remove([path])


def extract_path_from_public_url(url: str, bucket: str) -> str | None:
    """
    Given a public URL, extract the object path relative to the bucket.

    Example:
        https://<proj>.supabase.co/storage/v1/object/public/assets/users/u.png
        -> 'users/u.png'
    """
    marker = f"/storage/v1/object/public/{bucket}/"
    idx = url.find(marker)
    if idx == -1:
        return None
    return url[idx + len(marker) :]


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "<uuid4>.png"
    """
    return f"{uuid.uuid4()}.{ext}"


def validate_image(content_type: str | None, file_bytes: bytes) -> str:
    """
    Check an uploaded image and return the file extension to store it with.

    Raises:
        ValidationError: unsupported type or larger than MAX_IMAGE_BYTES.
    """
    if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise ValidationError("Unsupported image type. Allowed: JPEG, PNG, WEBP.")
    if len(file_bytes) > MAX_IMAGE_BYTES:
        raise ValidationError("Image too large (max 5MB).")
    return ALLOWED_IMAGE_CONTENT_TYPES[content_type]


def store_image(
    storage: ImageStorage | None,
    folder: str,
    content_type: str | None,
    file_bytes: bytes,
) -> str:
    """
    Validate and upload an image under `folder/`, returning its public URL.

    Raises:
        ValidationError: see validate_image.
        StorageUnavailableError: if no storage is configured.
    """
    ext = validate_image(content_type, file_bytes)
    if storage is None:
        raise StorageUnavailableError()
    path = f"{folder}/{generate_filename(ext)}"
    return storage.upload(path, file_bytes, content_type)
