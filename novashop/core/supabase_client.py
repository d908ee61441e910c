# novashop/core/supabase_client.py
from supabase import create_client, Client

from novashop.core.config import Settings
from novashop.core.storage_utils import ImageStorage


def supabase_admin(settings: Settings) -> Client:
    """
    Create a Supabase client with the service role key.

    Use cases:
      - uploading user photos and product images to Storage

    WARNING:
      - Never expose service role key to frontend.
      - Only backend should call this.

    Raises:
        RuntimeError: if SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is not set.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("Missing SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY in .env")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


def create_image_storage(settings: Settings) -> ImageStorage | None:
    """
    Build the image storage used by registration and product creation.

    Returns None when Supabase is not configured; uploads then fail with
    503 while the rest of the API keeps working.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        return None
    return ImageStorage(supabase_admin(settings), settings.STORAGE_BUCKET)
