from functools import lru_cache

from storefront.config import get_settings
from storefront.database.session import get_db
from storefront.services.likes_service import JsonFileLikesBackend, LikesStore


@lru_cache
def get_likes_store() -> LikesStore:
    settings = get_settings()
    return LikesStore(JsonFileLikesBackend(settings.LIKES_STORE_PATH))


__all__ = ["get_db", "get_likes_store"]
