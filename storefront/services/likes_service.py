"""Liked products, kept per client with no server-side entity.

The store is backend-agnostic: tests use the in-memory backend, the
service uses a JSON file. Anything unreadable in the persisted state is
dropped and the store starts over from an empty set.
"""
import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from storefront.core.errors import StoreError

logger = logging.getLogger(__name__)

LIKES_STORAGE_KEY = "liked_products"


def coerce_product_id(value):
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    try:
        product_id = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    if product_id <= 0:
        return None
    return product_id


class InMemoryLikesBackend:
    def __init__(self, initial=None):
        self.payload = initial

    def load(self):
        return self.payload

    def save(self, liked_ids):
        self.payload = list(liked_ids)


class JsonFileLikesBackend:
    def __init__(self, path, key: str = LIKES_STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def load(self):
        if not self.path.exists():
            return None
        document = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(document, dict):
            raise ValueError("likes file must hold a JSON object")
        return document.get(self.key)

    def save(self, liked_ids):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({self.key: list(liked_ids)})
        fd, tmp_name = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class LikesStore:
    def __init__(self, backend):
        self._backend = backend
        self._lock = threading.Lock()
        self._liked = self._load()

    def _reset(self, reason):
        logger.warning("Resetting liked products: %s", reason)
        try:
            self._backend.save([])
        except OSError:
            logger.exception("Unable to reset persisted liked products.")
        return []

    def _load(self):
        try:
            raw = self._backend.load()
        except (OSError, ValueError) as exc:
            return self._reset("unreadable state ({})".format(exc))
        if raw is None:
            return []
        if not isinstance(raw, list):
            return self._reset("expected a list, got {}".format(type(raw).__name__))

        liked = []
        for value in raw:
            product_id = coerce_product_id(value)
            if product_id is not None and product_id not in liked:
                liked.append(product_id)
        if len(liked) != len(raw):
            logger.warning("Dropped %d invalid liked product ids.", len(raw) - len(liked))
        return liked

    def get(self) -> list[int]:
        with self._lock:
            return sorted(self._liked)

    def contains(self, product_id) -> bool:
        product_id = coerce_product_id(product_id)
        if product_id is None:
            return False
        with self._lock:
            return product_id in self._liked

    def toggle(self, product_id) -> bool:
        """Flip membership and return whether the product is now liked."""
        product_id = coerce_product_id(product_id)
        if product_id is None:
            return False
        with self._lock:
            liked = product_id not in self._liked
            if liked:
                updated = self._liked + [product_id]
            else:
                updated = [value for value in self._liked if value != product_id]
            try:
                self._backend.save(updated)
            except OSError as exc:
                logger.error("Unable to persist liked products: %s", exc, exc_info=exc)
                raise StoreError("Unable to save liked products.") from exc
            self._liked = updated
        return liked


__all__ = [
    "InMemoryLikesBackend",
    "JsonFileLikesBackend",
    "LIKES_STORAGE_KEY",
    "LikesStore",
    "coerce_product_id",
]
