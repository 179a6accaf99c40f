# app/services/cart_storage.py
import json
import os
import tempfile
from typing import Dict, Protocol

import redis

from app.utils.retry import redis_retry
from app.utils.settings import CART_STORAGE, CART_STORAGE_PATH, REDIS_URL
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartStorage(Protocol):
    """
    Trwaly magazyn klucz -> tekst (odpowiednik localStorage).
    load zwraca None gdy klucza nie ma.
    """

    def load(self, key: str) -> str | None: ...

    def save(self, key: str, value: str) -> None: ...


class MemoryCartStorage:
    """Magazyn w pamieci - testy i tryb CART_STORAGE=memory."""

    def __init__(self, initial: Dict[str, str] | None = None):
        self.data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileCartStorage:
    """
    Wszystkie klucze w jednym pliku JSON.
    Zapis przez plik tymczasowy + os.replace, zeby przerwany zapis nie
    zostawil polowy pliku.
    """

    def __init__(self, path: str | None = None):
        self.path = path or CART_STORAGE_PATH

    def _read_all(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def save(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value

        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".cart-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_path, self.path)
        except OSError:
            os.unlink(tmp_path)
            raise


class RedisCartStorage:
    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @redis_retry()
    def load(self, key: str) -> str | None:
        logger.info(f"Redis GET {key}")
        return self.redis.get(key)

    @redis_retry()
    def save(self, key: str, value: str) -> None:
        logger.info(f"Redis SET {key}")
        self.redis.set(name=key, value=value)


def build_storage(kind: str | None = None) -> CartStorage:
    kind = (kind or CART_STORAGE).lower()

    if kind == "memory":
        return MemoryCartStorage()
    if kind == "redis":
        return RedisCartStorage()
    if kind == "file":
        return JsonFileCartStorage()

    raise ValueError(f"Unknown cart storage: {kind}")

