"""Testy backendow magazynu koszyka."""

import json
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.services.cart_storage import (
    JsonFileCartStorage,
    MemoryCartStorage,
    RedisCartStorage,
    build_storage,
)
from app.services.cart_store import CART_STORAGE_KEY, CartStore


class TestJsonFileCartStorage:
    def test_missing_file_loads_none(self, tmp_path):
        storage = JsonFileCartStorage(str(tmp_path / "cart.json"))
        assert storage.load(CART_STORAGE_KEY) is None

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "cart.json"
        storage = JsonFileCartStorage(str(path))

        storage.save(CART_STORAGE_KEY, '[{"productId": "1", "quantity": 2}]')

        assert storage.load(CART_STORAGE_KEY) == '[{"productId": "1", "quantity": 2}]'
        assert json.loads(path.read_text())[CART_STORAGE_KEY]

    def test_other_keys_survive_save(self, tmp_path):
        path = tmp_path / "cart.json"
        path.write_text(json.dumps({"theme": "dark"}))
        storage = JsonFileCartStorage(str(path))

        storage.save(CART_STORAGE_KEY, "[]")

        assert json.loads(path.read_text()) == {"theme": "dark", CART_STORAGE_KEY: "[]"}

    def test_garbage_file_loads_none(self, tmp_path):
        path = tmp_path / "cart.json"
        path.write_text("not json at all")
        assert JsonFileCartStorage(str(path)).load(CART_STORAGE_KEY) is None

    def test_no_temp_files_left_behind(self, tmp_path):
        storage = JsonFileCartStorage(str(tmp_path / "cart.json"))
        storage.save(CART_STORAGE_KEY, "[]")
        assert [p.name for p in tmp_path.iterdir()] == ["cart.json"]

    def test_cart_survives_restart(self, tmp_path):
        path = str(tmp_path / "cart.json")
        store = CartStore.load(JsonFileCartStorage(path))
        store.add_to_cart("42")
        store.add_to_cart("42")

        restarted = CartStore.load(JsonFileCartStorage(path))

        assert restarted.get_quantity("42") == 2


class TestRedisCartStorage:
    def test_load_and_save_use_cart_key(self):
        client = MagicMock()
        client.get.return_value = "[]"
        storage = RedisCartStorage(client=client)

        assert storage.load(CART_STORAGE_KEY) == "[]"
        storage.save(CART_STORAGE_KEY, "[1]")

        client.get.assert_called_once_with(CART_STORAGE_KEY)
        client.set.assert_called_once_with(name=CART_STORAGE_KEY, value="[1]")

    def test_transient_errors_are_retried(self):
        client = MagicMock()
        client.get.side_effect = [RedisConnectionError("boom"), "[]"]
        storage = RedisCartStorage(client=client)

        assert storage.load(CART_STORAGE_KEY) == "[]"
        assert client.get.call_count == 2

    def test_persistent_error_is_raised(self):
        client = MagicMock()
        client.set.side_effect = RedisConnectionError("down")
        storage = RedisCartStorage(client=client)

        with pytest.raises(RedisConnectionError):
            storage.save(CART_STORAGE_KEY, "[]")
        assert client.set.call_count == 3


class TestBuildStorage:
    def test_memory(self):
        assert isinstance(build_storage("memory"), MemoryCartStorage)

    def test_file(self):
        assert isinstance(build_storage("FILE"), JsonFileCartStorage)

    def test_unknown(self):
        with pytest.raises(ValueError):
            build_storage("sqlite")
