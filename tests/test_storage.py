"""Tests for the key-value backends behind the cart."""
from __future__ import annotations

import os
from dataclasses import dataclass, field

import pytest
import redis

from storefront.core.exceptions import StorageException
from storefront.core.redis_storage import RedisStorage
from storefront.core.storage import FileStorage, KeyValueStorage, MemoryStorage


@dataclass
class FakeRedisClient:
    data: dict[str, str] = field(default_factory=dict)
    expiry: dict[str, int] = field(default_factory=dict)
    fail: bool = False

    def ping(self) -> bool:
        return True

    def get(self, key: str):
        if self.fail:
            raise redis.ConnectionError("gone")
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        if self.fail:
            raise redis.ConnectionError("gone")
        self.data[key] = value
        return True

    def setex(self, key: str, ttl: int, value: str) -> bool:
        self.set(key, value)
        self.expiry[key] = ttl
        return True


@pytest.fixture
def fake_redis(monkeypatch):
    import storefront.core.redis_storage as redis_storage_module

    client = FakeRedisClient()
    monkeypatch.setattr(redis_storage_module.redis, "from_url", lambda *args, **kwargs: client)
    return client


def test_backends_satisfy_protocol(tmp_path) -> None:
    assert isinstance(MemoryStorage(), KeyValueStorage)
    assert isinstance(FileStorage(tmp_path), KeyValueStorage)
    assert isinstance(RedisStorage(None), KeyValueStorage)


def test_memory_storage_roundtrip() -> None:
    storage = MemoryStorage()
    assert storage.get("k") is None
    storage.set("k", "v")
    assert storage.get("k") == "v"
    storage.delete("k")
    assert storage.get("k") is None


def test_file_storage_persists_across_instances(tmp_path) -> None:
    FileStorage(tmp_path).set("talktoshop_cart:42", "[]")
    assert FileStorage(tmp_path).get("talktoshop_cart:42") == "[]"


def test_file_storage_sanitizes_keys(tmp_path) -> None:
    storage = FileStorage(tmp_path)
    storage.set("../escape/key", "x")

    assert storage.get("../escape/key") == "x"
    assert all(path.parent == tmp_path for path in tmp_path.iterdir())


def test_file_storage_leaves_no_temp_files(tmp_path) -> None:
    storage = FileStorage(tmp_path)
    storage.set("k", "one")
    storage.set("k", "two")

    assert storage.get("k") == "two"
    assert sorted(os.listdir(tmp_path)) == ["k.json"]


def test_file_storage_unwritable_dir_raises(tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("")
    with pytest.raises(StorageException):
        FileStorage(blocker / "sub")


def test_redis_storage_uses_setex_with_ttl(fake_redis) -> None:
    storage = RedisStorage("redis://fake", ttl_seconds=60)

    storage.set("cart", "[]")

    assert storage.using_redis
    assert fake_redis.data["cart"] == "[]"
    assert fake_redis.expiry["cart"] == 60
    assert storage.get("cart") == "[]"


def test_redis_storage_is_shared_between_instances(fake_redis) -> None:
    RedisStorage("redis://fake").set("cart", '[{"id": "p1"}]')
    assert RedisStorage("redis://fake").get("cart") == '[{"id": "p1"}]'


def test_redis_storage_without_url_uses_memory() -> None:
    storage = RedisStorage(None)
    storage.set("k", "v")

    assert not storage.using_redis
    assert storage.get("k") == "v"


def test_redis_storage_falls_back_when_ping_fails(monkeypatch) -> None:
    import storefront.core.redis_storage as redis_storage_module

    def broken(*args, **kwargs):
        raise redis.ConnectionError("refused")

    monkeypatch.setattr(redis_storage_module.redis, "from_url", broken)
    storage = RedisStorage("redis://nowhere")

    assert not storage.using_redis
    storage.set("k", "v")
    assert storage.get("k") == "v"


def test_redis_storage_switches_to_memory_on_runtime_error(fake_redis) -> None:
    storage = RedisStorage("redis://fake")
    fake_redis.fail = True

    storage.set("k", "v")

    assert not storage.using_redis
    assert storage.get("k") == "v"
