import fakeredis
import pytest

from rewear.infra.session_store import MemorySessionStore, RedisSessionStore, build_session_store


@pytest.fixture(params=["memory", "redis"])
def store(request):
    if request.param == "memory":
        return MemorySessionStore()
    return RedisSessionStore(fakeredis.FakeRedis(decode_responses=True))


def test_set_get_delete(store):
    store.set("sb-rewear-u1:session", {"access_token": "at"})
    assert store.get("sb-rewear-u1:session") == {"access_token": "at"}
    store.delete("sb-rewear-u1:session")
    assert store.get("sb-rewear-u1:session") is None


def test_clear_prefix_only_removes_matching_keys(store):
    store.set("sb-rewear-u1:session", {"a": 1})
    store.set("sb-rewear-u1:profile", {"b": 2})
    store.set("sb-rewear-u2:session", {"c": 3})
    assert store.clear_prefix("sb-rewear-u1:") == 2
    assert store.get("sb-rewear-u1:session") is None
    assert store.get("sb-rewear-u2:session") == {"c": 3}


def test_redis_store_drops_unreadable_values():
    client = fakeredis.FakeRedis(decode_responses=True)
    client.set("sb-rewear-u1:session", "{pas du json")
    store = RedisSessionStore(client)
    assert store.get("sb-rewear-u1:session") is None
    assert client.get("sb-rewear-u1:session") is None


def test_build_without_url_is_memory():
    assert isinstance(build_session_store(""), MemorySessionStore)


def test_memory_store_evicts_expired_entries():
    now = [1000.0]
    store = MemorySessionStore(clock=lambda: now[0])
    store.set("sb-rewear-u1:session", {"a": 1}, ttl=60)
    store.set("sb-rewear-u2:session", {"b": 2})
    now[0] += 61
    assert store.get("sb-rewear-u1:session") is None
    assert store.get("sb-rewear-u2:session") == {"b": 2}


def test_memory_store_sweeps_on_write():
    now = [0.0]
    store = MemorySessionStore(clock=lambda: now[0])
    store.set("sb-rewear-u1:session", {"a": 1}, ttl=10)
    now[0] = 11
    store.set("sb-rewear-u2:session", {"b": 2}, ttl=10)
    assert list(store._data) == ["sb-rewear-u2:session"]


def test_redis_store_sets_expiry():
    client = fakeredis.FakeRedis(decode_responses=True)
    store = RedisSessionStore(client)
    store.set("sb-rewear-u1:session", {"a": 1}, ttl=120)
    assert 0 < client.ttl("sb-rewear-u1:session") <= 120
