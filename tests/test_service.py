from datetime import datetime, timedelta, timezone

import pytest

from linkcut.cache import Cacher
from linkcut.domain import Link, LinkExpiredError, LinkNotFoundError
from linkcut.hashgen import Generator
from linkcut.service import LinkService


class FakeRepository:
    def __init__(self, error=None):
        self.links = {}
        self.error = error

    def add(self, link):
        if self.error:
            raise self.error
        self.links[link.hash] = link

    def get_by_hash(self, hash_):
        if self.error:
            raise self.error
        try:
            return self.links[hash_]
        except KeyError:
            raise LinkNotFoundError() from None


class FixedGenerator(Generator):
    def __init__(self, value):
        self.value = value

    def generate(self):
        return self.value


class FailingGenerator(Generator):
    def generate(self):
        raise RuntimeError("failed to generate random bytes")


class DictCacher(Cacher):
    def __init__(self, fail=False):
        self.data = {}
        self.ttls = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise ConnectionError("down")
        return self.data.get(key)

    def set(self, key, value, ttl):
        if self.fail:
            raise ConnectionError("down")
        self.data[key] = value
        self.ttls[key] = ttl


def make_service(repo=None, generator=None, cacher=None):
    return LinkService(
        repo if repo is not None else FakeRepository(),
        generator if generator is not None else FixedGenerator("abc123"),
        cacher if cacher is not None else DictCacher(),
    )


def future(seconds=3600):
    return datetime.now(timezone.utc) + timedelta(seconds=seconds)


def test_generate_link_stores_and_returns_hash():
    repo = FakeRepository()
    service = make_service(repo=repo, generator=FixedGenerator("xyz"))
    expires = future()
    result = service.generate_link("https://example.com/a", expires)
    assert result == "xyz"
    stored = repo.links["xyz"]
    assert stored.url == "https://example.com/a"
    assert stored.expires_at == expires


def test_generate_link_propagates_generator_error():
    service = make_service(generator=FailingGenerator())
    with pytest.raises(RuntimeError):
        service.generate_link("https://example.com/a", future())


def test_generate_link_propagates_repository_error():
    service = make_service(repo=FakeRepository(error=ValueError("db")))
    with pytest.raises(ValueError):
        service.generate_link("https://example.com/a", future())


def test_get_link_round_trip_and_caches():
    cacher = DictCacher()
    service = make_service(cacher=cacher, generator=FixedGenerator("h1"))
    hash_ = service.generate_link("https://example.com/b", future(3600))
    assert service.get_link(hash_) == "https://example.com/b"
    assert cacher.data[hash_] == "https://example.com/b"
    assert 0 < cacher.ttls[hash_] <= 3600


def test_get_link_prefers_cache():
    cacher = DictCacher()
    cacher.data["h2"] = "https://example.com/cached"
    service = make_service(cacher=cacher)
    assert service.get_link("h2") == "https://example.com/cached"


def test_get_link_not_found():
    service = make_service()
    with pytest.raises(LinkNotFoundError) as info:
        service.get_link("missing")
    assert str(info.value) == "Link not found"


def test_get_link_expired_is_not_cached():
    repo = FakeRepository()
    cacher = DictCacher()
    repo.links["old"] = Link(hash="old", url="https://example.com/o", expires_at=future(-60))
    service = make_service(repo=repo, cacher=cacher)
    with pytest.raises(LinkExpiredError) as info:
        service.get_link("old")
    assert str(info.value) == "Link expired"
    assert "old" not in cacher.data


def test_get_link_naive_expiry():
    repo = FakeRepository()
    repo.links["n"] = Link(
        hash="n", url="https://example.com/n", expires_at=datetime.now() + timedelta(hours=1)
    )
    service = make_service(repo=repo)
    assert service.get_link("n") == "https://example.com/n"


def test_get_link_ignores_cache_failures():
    repo = FakeRepository()
    repo.links["k"] = Link(hash="k", url="https://example.com/k", expires_at=future())
    service = make_service(repo=repo, cacher=DictCacher(fail=True))
    assert service.get_link("k") == "https://example.com/k"


def test_get_link_propagates_unknown_errors():
    service = make_service(repo=FakeRepository(error=RuntimeError("boom")))
    with pytest.raises(RuntimeError):
        service.get_link("any")