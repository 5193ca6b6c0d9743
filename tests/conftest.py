import random
from copy import deepcopy
from dataclasses import replace
from datetime import datetime

import pytest

from attendance_seeder.config import SeedSettings
from attendance_seeder.context import SeedContext
from attendance_seeder.errors import StoreError

NOW = datetime(2025, 3, 10, 12, 0).astimezone()
SERVER_TS = datetime(2025, 3, 10, 12, 0, 5).astimezone()


class FakeBatch:
    def __init__(self, store):
        self._store = store
        self._writes = []

    def set(self, collection, doc_id, data, *, merge=True):
        self._writes.append((collection, doc_id, data, merge))

    def commit(self):
        if self._store.fail_commits_after is not None and len(self._store.commits) >= self._store.fail_commits_after:
            raise StoreError("commit rechazado")
        for collection, doc_id, data, merge in self._writes:
            self._store.set(collection, doc_id, data, merge=merge)
        self._store.commits.append(len(self._writes))
        return len(self._writes)

    def __len__(self):
        return len(self._writes)


class FakeStore:
    """In-memory stand-in for FirestoreStore."""

    def __init__(self, data=None):
        self.data = deepcopy(data or {})
        self.commits = []
        self.writes = 0
        self.fail_commits_after = None

    def all(self, collection):
        return [(doc_id, dict(doc)) for doc_id, doc in self.data.get(collection, {}).items()]

    def get(self, collection, doc_id):
        doc = self.data.get(collection, {}).get(doc_id)
        return dict(doc) if doc is not None else None

    def set(self, collection, doc_id, data, *, merge=True):
        docs = self.data.setdefault(collection, {})
        if merge and doc_id in docs:
            docs[doc_id].update(deepcopy(data))
        else:
            docs[doc_id] = deepcopy(data)
        self.writes += 1

    def batch(self):
        return FakeBatch(self)

    def server_timestamp(self):
        return SERVER_TS


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def settings():
    return SeedSettings(users_count=5)


@pytest.fixture
def make_ctx(store, settings):
    def _make(st=None, seed=1234, **overrides):
        s = replace(settings, **overrides)
        return SeedContext(store=st or store, settings=s, rng=random.Random(seed), clock=lambda: NOW)

    return _make


@pytest.fixture
def ctx(make_ctx):
    return make_ctx()
