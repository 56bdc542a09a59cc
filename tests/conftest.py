"""Shared test fixtures for SkillPath assessment tests."""

import asyncio
import copy
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument


# ─────────────────────────────────────────────────────────────────
# In-memory collection
# ─────────────────────────────────────────────────────────────────


def _matches(doc, query):
    for key, expected in query.items():
        actual = doc.get(key)
        if isinstance(expected, dict):
            if "$ne" in expected and actual == expected["$ne"]:
                return False
            if "$in" in expected and actual not in expected["$in"]:
                return False
            if "$all" in expected and not all(v in (actual or []) for v in expected["$all"]):
                return False
        elif actual != expected:
            return False
    return True


def _apply_update(doc, update):
    doc.update(copy.deepcopy(update.get("$set", {})))
    for field, value in update.get("$addToSet", {}).items():
        values = doc.setdefault(field, [])
        if value not in values:
            values.append(value)
    for field, value in update.get("$pull", {}).items():
        doc[field] = [v for v in doc.get(field, []) if v != value]


class FakeCursor:
    """Motor-style cursor: sync chaining, async to_list."""

    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=1):
        self._docs = sorted(self._docs, key=lambda d: d.get(key), reverse=direction == -1)
        return self

    def limit(self, count):
        self._docs = self._docs[:count]
        return self

    async def to_list(self, length=None):
        return [copy.deepcopy(d) for d in self._docs[:length]]


class FakeCollection:
    """
    Just enough of an AsyncIOMotorCollection for lifecycle scenarios.

    Each operation yields to the event loop before touching the data, so
    concurrent callers interleave between operations (never within one).
    """

    def __init__(self):
        self.docs = []
        self.indexes = []

    async def insert_one(self, doc):
        await asyncio.sleep(0)
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        doc["_id"] = stored["_id"]
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def find_one(self, query):
        await asyncio.sleep(0)
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query=None):
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    async def update_one(self, query, update):
        await asyncio.sleep(0)
        for doc in self.docs:
            if _matches(doc, query):
                _apply_update(doc, update)
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def update_many(self, query, update):
        await asyncio.sleep(0)
        matched = [d for d in self.docs if _matches(d, query)]
        for doc in matched:
            _apply_update(doc, update)
        return SimpleNamespace(matched_count=len(matched), modified_count=len(matched))

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        await asyncio.sleep(0)
        for doc in self.docs:
            if _matches(doc, query):
                before = copy.deepcopy(doc)
                _apply_update(doc, update)
                return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def delete_one(self, query):
        await asyncio.sleep(0)
        for doc in self.docs:
            if _matches(doc, query):
                self.docs.remove(doc)
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))
        return kwargs.get("name", "index")


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


# ─────────────────────────────────────────────────────────────────
# Database fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine).
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


# ─────────────────────────────────────────────────────────────────
# Identifiers
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def sample_skill_id():
    return str(ObjectId())


# ─────────────────────────────────────────────────────────────────
# Assessment payloads
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def make_module():
    def _make(index=1, **overrides):
        module = {
            "id": f"m{index}",
            "title": f"Module {index}",
            "type": "article",
            "duration": "10 min",
        }
        module.update(overrides)
        return module
    return _make


@pytest.fixture
def make_assessment(make_module):
    def _make(count=3, **overrides):
        assessment = {
            "level": 3,
            "confidence": 0.7,
            "reasoning": "Solid fundamentals, limited practice.",
            "learningModules": [make_module(i + 1) for i in range(count)],
        }
        assessment.update(overrides)
        return assessment
    return _make


@pytest.fixture
def skill_levels():
    return [
        {
            "level": level,
            "nameEn": f"Level {level}",
            "nameAr": f"المستوى {level}",
            "descriptionEn": f"Description {level}",
            "descriptionAr": f"الوصف {level}",
            "resources": [{"url": f"https://learn.example.com/level-{level}"}],
        }
        for level in range(1, 6)
    ]


@pytest.fixture
def sample_skill_doc(sample_skill_id, skill_levels):
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(sample_skill_id),
        "nameEn": "Communication",
        "nameAr": "التواصل",
        "category": "soft",
        "definitionEn": "Expressing ideas clearly.",
        "definitionAr": "التعبير عن الأفكار بوضوح.",
        "levels": skill_levels,
        "createdAt": now,
        "updatedAt": now,
    }
