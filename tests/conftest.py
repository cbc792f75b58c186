"""
Pytest configuration and fixtures for testing.

Provides fixtures for:
- An in-memory stand-in for the asyncpg pool
- HTTP clients bound to the application
- Access tokens for authenticated page requests
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

import pytest
from httpx import AsyncClient, ASGITransport

# Set test environment variables before importing app
os.environ["DATABASE_URL"] = ""
os.environ["JWT_SECRET"] = "test-secret-key-do-not-use-in-production"
os.environ["ANALYSIS_DELAY_SECONDS"] = "0"

from levelup.app import app
from levelup.auth import create_access_token
from levelup.database import set_db_pool


class FakeConnection:
    """
    Records queries and answers them from queued results.

    Each of ``fetch_results``, ``fetchrow_results`` and ``fetchval_results``
    is consumed in order; an empty queue answers [] / None. Setting
    ``error`` makes every query raise it.
    """

    def __init__(self):
        self.fetch_results: List = []
        self.fetchrow_results: List = []
        self.fetchval_results: List = []
        self.error: Optional[BaseException] = None
        self.calls: List = []

    def _record(self, method: str, query: str, args):
        self.calls.append((method, " ".join(query.split()), args))
        if self.error is not None:
            raise self.error

    async def fetch(self, query, *args):
        self._record("fetch", query, args)
        return self.fetch_results.pop(0) if self.fetch_results else []

    async def fetchrow(self, query, *args):
        self._record("fetchrow", query, args)
        return self.fetchrow_results.pop(0) if self.fetchrow_results else None

    async def fetchval(self, query, *args):
        self._record("fetchval", query, args)
        return self.fetchval_results.pop(0) if self.fetchval_results else None

    async def execute(self, query, *args):
        self._record("execute", query, args)
        return "OK"

    @asynccontextmanager
    async def transaction(self):
        yield

    def queries(self, method: Optional[str] = None) -> List[str]:
        return [query for m, query, _ in self.calls if method is None or m == method]


class FakePool:
    """Pool handing out a single FakeConnection."""

    def __init__(self):
        self.conn = FakeConnection()

    @asynccontextmanager
    async def acquire(self):
        yield self.conn

    async def close(self):
        pass


@pytest.fixture
def fake_pool():
    """Install a fake database pool for the duration of a test."""
    pool = FakePool()
    set_db_pool(pool)
    yield pool
    set_db_pool(None)


@pytest.fixture
def db_conn(fake_pool) -> FakeConnection:
    return fake_pool.conn


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for the application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def wrestler_id() -> str:
    return "7b0d7e4e-3c1a-4d4b-9a59-2f0c6f1e8a11"


@pytest.fixture
def wrestler_token(wrestler_id) -> str:
    return create_access_token(wrestler_id, "wrestler")
