"""Shared fixtures: temp user file, fast hashing, stub generator."""

import pytest
from fastapi.testclient import TestClient

from authrelay.auth import PasswordHasher
from authrelay.config import Settings
from authrelay.dispatcher import Dispatcher
from authrelay.main import create_app
from authrelay.sessions import TokenService
from authrelay.store import JsonCredentialStore

TEST_SECRET = "test-secret-key-with-enough-length-123456"


@pytest.fixture
def users_path(tmp_path):
    return tmp_path / "data" / "users.json"


@pytest.fixture
def settings(users_path):
    return Settings(
        jwt_secret=TEST_SECRET,
        users_path=users_path,
        hash_rounds=1000,
        groq_api_key="test-key",
    )


@pytest.fixture
def store(users_path):
    s = JsonCredentialStore(users_path)
    s.init()
    return s


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=1000)


@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET)


@pytest.fixture
def generator():
    """Stub generator that records its calls."""
    calls = []

    def generate(system_prompt: str, message: str) -> str:
        calls.append((system_prompt, message))
        return f"echo: {message}"

    generate.calls = calls
    return generate


@pytest.fixture
def dispatcher(store, hasher, tokens, generator):
    return Dispatcher(store=store, hasher=hasher, tokens=tokens, generate=generator)


@pytest.fixture
def make_client(settings, generator):
    """Factory so tests can swap in a failing generator."""
    clients = []

    def _factory(generate=None) -> TestClient:
        client = TestClient(create_app(settings, generate=generate or generator))
        client.__enter__()
        clients.append(client)
        return client

    yield _factory
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
