"""Pytest configuration and fixtures."""

import pytest

from config import Config
from database import close_db_pool, init_db_pool, run_migrations
from database.repositories import ParticipantRepository, PrizeRepository, RaffleRepository, UserRepository
from services.access import Actor
from services.async_runner import run_coroutine_sync, start_background_loop, stop_background_loop
from services.broadcast import set_publisher
from utils.dates import expires_in

ADMIN_EMAIL = "admin@example.com"


def make_config(database_path: str) -> Config:
    return Config(
        environment="development",
        debug=False,
        web_host="127.0.0.1",
        web_port=5000,
        secret_key="test_secret_key",
        app_url="http://localhost:5000",
        database_path=database_path,
        log_folder="logs",
        db_pool_size=2,
        db_busy_timeout=5000,
        cache_ttl_history=60,
        slow_request_threshold=5.0,
    )


@pytest.fixture(autouse=True)
def admin_allowlist(monkeypatch):
    """Admin checks read the allowlist from the environment."""
    monkeypatch.setenv("ADMIN_EMAILS", ADMIN_EMAIL)


@pytest.fixture
def published():
    """Capture draw events instead of sending them over Socket.IO."""
    events = []
    set_publisher(lambda channel, event, envelope: events.append((channel, event, envelope)))
    yield events
    set_publisher(None)


@pytest.fixture
async def db(tmp_path):
    """Fresh migrated database for async tests."""
    pool = await init_db_pool(str(tmp_path / "test.sqlite"), pool_size=2, busy_timeout_ms=5000)
    await run_migrations(pool)
    yield pool
    await close_db_pool()


async def create_user(email: str, name: str = "Tester") -> Actor:
    user = await UserRepository.create(email=email, password_hash="x", name=name)
    return Actor(id=user.id, email=user.email, name=user.name)


@pytest.fixture
async def admin(db):
    return await create_user(ADMIN_EMAIL, "Admin")


@pytest.fixture
async def participant(db):
    return await create_user("guest@example.com", "Guest")


async def create_active_raffle(admin_actor: Actor, name: str = "Meetup", minutes: int = 60):
    raffle = await RaffleRepository.create(name=name, created_by=admin_actor.id)
    await RaffleRepository.activate(raffle.id, expires_in(minutes))
    return await RaffleRepository.get(raffle.id)


async def add_prizes(raffle_id: str, *names: str):
    return [await PrizeRepository.create(raffle_id, name, None) for name in names]


async def join(raffle_id: str, actor: Actor):
    return await ParticipantRepository.create(raffle_id, actor.id)


@pytest.fixture
def app(tmp_path):
    """Flask app backed by a background event loop, like production."""
    from web import create_app

    config = make_config(str(tmp_path / "web.sqlite"))
    start_background_loop()
    pool = run_coroutine_sync(init_db_pool(config.database_path, config.db_pool_size, config.db_busy_timeout))
    run_coroutine_sync(run_migrations(pool))

    flask_app = create_app(config, testing=True)
    yield flask_app

    set_publisher(None)
    run_coroutine_sync(close_db_pool())
    stop_background_loop()


@pytest.fixture
def client(app):
    return app.test_client()


def sign_up(client, email: str, name: str = "Tester", password: str = "secret123"):
    return client.post("/signup", data={"email": email, "password": password, "name": name})


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    sign_up(client, ADMIN_EMAIL, "Admin")
    return client


@pytest.fixture
def guest_client(app):
    client = app.test_client()
    sign_up(client, "guest@example.com", "Guest")
    return client


def run_sync(coro):
    """Run a coroutine on the app's background loop."""
    return run_coroutine_sync(coro)
