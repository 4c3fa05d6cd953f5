import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine, text

from db_explorer.core.config import Settings
from db_explorer.main import create_app

NUMBERS_ROWS = 125
AVATAR_BYTES = b"hello blob"


# Build one SQLite file for the whole session; the app only ever reads it
@pytest.fixture(scope="session")
def db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("data") / "sample.sqlite"
    engine = create_engine(f"sqlite:///{path}")

    with engine.begin() as conn:
        # AUTOINCREMENT makes SQLite create its internal sqlite_sequence table
        conn.execute(
            text(
                "CREATE TABLE people ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "name TEXT NOT NULL, nickname TEXT, avatar BLOB, active BOOLEAN)"
            )
        )
        conn.execute(
            text(
                "INSERT INTO people (name, nickname, avatar, active) "
                "VALUES (:name, :nickname, :avatar, :active)"
            ),
            [
                {"name": "Ada", "nickname": None, "avatar": AVATAR_BYTES, "active": 1},
                {"name": "Linus", "nickname": "torvalds", "avatar": None, "active": 0},
            ],
        )

        conn.execute(text("CREATE TABLE numbers (n INTEGER, label TEXT, ratio REAL)"))
        conn.execute(
            text("INSERT INTO numbers VALUES (:n, :label, :ratio)"),
            [
                {"n": i, "label": f"row {i}", "ratio": i / 2}
                for i in range(1, NUMBERS_ROWS + 1)
            ],
        )

        conn.execute(text("CREATE TABLE empty (id INTEGER)"))

        conn.execute(text('CREATE TABLE "order items" (sku TEXT, qty INTEGER)'))
        conn.execute(
            text('INSERT INTO "order items" VALUES (:sku, :qty)'),
            [{"sku": "A-1", "qty": 3}, {"sku": "B-2", "qty": 1}],
        )

        # X'6F6BFF' is "ok" followed by a byte that is not valid UTF-8
        conn.execute(text("CREATE TABLE notes (body TEXT)"))
        conn.execute(text("INSERT INTO notes VALUES (CAST(X'6F6BFF' AS TEXT))"))

    engine.dispose()
    return path


@pytest.fixture
def settings(db_path):
    return Settings(DB_PATH=db_path)


# Fresh app per test so the async engine lives on the test's own event loop
@pytest_asyncio.fixture(scope="function")
async def app(settings):
    application = create_app(settings)
    yield application
    await application.state.explorer.engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def explorer(app):
    return app.state.explorer


# Client
@pytest_asyncio.fixture(scope="function")
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
