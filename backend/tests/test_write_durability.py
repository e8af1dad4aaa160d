"""
Vidly Backend — Write Durability Tests
=======================================

What:  A successful write is committed before its response is sent.
Why:   A client that gets 200 may immediately read the entity back from
       another connection; it must see the write.
How:   The app runs against a file-backed SQLite database and is driven
       through raw ASGI. The `send` callable reads the database from a
       separate session when the final body chunk goes out, i.e. at the
       exact moment the client would receive the response.
"""

import asyncio
import json

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.database import Base, get_db_session
from app.main import create_app
from app.models.customer import Customer
from app.models.genre import Genre
from app.models.movie import Movie
from app.models.rental import Rental


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """
    Sessions on a real file database.

    Each session gets its own connection, so uncommitted writes are
    invisible to other sessions, unlike the shared in-memory connection
    the other suites use.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'vidly.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def file_app(file_session_factory):
    app = create_app()

    async def override_get_db_session():
        async with file_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    return app


async def call_app(app, method, path, payload, headers, on_response):
    """
    Sends one request through the ASGI app.

    `on_response` is awaited from inside `send` when the last body chunk is
    emitted; its return value is handed back together with the status.
    """
    body = json.dumps(payload).encode()
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "root_path": "",
        "headers": [
            (b"host", b"test"),
            (b"content-type", b"application/json"),
            (b"content-length", str(len(body)).encode()),
        ] + [(k.encode(), v.encode()) for k, v in headers.items()],
        "client": ("127.0.0.1", 50000),
        "server": ("test", 80),
    }
    sent_body = False
    finished = asyncio.Event()
    result = {}

    async def receive():
        nonlocal sent_body
        if not sent_body:
            sent_body = True
            return {"type": "http.request", "body": body, "more_body": False}
        await finished.wait()
        return {"type": "http.disconnect"}

    async def send(message):
        if message["type"] == "http.response.start":
            result["status"] = message["status"]
        elif message["type"] == "http.response.body" and not message.get("more_body", False):
            result["observed"] = await on_response()
            finished.set()

    await app(scope, receive, send)
    return result


class TestWritesVisibleAtResponse:

    @pytest.mark.asyncio
    async def test_rental_and_stock_committed_before_response(
        self, file_app, file_session_factory, user_token
    ):
        async with file_session_factory() as session:
            genre = Genre(name="Comedy")
            customer = Customer(name="Jane Doe", phone="12345")
            session.add_all([genre, customer])
            await session.flush()
            movie = Movie(
                title="Airplane!",
                genre={"_id": genre.id, "name": genre.name},
                number_in_stock=1,
                daily_rental_rate=2.0,
            )
            session.add(movie)
            await session.commit()

        async def read_state():
            async with file_session_factory() as reader:
                stock = (await reader.get(Movie, movie.id)).number_in_stock
                rentals = await reader.scalar(select(func.count()).select_from(Rental))
                return {"stock": stock, "rentals": rentals}

        result = await call_app(
            file_app,
            "POST",
            "/api/rentals",
            {"customerId": customer.id, "movieId": movie.id},
            {"x-auth-token": user_token},
            read_state,
        )

        assert result["status"] == 200
        assert result["observed"] == {"stock": 0, "rentals": 1}

    @pytest.mark.asyncio
    async def test_created_genre_committed_before_response(
        self, file_app, file_session_factory, user_token
    ):
        async def count_genres():
            async with file_session_factory() as reader:
                return await reader.scalar(select(func.count()).select_from(Genre))

        result = await call_app(
            file_app,
            "POST",
            "/api/genres",
            {"name": "Comedy"},
            {"x-auth-token": user_token},
            count_genres,
        )

        assert result["status"] == 200
        assert result["observed"] == 1

    @pytest.mark.asyncio
    async def test_delete_committed_before_response(
        self, file_app, file_session_factory, admin_token
    ):
        async with file_session_factory() as session:
            genre = Genre(name="Comedy")
            session.add(genre)
            await session.commit()

        async def find_genre():
            async with file_session_factory() as reader:
                return await reader.get(Genre, genre.id)

        result = await call_app(
            file_app,
            "DELETE",
            f"/api/genres/{genre.id}",
            {},
            {"x-auth-token": admin_token},
            find_genre,
        )

        assert result["status"] == 200
        assert result["observed"] is None
