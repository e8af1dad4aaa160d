"""
Vidly Backend — /api/rentals Endpoint Tests
============================================

What:  Rental creation end to end: auth, id shape, existence checks, the
       stock rule, snapshots and the stock decrement.
"""

import pytest

from app.identifiers import new_object_id
from app.models.customer import Customer
from app.models.genre import Genre
from app.models.movie import Movie
from app.models.rental import Rental


@pytest.fixture
def rental_world(seed):
    """Seeds one customer and one movie with the given stock."""
    async def _build(stock: int = 2):
        genre, = await seed(Genre(name="Comedy"))
        customer, movie = await seed(
            Customer(name="Jane Doe", phone="12345", is_gold=True),
            Movie(
                title="Airplane!",
                genre={"_id": genre.id, "name": genre.name},
                number_in_stock=stock,
                daily_rental_rate=2.0,
            ),
        )
        return customer, movie

    return _build


class TestCreateRental:

    @pytest.mark.asyncio
    async def test_returns_401_without_token(self, test_client):
        res = await test_client.post(
            "/api/rentals",
            json={"customerId": new_object_id(), "movieId": new_object_id()},
        )

        assert res.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"movieId": "REPLACE"},
            {"customerId": "REPLACE"},
            {"customerId": "", "movieId": "REPLACE"},
            {"customerId": "REPLACE", "movieId": "1"},
        ],
    )
    async def test_returns_400_for_missing_or_malformed_ids(
        self, test_client, user_token, payload
    ):
        body = {k: (new_object_id() if v == "REPLACE" else v) for k, v in payload.items()}

        res = await test_client.post(
            "/api/rentals", json=body, headers={"x-auth-token": user_token}
        )

        assert res.status_code == 400

    @pytest.mark.asyncio
    async def test_returns_400_for_unknown_customer(self, test_client, user_token, rental_world):
        _, movie = await rental_world()

        res = await test_client.post(
            "/api/rentals",
            json={"customerId": new_object_id(), "movieId": movie.id},
            headers={"x-auth-token": user_token},
        )

        assert res.status_code == 400
        assert res.json()["message"] == "Invalid customer."

    @pytest.mark.asyncio
    async def test_returns_400_for_unknown_movie(self, test_client, user_token, rental_world):
        customer, _ = await rental_world()

        res = await test_client.post(
            "/api/rentals",
            json={"customerId": customer.id, "movieId": new_object_id()},
            headers={"x-auth-token": user_token},
        )

        assert res.status_code == 400
        assert res.json()["message"] == "Invalid movie."

    @pytest.mark.asyncio
    async def test_out_of_stock_returns_400_and_changes_nothing(
        self, test_client, user_token, rental_world, fetch
    ):
        customer, movie = await rental_world(stock=0)

        res = await test_client.post(
            "/api/rentals",
            json={"customerId": customer.id, "movieId": movie.id},
            headers={"x-auth-token": user_token},
        )

        assert res.status_code == 400
        assert res.json()["message"] == "Movie not in stock."
        assert res.json()["error"] == "business_rule_violation"
        assert (await fetch(Movie, movie.id)).number_in_stock == 0
        assert (await test_client.get("/api/rentals")).json() == []

    @pytest.mark.asyncio
    async def test_creates_rental_and_decrements_stock(
        self, test_client, user_token, rental_world, fetch
    ):
        customer, movie = await rental_world(stock=2)

        res = await test_client.post(
            "/api/rentals",
            json={"customerId": customer.id, "movieId": movie.id},
            headers={"x-auth-token": user_token},
        )

        assert res.status_code == 200
        body = res.json()
        assert body["customer"] == {
            "_id": customer.id,
            "name": "Jane Doe",
            "phone": "12345",
            "isGold": True,
        }
        assert body["movie"] == {"_id": movie.id, "title": "Airplane!", "dailyRentalRate": 2.0}
        assert body["dateOut"]
        assert body["dateReturned"] is None
        assert body["rentalFee"] is None
        assert (await fetch(Movie, movie.id)).number_in_stock == 1
        assert await fetch(Rental, body["_id"]) is not None

    @pytest.mark.asyncio
    async def test_last_copy_can_be_rented_once(
        self, test_client, user_token, rental_world, fetch
    ):
        customer, movie = await rental_world(stock=1)
        payload = {"customerId": customer.id, "movieId": movie.id}
        headers = {"x-auth-token": user_token}

        first = await test_client.post("/api/rentals", json=payload, headers=headers)
        second = await test_client.post("/api/rentals", json=payload, headers=headers)

        assert first.status_code == 200
        assert second.status_code == 400
        assert (await fetch(Movie, movie.id)).number_in_stock == 0

    @pytest.mark.asyncio
    async def test_negative_stock_is_treated_as_out_of_stock(
        self, test_client, user_token, rental_world, fetch
    ):
        customer, movie = await rental_world(stock=-1)

        res = await test_client.post(
            "/api/rentals",
            json={"customerId": customer.id, "movieId": movie.id},
            headers={"x-auth-token": user_token},
        )

        assert res.status_code == 400
        assert res.json()["message"] == "Movie not in stock."
        assert (await fetch(Movie, movie.id)).number_in_stock == -1


class TestReadRentals:

    @pytest.mark.asyncio
    async def test_get_by_id_and_list(self, test_client, user_token, rental_world):
        customer, movie = await rental_world()
        created = (await test_client.post(
            "/api/rentals",
            json={"customerId": customer.id, "movieId": movie.id},
            headers={"x-auth-token": user_token},
        )).json()

        detail = await test_client.get(f"/api/rentals/{created['_id']}")
        listing = await test_client.get("/api/rentals")

        assert detail.status_code == 200
        assert detail.json()["_id"] == created["_id"]
        assert [r["_id"] for r in listing.json()] == [created["_id"]]

    @pytest.mark.asyncio
    async def test_snapshot_survives_customer_edit(
        self, test_client, user_token, rental_world
    ):
        customer, movie = await rental_world()
        created = (await test_client.post(
            "/api/rentals",
            json={"customerId": customer.id, "movieId": movie.id},
            headers={"x-auth-token": user_token},
        )).json()

        await test_client.put(
            f"/api/customers/{customer.id}",
            json={"name": "Someone Else", "phone": "99999"},
            headers={"x-auth-token": user_token},
        )
        res = await test_client.get(f"/api/rentals/{created['_id']}")

        assert res.json()["customer"]["name"] == "Jane Doe"

    @pytest.mark.asyncio
    async def test_malformed_id_returns_404(self, test_client):
        res = await test_client.get("/api/rentals/123")

        assert res.status_code == 404

    @pytest.mark.asyncio
    async def test_create_then_get_returns_same_document(
        self, test_client, user_token, rental_world
    ):
        customer, movie = await rental_world()
        created = (await test_client.post(
            "/api/rentals",
            json={"customerId": customer.id, "movieId": movie.id},
            headers={"x-auth-token": user_token},
        )).json()

        res = await test_client.get(f"/api/rentals/{created['_id']}")

        assert res.status_code == 200
        assert res.json() == created
        assert res.json()["dateOut"].endswith("Z")
