"""
Vidly Backend — Security, Identifier and Health Tests
======================================================

What:  Token signing/verification, password hashing, ObjectId shape checks,
       UTC timestamp columns,
       and the ambient endpoints (health, request id header).
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.config import settings
from app.exceptions import InvalidTokenError
from app.identifiers import is_valid_object_id, new_object_id
from app.models.types import UTCDateTime
from app.security import (
    decode_auth_token,
    generate_auth_token,
    hash_password,
    verify_password,
)


class TestAuthToken:

    def test_round_trips_identity(self):
        user_id = new_object_id()

        claims = decode_auth_token(
            generate_auth_token(user_id, "Jane Doe", "jane@example.com", True)
        )

        assert claims.id == user_id
        assert claims.name == "Jane Doe"
        assert claims.is_admin is True

    def test_payload_uses_wire_names(self):
        token = generate_auth_token(new_object_id(), "Jane Doe", "jane@example.com", False)

        payload = jwt.decode(token, settings.jwt_private_key, algorithms=[settings.jwt_algorithm])

        assert set(payload) == {"_id", "name", "email", "isAdmin"}

    def test_rejects_garbage(self):
        with pytest.raises(InvalidTokenError):
            decode_auth_token("a")

    def test_rejects_token_signed_with_other_key(self):
        token = jwt.encode(
            {"_id": new_object_id(), "isAdmin": True},
            "some-other-signing-key-0123456789abcdef",
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            decode_auth_token(token)

    def test_rejects_payload_without_id(self):
        token = jwt.encode(
            {"name": "x"}, settings.jwt_private_key, algorithm=settings.jwt_algorithm
        )

        with pytest.raises(InvalidTokenError):
            decode_auth_token(token)


class TestPasswords:

    def test_hash_verifies_and_is_salted(self):
        first, second = hash_password("secret1"), hash_password("secret1")

        assert first != second
        assert verify_password("secret1", first)
        assert not verify_password("secret2", first)

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False


class TestObjectIds:

    def test_new_ids_are_valid_and_unique(self):
        ids = {new_object_id() for _ in range(100)}

        assert len(ids) == 100
        assert all(is_valid_object_id(i) for i in ids)

    @pytest.mark.parametrize(
        "value",
        ["", "1", "zzzzzzzzzzzzzzzzzzzzzzzz", "5f8d0d55b54764421b7156c", "abcdefghijkl", None, 123],
    )
    def test_rejects_malformed(self, value):
        assert is_valid_object_id(value) is False


class TestUTCDateTime:

    def test_naive_value_loads_as_utc(self):
        loaded = UTCDateTime().process_result_value(datetime(2026, 1, 2, 3, 4, 5, 6), None)

        assert loaded == datetime(2026, 1, 2, 3, 4, 5, 6, tzinfo=timezone.utc)

    def test_offset_value_is_stored_as_utc(self):
        plus_two = timezone(timedelta(hours=2))

        stored = UTCDateTime().process_bind_param(datetime(2026, 1, 2, 5, 0, tzinfo=plus_two), None)

        assert stored == datetime(2026, 1, 2, 3, 0, tzinfo=timezone.utc)
        assert stored.utcoffset() == timedelta(0)

    def test_none_passes_through(self):
        assert UTCDateTime().process_result_value(None, None) is None


class TestAmbientEndpoints:

    @pytest.mark.asyncio
    async def test_responses_carry_request_id(self, test_client):
        res = await test_client.get("/api/genres")

        assert res.headers.get("X-Request-ID")

    @pytest.mark.asyncio
    async def test_error_body_echoes_request_id(self, test_client):
        res = await test_client.get("/api/genres/1")

        assert res.json()["request_id"] == res.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        res = await test_client.get("/health")

        assert res.status_code == 200
        body = res.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
