"""Unit tests for the User and CreateUser models."""

from datetime import date
from uuid import uuid4

import pytest
from pydantic import ValidationError

from roster.domain.model import CreateUser, User
from roster.domain.value import CustomData, UserId


class TestCreateUser:
    """Tests for the creation payload."""

    def test_parses_json_payload(self):
        """Should parse the wire shape, including the ISO birth date."""
        payload = CreateUser.model_validate(
            {
                "name": "Meu nome",
                "email": "teste@teste.com",
                "birth_date": "1977-03-10",
                "custom_data": {"random": 1},
            }
        )

        assert payload.birth_date == date(1977, 3, 10)
        assert payload.custom_data == CustomData(random=1)

    def test_ignores_server_assigned_fields(self):
        """Should drop id and timestamps sent by a client."""
        payload = CreateUser.model_validate(
            {
                "id": str(uuid4()),
                "name": "Meu nome",
                "email": "teste@teste.com",
                "birth_date": "1977-03-10",
                "custom_data": {"random": 1},
                "created_at": "2020-01-01T00:00:00Z",
                "updated_at": None,
            }
        )

        assert "id" not in payload.model_dump()
        assert "created_at" not in payload.model_dump()

    def test_missing_field_rejected(self):
        """Should reject a payload without custom data."""
        with pytest.raises(ValidationError):
            CreateUser.model_validate(
                {"name": "x", "email": "x@example.com", "birth_date": "2000-01-01"}
            )


class TestUser:
    """Tests for the User aggregate."""

    def test_timestamps_default_to_none(self):
        """Should allow users without timestamps, e.g. from an update body."""
        user = User(
            id=UserId(uuid4()),
            email="teste@teste.com",
            name="Meu nome",
            birth_date=date(1977, 3, 10),
            custom_data=CustomData(random=1),
        )

        assert user.created_at is None
        assert user.updated_at is None

    def test_serializes_to_wire_shape(self):
        """Should emit ISO dates and a nested custom_data object."""
        user_id = uuid4()
        user = User(
            id=UserId(user_id),
            email="teste@teste.com",
            name="Meu nome",
            birth_date=date(1977, 3, 10),
            custom_data=CustomData(random=1),
        )

        data = user.model_dump(mode="json")

        assert data == {
            "id": str(user_id),
            "email": "teste@teste.com",
            "name": "Meu nome",
            "birth_date": "1977-03-10",
            "custom_data": {"random": 1},
            "created_at": None,
            "updated_at": None,
        }

    def test_custom_data_is_immutable(self):
        """Should not allow mutating the embedded payload."""
        data = CustomData(random=1)

        with pytest.raises(ValidationError):
            data.random = 2  # type: ignore[misc]
