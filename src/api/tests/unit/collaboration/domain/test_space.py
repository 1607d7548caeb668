"""Unit tests for collaboration domain objects."""

from uuid import uuid4

import pytest

from collaboration.domain.aggregates import Identity, Space
from collaboration.domain.value_objects import IdentityId, SpaceId


class TestValueObjects:
    """Tests for SpaceId and IdentityId."""

    def test_round_trips_uuid_string(self):
        raw = str(uuid4())
        assert str(IdentityId.from_string(raw)) == raw

    def test_rejects_non_uuid(self):
        with pytest.raises(ValueError, match="Invalid SpaceId"):
            SpaceId.from_string("space-1")


class TestSpace:
    """Tests for Space ownership."""

    def test_is_owned_by_owner(self):
        owner = uuid4()
        space = Space(id=SpaceId(value=uuid4()), owner_id=IdentityId(value=owner))

        assert space.is_owned_by(owner) is True
        assert space.is_owned_by(uuid4()) is False


class TestIdentity:
    """Tests for Identity equality."""

    def test_equality_is_by_id(self):
        identity_id = IdentityId(value=uuid4())
        a = Identity(id=identity_id, username="a", provider_type="kc")
        b = Identity(id=identity_id, username="renamed", provider_type="kc")

        assert a == b
        assert len({a, b}) == 1
