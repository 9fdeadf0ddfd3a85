"""Tests for JsonCodec and endpoint descriptors."""

import json
from dataclasses import FrozenInstanceError, dataclass
from datetime import datetime, timezone

import pytest
from pydantic import BaseModel

from apiservice import DecodingFailedError, EncodingFailedError, Endpoint, JsonCodec, Route


class Profile(BaseModel):
    userId: int
    display_name: str
    updated_at: datetime


@dataclass
class Tag:
    label: str


class TestJsonCodec:
    """Tests for JsonCodec."""

    def setup_method(self):
        self.codec = JsonCodec()

    def test_encode_model_and_datetime(self):
        stamp = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
        data = self.codec.encode({"when": stamp, "tags": [Tag("a")]})
        payload = json.loads(data)
        assert payload["tags"] == [{"label": "a"}]
        assert datetime.fromisoformat(payload["when"].replace("Z", "+00:00")) == stamp

    def test_encode_cycle_fails(self):
        items: list = []
        items.append(items)
        with pytest.raises(EncodingFailedError) as exc_info:
            self.codec.encode(items)
        assert isinstance(exc_info.value.cause, ValueError)

    def test_decode_keeps_key_names(self):
        profile = self.codec.decode(
            b'{"userId": 1, "display_name": "Ann", "updated_at": "2024-03-04T05:06:07.890123+00:00"}',
            Profile,
        )
        assert profile.userId == 1
        assert profile.display_name == "Ann"
        assert profile.updated_at.microsecond == 890123

    def test_decode_generic_types(self):
        assert self.codec.decode(b"[1, 2, 3]", list[int]) == [1, 2, 3]
        assert self.codec.decode(b'[{"label": "x"}]', list[Tag]) == [Tag("x")]

    def test_decode_wrong_shape(self):
        with pytest.raises(DecodingFailedError):
            self.codec.decode(b'{"userId": "not a number"}', Profile)

    def test_decode_rejects_string_for_int(self):
        with pytest.raises(DecodingFailedError):
            self.codec.decode(
                b'{"userId": "1", "display_name": "Ann", "updated_at": "2024-03-04T05:06:07.890Z"}',
                Profile,
            )

    def test_decode_rejects_unix_timestamp(self):
        with pytest.raises(DecodingFailedError):
            self.codec.decode(b'{"userId": 1, "display_name": "Ann", "updated_at": 1714566645}', Profile)

    def test_decode_accepts_iso8601_with_fraction(self):
        profile = self.codec.decode(
            b'{"userId": 1, "display_name": "Ann", "updated_at": "2024-05-01T12:30:45.123Z"}',
            Profile,
        )
        assert profile.updated_at == datetime(2024, 5, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)

    def test_decode_malformed(self):
        with pytest.raises(DecodingFailedError):
            self.codec.decode(b"{", dict)

    def test_parse_any_json(self):
        assert self.codec.parse(b'{"a": [1, null, true]}') == {"a": [1, None, True]}
        assert self.codec.parse(b"42") == 42

    def test_parse_invalid(self):
        with pytest.raises(DecodingFailedError):
            self.codec.parse(b"")


class TestRoute:
    """Tests for Route endpoints."""

    def test_is_endpoint(self):
        assert isinstance(Route("/users"), Endpoint)

    def test_plain_path(self):
        assert Route("/users/{literal}").path() == "/users/{literal}"

    def test_params(self):
        assert Route("/users/{user_id}/posts/{post_id}", user_id=4, post_id="x y").path() == (
            "/users/4/posts/x%20y"
        )

    def test_equality(self):
        assert Route("/users/{id}", id=1) == Route("/users/{id}", id=1)
        assert Route("/users/{id}", id=1) != Route("/users/{id}", id=2)

    def test_hashable(self):
        routes = {Route("/users/{id}", id=1), Route("/users/{id}", id=1), Route("/users")}
        assert len(routes) == 2

    def test_frozen(self):
        route = Route("/users/{id}", id=1)
        with pytest.raises(FrozenInstanceError):
            route.template = "/other"  # type: ignore[misc]

    def test_param_order_does_not_matter(self):
        assert Route("/a/{x}/{y}", x=1, y=2) == Route("/a/{x}/{y}", y=2, x=1)
