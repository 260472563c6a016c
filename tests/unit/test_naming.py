"""Unit tests for document key naming."""

from __future__ import annotations

import pytest

from doc_mapper.core.naming import accessor_name, to_snake_case


class TestToSnakeCase:
    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("createdAt", "created_at"),
            ("name", "name"),
            ("address_line_1", "address_line_1"),
            ("HTTPServerUrl", "http_server_url"),
            ("userID", "user_id"),
            ("_created_at", "created_at"),
            ("__secret", "secret"),
            ("_id", "id"),
        ],
    )
    def test_transform(self, identifier: str, expected: str) -> None:
        assert to_snake_case(identifier) == expected

    def test_idempotent(self) -> None:
        once = to_snake_case("lastLoginAt")
        assert to_snake_case(once) == once


class TestAccessorName:
    def test_strips_leading_underscores(self) -> None:
        assert accessor_name("_email") == "email"
        assert accessor_name("__token") == "token"

    def test_public_unchanged(self) -> None:
        assert accessor_name("createdAt") == "createdAt"
