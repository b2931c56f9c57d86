"""Tests for the handler registry and schema composition."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from postboard.core.exceptions import ForbiddenError, UnauthenticatedError
from postboard.features.graphql.registry import (
    AUTHENTICATED,
    HandlerRegistry,
    HandlerSpec,
    RegistryError,
    build_registry,
)
from postboard.features.graphql.schema import build_schema, root_fields
from postboard.features.users.schemas import TokenClaims


def _claims(role: str) -> TokenClaims:
    return TokenClaims(
        sub=uuid4(),
        email="someone@example.com",
        role=role,
        exp=datetime(2100, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def registry() -> HandlerRegistry:
    return HandlerRegistry(
        [],
        [
            HandlerSpec("Query", "open", "demo"),
            HandlerSpec("Query", "members", "demo", AUTHENTICATED),
            HandlerSpec("Mutation", "purge", "demo", frozenset({"Admin"})),
        ],
    )


def test_public_field_allows_anonymous(registry):
    registry.authorize("Query", "open", None)


def test_protected_field_requires_user(registry):
    with pytest.raises(UnauthenticatedError):
        registry.authorize("Query", "members", None)


def test_protected_field_allows_listed_role(registry):
    registry.authorize("Query", "members", _claims("User"))
    registry.authorize("Mutation", "purge", _claims("Admin"))


def test_role_outside_required_set_is_forbidden(registry):
    with pytest.raises(ForbiddenError):
        registry.authorize("Mutation", "purge", _claims("User"))


def test_unregistered_field_is_forbidden(registry):
    with pytest.raises(ForbiddenError):
        registry.authorize("Query", "secret", _claims("Admin"))


def test_duplicate_registration_rejected():
    with pytest.raises(RegistryError, match="more than once"):
        HandlerRegistry(
            [],
            [HandlerSpec("Query", "posts", "a"), HandlerSpec("Query", "posts", "b")],
        )


def test_verify_reports_missing_and_unknown_fields(registry):
    with pytest.raises(RegistryError) as exc_info:
        registry.verify({"Query": ["open", "members", "extra"], "Mutation": []})

    message = str(exc_info.value)
    assert "Query.extra" in message
    assert "Mutation.purge" in message


def test_verify_ignores_introspection_fields(registry):
    registry.verify(
        {"Query": ["open", "members", "__typename"], "Mutation": ["purge"]}
    )


def test_every_schema_root_field_is_registered():
    registry = build_registry()
    fields = root_fields(build_schema(registry))

    assert sorted(fields["Query"]) == ["me", "posts", "userPosts", "users"]
    assert sorted(fields["Mutation"]) == [
        "createPost",
        "deletePost",
        "login",
        "register",
        "updatePost",
    ]
    assert len(registry) == 9


@pytest.mark.parametrize(
    ("operation", "field", "public"),
    [
        ("Mutation", "register", True),
        ("Mutation", "login", True),
        ("Query", "posts", True),
        ("Query", "userPosts", True),
        ("Query", "users", True),
        ("Mutation", "createPost", False),
        ("Mutation", "updatePost", False),
        ("Mutation", "deletePost", False),
        ("Query", "me", False),
    ],
)
def test_default_access_rules(operation, field, public):
    spec = build_registry().lookup(operation, field)

    assert spec is not None
    assert spec.is_public is public


def test_create_post_is_restricted_to_user_role():
    registry = build_registry()

    registry.authorize("Mutation", "createPost", _claims("User"))
    with pytest.raises(ForbiddenError):
        registry.authorize("Mutation", "createPost", _claims("Admin"))
