"""Tests for GraphQL error normalization."""

from __future__ import annotations

import logging

import pytest
from graphql import GraphQLError

from postboard.core.exceptions import (
    DuplicateEmailError,
    ErrorKind,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundException,
    UnauthenticatedError,
    ValidationFailure,
    error_kind_of,
)
from postboard.features.graphql.error_handler import (
    UNEXPECTED_MESSAGE,
    VALIDATION_MESSAGE,
    log_graphql_errors,
    normalize_error,
)


def _located(original: Exception | None, message: str = "boom") -> GraphQLError:
    return GraphQLError(message, path=["createPost"], original_error=original)


def test_validation_failure_lists_every_field():
    error = normalize_error(
        _located(
            ValidationFailure(
                {
                    "username": ["Username must be at least 3 characters"],
                    "password": ["Password must be at least 6 characters"],
                }
            )
        )
    )

    assert error.message == VALIDATION_MESSAGE
    assert error.extensions == {
        "validationErrors": {
            "username": ["Username must be at least 3 characters"],
            "password": ["Password must be at least 6 characters"],
        }
    }
    assert error.path == ["createPost"]


def test_duplicate_email_uses_validation_shape():
    error = normalize_error(_located(DuplicateEmailError("a@example.com")))

    assert error.message == VALIDATION_MESSAGE
    assert error.extensions == {"validationErrors": {"email": ["Email is already in use"]}}


@pytest.mark.parametrize(
    ("original", "error_type", "details"),
    [
        (NotFoundException(detail="Post not found"), "NotFoundException", "Post not found"),
        (InvalidCredentialsError(), "InvalidCredentialsError", "Invalid credentials"),
        (UnauthenticatedError(), "UnauthenticatedError", "Authentication required"),
        (ForbiddenError(), "ForbiddenError", "Insufficient permissions"),
        (RuntimeError("database is on fire"), "RuntimeError", "database is on fire"),
    ],
)
def test_other_faults_use_unexpected_shape(original, error_type, details):
    error = normalize_error(_located(original))

    assert error.message == UNEXPECTED_MESSAGE
    assert error.extensions == {"errorType": error_type, "details": details}
    assert error.original_error is original


def test_error_without_original_passes_through():
    error = GraphQLError("Cannot query field 'nope' on type 'Query'.")

    assert normalize_error(error) is error


def test_wrapped_graphql_error_passes_through():
    inner = GraphQLError("inner")
    error = _located(inner)

    assert normalize_error(error) is error


def test_error_kind_of_untagged_exception_is_unexpected():
    assert error_kind_of(KeyError("x")) is ErrorKind.UNEXPECTED
    assert error_kind_of(None) is ErrorKind.UNEXPECTED
    assert error_kind_of(DuplicateEmailError("a@b.c")) is ErrorKind.DUPLICATE_EMAIL


def test_expected_faults_logged_as_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="postboard.features.graphql.error_handler"):
        log_graphql_errors([_located(NotFoundException(detail="Post not found"))])

    assert [r.levelno for r in caplog.records] == [logging.WARNING]
    assert caplog.records[0].error_kind == "not_found"


def test_unexpected_faults_logged_as_error_with_traceback(caplog):
    with caplog.at_level(logging.WARNING, logger="postboard.features.graphql.error_handler"):
        log_graphql_errors([_located(RuntimeError("kaboom"))])

    record = caplog.records[0]
    assert record.levelno == logging.ERROR
    assert record.exc_info is not None
    assert record.error_type == "RuntimeError"
