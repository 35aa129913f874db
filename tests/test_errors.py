"""
Tests for the shared error pipeline.

Covers the error taxonomy, failure normalization and the responder.
Pure functions; no application or network required.
"""

import json

import pytest
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field, ValidationError

from futureself.core.config import Environment
from futureself.infrastructure.document_store import DocumentIdCastError, DuplicateKeyError
from futureself.shared.errors import AppError, ErrorKind
from futureself.shared.errors.normalizer import leaf_field, normalize
from futureself.shared.errors.responder import GENERIC_MESSAGE, respond


class _Inner(BaseModel):
    reflection: str = Field(min_length=5)


class _Sample(BaseModel):
    title: str = Field(max_length=3)
    content: str = Field(min_length=1)
    reflections: list[_Inner]


def _validation_error(**data) -> ValidationError:
    with pytest.raises(ValidationError) as info:
        _Sample.model_validate(data)
    return info.value


def _raised(exc: Exception) -> Exception:
    """Raise and catch so the exception carries a traceback."""
    try:
        raise exc
    except Exception as caught:
        return caught


class _ForeignOperational(Exception):
    """Carries the operational flag without being an AppError."""

    is_operational = True


class _ExplodingUpstream(Exception):
    @property
    def status(self):
        raise RuntimeError("no status here")

    @property
    def message(self):
        raise RuntimeError("no message here")


# ══════════════════════════════════════════════════════════════════════
# Taxonomy
# ══════════════════════════════════════════════════════════════════════


class TestErrorKind:
    @pytest.mark.parametrize(
        "kind, status, code",
        [
            (ErrorKind.VALIDATION, 400, "VALIDATION_ERROR"),
            (ErrorKind.INVALID_ID, 400, "INVALID_ID"),
            (ErrorKind.DUPLICATE, 400, "DUPLICATE_ERROR"),
            (ErrorKind.NOT_FOUND, 404, "NOT_FOUND"),
            (ErrorKind.UNAUTHORIZED, 401, "UNAUTHORIZED"),
            (ErrorKind.FORBIDDEN, 403, "FORBIDDEN"),
            (ErrorKind.AI_SERVICE, 503, "AI_SERVICE_ERROR"),
            (ErrorKind.INTERNAL, 500, "INTERNAL_ERROR"),
        ],
    )
    def test_kind_fixes_status_and_code(self, kind, status, code) -> None:
        assert kind.http_status == status
        assert kind.code == code

    def test_taxonomy_is_closed(self) -> None:
        assert len(ErrorKind) == 8


class TestAppError:
    def test_default_messages(self) -> None:
        assert AppError.not_found().message == "Resource not found"
        assert AppError.unauthorized().message == "Authentication required"
        assert AppError.forbidden().message == (
            "You do not have permission to perform this action"
        )
        assert AppError.ai_service().message == "AI service encountered an error"

    def test_every_app_error_is_operational(self) -> None:
        assert AppError.internal("disk full").is_operational is True

    def test_validation_carries_fields(self) -> None:
        error = AppError.validation("bad", fields={"title": "too long"})
        assert error.kind is ErrorKind.VALIDATION
        assert error.fields == {"title": "too long"}

    def test_ai_service_extracts_provider_details(self) -> None:
        upstream = Exception("quota exceeded")
        upstream.status = 429
        error = AppError.ai_service(original=upstream)
        assert error.provider_status == 429
        assert error.provider_message == "quota exceeded"
        assert error.__cause__ is upstream

    def test_ai_service_reads_status_from_response(self) -> None:
        class _Response:
            status_code = 502

        upstream = Exception("bad gateway")
        upstream.response = _Response()
        assert AppError.ai_service(original=upstream).provider_status == 502

    def test_ai_service_extraction_never_raises(self) -> None:
        error = AppError.ai_service(original=_ExplodingUpstream())
        assert error.provider_status is None
        assert error.kind is ErrorKind.AI_SERVICE

    def test_ai_service_without_original(self) -> None:
        error = AppError.ai_service("down")
        assert error.provider_status is None
        assert error.provider_message is None


# ══════════════════════════════════════════════════════════════════════
# Normalizer
# ══════════════════════════════════════════════════════════════════════


class TestLeafField:
    def test_dotted_path(self) -> None:
        assert leaf_field("reflections.0.reflection") == "reflection"

    def test_tuple_path(self) -> None:
        assert leaf_field(("reflections", 0, "reflection")) == "reflection"

    def test_plain_field(self) -> None:
        assert leaf_field("title") == "title"


class TestNormalize:
    def test_storage_validation_one_entry_per_field(self) -> None:
        failure = _validation_error(
            title="toolong", content="", reflections=[{"reflection": "hi"}]
        )
        result = normalize(failure)
        assert result.status == 400
        assert result.code == "VALIDATION_ERROR"
        assert set(result.fields) == {"title", "content", "reflection"}
        assert len(result.fields) == len(failure.errors())

    def test_summary_is_first_field_message(self) -> None:
        failure = _validation_error(
            title="toolong", content="", reflections=[{"reflection": "hi"}]
        )
        result = normalize(failure)
        assert result.message == next(iter(result.fields.values()))
        assert result.message == failure.errors()[0]["msg"]

    def test_request_validation_error(self) -> None:
        failure = RequestValidationError(
            [{"loc": ("body", "content"), "msg": "Field required", "type": "missing"}]
        )
        result = normalize(failure)
        assert result.code == "VALIDATION_ERROR"
        assert result.fields == {"content": "Field required"}

    def test_cast_failure(self) -> None:
        result = normalize(DocumentIdCastError("not-an-id"))
        assert (result.status, result.code, result.message) == (
            400,
            "INVALID_ID",
            "Invalid ID format",
        )

    def test_duplicate_key(self) -> None:
        result = normalize(DuplicateKeyError("users", {"email": "a@example.com"}))
        assert result.code == "DUPLICATE_ERROR"
        assert result.message == "A record with this email already exists"
        assert result.fields == {"email": "This email is already in use"}

    def test_app_error_passes_through(self) -> None:
        result = normalize(AppError.forbidden("Not yours"))
        assert (result.status, result.code, result.message) == (
            403,
            "FORBIDDEN",
            "Not yours",
        )
        assert result.fields is None
        assert result.operational is True

    def test_unknown_failure_is_internal(self) -> None:
        result = normalize(RuntimeError("boom"))
        assert (result.status, result.code) == (500, "INTERNAL_ERROR")
        assert result.operational is False

    def test_stray_code_attribute_is_not_duplicate(self) -> None:
        failure = RuntimeError("socket")
        failure.code = 11000
        assert normalize(failure).code == "INTERNAL_ERROR"

    def test_builtin_name_attribute_is_not_a_cast_failure(self) -> None:
        failure = AttributeError("missing", name="CastError")
        assert normalize(failure).code == "INTERNAL_ERROR"

    def test_unknown_failure_keeps_raw_message_for_the_responder(self) -> None:
        assert normalize(ValueError("plain")).message == "plain"

    def test_operational_flag_alone_is_not_an_app_error(self) -> None:
        result = normalize(_ForeignOperational("looks handled"))
        assert (result.status, result.code) == (500, "INTERNAL_ERROR")
        assert result.operational is False

    def test_repeated_leaf_field_keeps_last_message(self) -> None:
        failure = _validation_error(
            title="ok", content="x", reflections=[{"reflection": "hi"}, {}]
        )
        result = normalize(failure)
        assert result.fields == {"reflection": "Field required"}
        assert result.message == "Field required"


# ══════════════════════════════════════════════════════════════════════
# Responder
# ══════════════════════════════════════════════════════════════════════


class TestRespond:
    def test_duplicate_email_body(self) -> None:
        response = respond(
            DuplicateKeyError("users", {"email": "a@example.com"}),
            Environment.PRODUCTION,
        )
        assert response.status_code == 400
        assert response.body == {
            "success": False,
            "error": {
                "code": "DUPLICATE_ERROR",
                "message": "A record with this email already exists",
                "fields": {"email": "This email is already in use"},
            },
        }

    def test_unknown_failure_hidden_in_production(self) -> None:
        response = respond(_raised(RuntimeError("boom")), Environment.PRODUCTION)
        assert response.status_code == 500
        assert response.body["error"] == {
            "code": "INTERNAL_ERROR",
            "message": GENERIC_MESSAGE,
        }
        assert "boom" not in json.dumps(response.body)

    def test_unknown_failure_exposed_in_development(self) -> None:
        response = respond(_raised(RuntimeError("boom")), Environment.DEVELOPMENT)
        assert response.status_code == 500
        assert response.body["error"]["message"] == "boom"
        assert "RuntimeError: boom" in response.body["error"]["stack"]

    def test_operational_message_shown_in_production(self) -> None:
        response = respond(AppError.not_found("Letter not found"), Environment.PRODUCTION)
        assert response.status_code == 404
        assert response.body["error"] == {
            "code": "NOT_FOUND",
            "message": "Letter not found",
        }

    def test_operational_error_has_no_stack_in_development(self) -> None:
        response = respond(
            _raised(AppError.validation("bad", {"title": "bad"})),
            Environment.DEVELOPMENT,
        )
        assert "stack" not in response.body["error"]
        assert response.body["error"]["fields"] == {"title": "bad"}

    def test_provider_details_never_sent(self) -> None:
        upstream = Exception("secret upstream detail")
        upstream.status = 500
        response = respond(AppError.ai_service(original=upstream), Environment.DEVELOPMENT)
        assert response.status_code == 503
        assert response.body["error"]["code"] == "AI_SERVICE_ERROR"
        assert "secret upstream detail" not in json.dumps(response.body)

    def test_foreign_operational_flag_gets_generic_500(self) -> None:
        response = respond(_ForeignOperational("internal detail"), Environment.PRODUCTION)
        assert response.status_code == 500
        assert response.body["error"] == {
            "code": "INTERNAL_ERROR",
            "message": GENERIC_MESSAGE,
        }

    def test_success_is_always_false(self) -> None:
        for failure in (AppError.unauthorized(), ValueError("x"), DocumentIdCastError("x")):
            assert respond(failure, Environment.PRODUCTION).body["success"] is False

    def test_stack_logged_only_in_development(self, caplog) -> None:
        failure = _raised(RuntimeError("boom"))
        with caplog.at_level("ERROR"):
            respond(failure, Environment.PRODUCTION)
        assert not any(record.getMessage().startswith("Stack:") for record in caplog.records)

        caplog.clear()
        with caplog.at_level("ERROR"):
            respond(failure, Environment.DEVELOPMENT)
        assert any(record.getMessage().startswith("Stack:") for record in caplog.records)
