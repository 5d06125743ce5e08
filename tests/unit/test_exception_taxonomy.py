"""Tests for the unified exception taxonomy.

Validates:
- CaptureError hierarchy and structured attributes
- Category classification (validation, transient, permanent, contract)
- ``to_error_dict()`` produces stable payload keys
- All activity/provider exceptions are CaptureError subclasses
"""

from __future__ import annotations

from typing import ClassVar

from ocean_capture.activities.authenticate import AuthenticationRequired
from ocean_capture.activities.fetch_imagery import UnsupportedResponseType
from ocean_capture.activities.persist_imagery import PersistenceFailed
from ocean_capture.core.config import ConfigValidationError
from ocean_capture.core.exceptions import (
    CaptureError,
    ContractError,
    PermanentError,
    ValidationError,
)
from ocean_capture.models.imagery import ModelValidationError
from ocean_capture.providers.base import ProviderAuthError, ProviderError, ProviderRequestFailed


class TestCaptureErrorBase:
    """CaptureError base class behaviour."""

    def test_default_attributes(self) -> None:
        err = CaptureError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.retryable is False
        assert str(err) == "boom"

    def test_explicit_attributes(self) -> None:
        err = CaptureError("boom", stage="fetch_imagery", code="X", retryable=True)
        assert (err.stage, err.code, err.retryable) == ("fetch_imagery", "X", True)

    def test_category_falls_back_on_retryable(self) -> None:
        assert CaptureError("x", retryable=True).category == "transient"
        assert CaptureError("x").category == "permanent"

    def test_to_error_dict_keys(self) -> None:
        payload = CaptureError("boom", stage="s", code="C").to_error_dict()
        assert payload == {
            "category": "permanent",
            "code": "C",
            "stage": "s",
            "message": "boom",
            "retryable": False,
        }


class TestCategoryBases:
    """Category base classes set the right retry defaults."""

    def test_validation(self) -> None:
        err = ValidationError("x")
        assert err.category == "validation"
        assert err.retryable is False

    def test_permanent(self) -> None:
        err = PermanentError("x")
        assert err.category == "permanent"
        assert err.retryable is False

    def test_contract(self) -> None:
        err = ContractError("x")
        assert err.category == "contract"
        assert err.retryable is False


class TestDomainExceptions:
    """Every domain exception is a CaptureError with stage and code."""

    CASES: ClassVar[list[tuple[CaptureError, str, str, str]]] = [
        (AuthenticationRequired(), "validation", "authenticate", "AUTH_REQUIRED"),
        (
            UnsupportedResponseType("builtins.str"),
            "contract",
            "fetch_imagery",
            "UNSUPPORTED_RESPONSE_TYPE",
        ),
        (PersistenceFailed("/x", "denied"), "permanent", "persist_imagery", "PERSISTENCE_FAILED"),
        (
            ConfigValidationError("K", 0, "bad"),
            "validation",
            "config",
            "CONFIG_VALIDATION_FAILED",
        ),
        (
            ModelValidationError("M", "f", 0, "bad"),
            "validation",
            "model_validation",
            "MODEL_VALIDATION_FAILED",
        ),
        (ProviderAuthError("sh", "denied"), "permanent", "provider", "PROVIDER_AUTH_FAILED"),
    ]

    def test_all_are_capture_errors(self) -> None:
        for err, _, _, _ in self.CASES:
            assert isinstance(err, CaptureError)

    def test_categories_stages_codes(self) -> None:
        for err, category, stage, code in self.CASES:
            assert err.category == category, type(err).__name__
            assert err.stage == stage, type(err).__name__
            assert err.code == code, type(err).__name__

    def test_error_dicts_are_stable(self) -> None:
        for err, _, _, _ in self.CASES:
            assert set(err.to_error_dict()) == {
                "category",
                "code",
                "stage",
                "message",
                "retryable",
            }

    def test_retryable_provider_failure_is_transient(self) -> None:
        err = ProviderRequestFailed("sh", "HTTP 503", retryable=True)
        assert isinstance(err, ProviderError)
        assert err.category == "transient"
        assert err.to_error_dict()["retryable"] is True

    def test_auth_message_names_variables(self) -> None:
        message = str(AuthenticationRequired())
        assert "SENTINEL_HUB_ACCESS_TOKEN" in message
        assert "SENTINELHUB_CLIENT_ID" in message
        assert "SENTINELHUB_CLIENT_SECRET" in message
