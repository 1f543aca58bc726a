"""Unit tests for the domain error registry."""

import pytest

from praytogether.core.errors import (
    INTERNAL_SERVER_ERROR,
    DomainError,
    ErrorRegistry,
    ErrorResponse,
)

NOT_FOUND = ErrorResponse(status=404, code="THING-001", message="Thing not found.")


class ThingNotFoundError(DomainError):
    info = "THING_NOT_FOUND"


class UnregisteredError(DomainError):
    info = "UNREGISTERED"


@pytest.fixture
def registry() -> ErrorRegistry:
    registry = ErrorRegistry()
    registry.register(ThingNotFoundError.info, NOT_FOUND)
    return registry


class TestDomainError:
    def test_info_is_exposed(self):
        assert ThingNotFoundError().info == "THING_NOT_FOUND"

    def test_default_message_is_info(self):
        assert str(ThingNotFoundError()) == "THING_NOT_FOUND"

    def test_custom_message(self):
        assert str(ThingNotFoundError("thing 7 is gone")) == "thing 7 is gone"

    def test_define_creates_named_subclass(self):
        error_cls = DomainError.define("ORDER_CLOSED")

        assert error_cls.__name__ == "OrderClosedError"
        assert issubclass(error_cls, DomainError)
        assert error_cls().info == "ORDER_CLOSED"


class TestErrorRegistry:
    def test_resolve_registered_error(self, registry):
        assert registry.resolve(ThingNotFoundError()) == NOT_FOUND

    def test_resolve_through_cause_chain(self, registry):
        try:
            try:
                raise ThingNotFoundError()
            except ThingNotFoundError as e:
                raise RuntimeError("lookup failed") from e
        except RuntimeError as wrapped:
            assert registry.resolve(wrapped) == NOT_FOUND

    def test_resolve_through_implicit_context(self, registry):
        try:
            try:
                raise ThingNotFoundError()
            except ThingNotFoundError:
                raise ValueError("while handling")
        except ValueError as wrapped:
            assert registry.resolve(wrapped) == NOT_FOUND

    def test_resolve_unregistered_domain_error_returns_none(self, registry):
        assert registry.resolve(UnregisteredError()) is None

    def test_resolve_plain_exception_returns_none(self, registry):
        assert registry.resolve(RuntimeError("boom")) is None

    def test_resolve_none(self, registry):
        assert registry.resolve(None) is None

    def test_resolve_survives_cycles(self, registry):
        first = RuntimeError("first")
        second = RuntimeError("second")
        first.__cause__ = second
        second.__cause__ = first

        assert registry.resolve(first) is None

    def test_identical_registration_is_noop(self, registry):
        registry.register(ThingNotFoundError.info, NOT_FOUND)
        assert len(registry) == 1

    def test_conflicting_registration_raises(self, registry):
        with pytest.raises(ValueError, match="already registered"):
            registry.register(ThingNotFoundError.info, INTERNAL_SERVER_ERROR)

    def test_register_after_freeze_raises(self, registry):
        registry.freeze()

        assert registry.frozen is True
        with pytest.raises(RuntimeError, match="frozen"):
            registry.register("NEW_ERROR", NOT_FOUND)

    def test_frozen_registry_still_resolves(self, registry):
        registry.freeze()
        assert registry.resolve(ThingNotFoundError()) == NOT_FOUND

    def test_lookup_and_contains(self, registry):
        assert ThingNotFoundError.info in registry
        assert registry.lookup(ThingNotFoundError.info) == NOT_FOUND
        assert registry.lookup("MISSING") is None


def test_error_response_to_dict():
    assert NOT_FOUND.to_dict() == {"status": 404, "code": "THING-001", "message": "Thing not found."}
