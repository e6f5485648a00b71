"""
Tests for the synchronous Result combinators.
"""

import pytest

from resultful import (
    Cancelled,
    ErrorKind,
    Failure,
    InvalidStateAccess,
    ResultError,
    Success,
    cancelled,
    fail,
    from_throwable,
    ok,
    technical_error,
    validation_error,
)


class TestConstruction:
    def test_success(self):
        result = ok(42)
        assert result.is_success
        assert not result.is_failure
        assert not result.is_cancelled
        assert result.value == 42

    def test_failure(self):
        error = ValueError("Something went wrong")
        result = fail(error)
        assert not result.is_success
        assert result.is_failure
        assert result.error is error

    def test_value_of_failure_raises(self):
        with pytest.raises(InvalidStateAccess):
            fail(ValueError("Error")).value

    def test_error_of_success_raises(self):
        with pytest.raises(InvalidStateAccess):
            ok(42).error

    def test_cancelled_is_failure(self):
        result = cancelled()
        assert not result.is_success
        assert result.is_failure
        assert result.is_cancelled
        assert isinstance(result, Failure)

    def test_cancelled_error(self):
        result = cancelled("my-operation")
        assert result.error.name == "CancellationError"
        assert result.error.message == "Cancellation: Operation was cancelled"
        assert result.error.operation_id == "my-operation"

    def test_cancelled_equality_ignores_operation_id(self):
        assert cancelled("a") == cancelled("b")
        assert cancelled() != fail(cancelled().error)

    def test_none_payloads(self):
        assert ok(None).is_success
        assert ok(None).value is None

    def test_structural_equality(self):
        assert ok(1) == ok(1)
        assert ok(1) != ok(2)
        error = ValueError("x")
        assert fail(error) == fail(error)
        assert ok(1) != fail(1)

    def test_immutable(self):
        result = ok(1)
        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]

    def test_pattern_matching(self):
        def describe(result):
            match result:
                case Success(value):
                    return f"ok {value}"
                case Cancelled():
                    return "cancelled"
                case Failure(error):
                    return f"failed {error}"

        assert describe(ok(1)) == "ok 1"
        assert describe(fail("boom")) == "failed boom"
        assert describe(cancelled()) == "cancelled"


class TestFromThrowable:
    def test_returns_value(self):
        result = from_throwable(lambda: 42)
        assert result == ok(42)

    def test_captures_exception(self):
        def boom():
            raise ValueError("Function error")

        result = from_throwable(boom)
        assert result.is_failure
        assert isinstance(result.error, ValueError)
        assert str(result.error) == "Function error"

    def test_passes_arguments(self):
        assert from_throwable(int, "12").value == 12
        assert from_throwable(int, "x").is_failure

    def test_cancellation_error_becomes_cancelled(self):
        def stop():
            raise cancelled().error

        assert from_throwable(stop).is_cancelled

    def test_base_exceptions_propagate(self):
        def interrupt():
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            from_throwable(interrupt)


class TestMapping:
    def test_map_success(self):
        assert ok(42).map(lambda x: x * 2) == ok(84)

    def test_map_failure_is_untouched(self):
        error = ValueError("Error")
        called = []
        result = fail(error).map(lambda x: called.append(x))
        assert result.error is error
        assert called == []

    def test_map_cancelled_is_untouched(self):
        source = cancelled()
        assert source.map(lambda x: x * 2) is source

    def test_map_exception_becomes_failure(self):
        result = ok({}).map(lambda d: d["missing"])
        assert result.is_failure
        assert isinstance(result.error, KeyError)

    def test_map_error(self):
        result = fail(ValueError("Original error")).map_error(
            lambda e: validation_error(str(e))
        )
        assert result.error.name == "ValidationError"
        assert result.error.message == "Validation Error: Original error"

    def test_map_error_on_success_is_untouched(self):
        source = ok(1)
        assert source.map_error(lambda e: "changed") is source

    def test_map_error_exception_becomes_failure(self):
        def broken(_):
            raise RuntimeError("mapper broke")

        result = fail("x").map_error(broken)
        assert isinstance(result.error, RuntimeError)

    def test_map_error_keeps_cancelled_for_cancellation_errors(self):
        result = cancelled().map_error(lambda e: e)
        assert result.is_cancelled
        result = cancelled().map_error(lambda e: technical_error("gave up"))
        assert result.is_failure
        assert not result.is_cancelled

    def test_flat_map_success(self):
        result = ok(42).flat_map(lambda x: ok(f"Value: {x}"))
        assert result == ok("Value: 42")

    def test_flat_map_does_not_rewrap(self):
        error = ValueError("inner")
        assert ok(1).flat_map(lambda _: fail(error)) == fail(error)

    def test_flat_map_failure_short_circuits(self):
        error = ValueError("Error")
        result = fail(error).flat_map(lambda x: ok(f"Value: {x}"))
        assert result.error is error

    def test_flat_map_non_result_becomes_failure(self):
        result = ok(1).flat_map(lambda x: x + 1)
        assert isinstance(result.error, TypeError)

    def test_flat_map_exception_becomes_failure(self):
        result = ok(0).flat_map(lambda x: ok(1 / x))
        assert isinstance(result.error, ZeroDivisionError)


class TestSideEffects:
    def test_tap_on_success(self):
        seen = []
        result = ok(42)
        assert result.tap(seen.append) is result
        assert seen == [42]

    def test_tap_on_failure(self):
        seen = []
        result = fail(ValueError("Error"))
        assert result.tap(seen.append) is result
        assert seen == []

    def test_tap_error_on_failure(self):
        seen = []
        result = fail(ValueError("Test error"))
        assert result.tap_error(lambda e: seen.append(str(e))) is result
        assert seen == ["Test error"]

    def test_tap_error_on_success(self):
        seen = []
        result = ok(42)
        assert result.tap_error(seen.append) is result
        assert seen == []

    def test_tap_exceptions_propagate(self):
        def explode(_):
            raise RuntimeError("observer failed")

        with pytest.raises(RuntimeError):
            ok(1).tap(explode)
        with pytest.raises(RuntimeError):
            fail("x").tap_error(explode)


class TestFallbacks:
    def test_match_success(self):
        matched = ok(42).match(lambda v: f"Success: {v}", lambda e: f"Failure: {e}")
        assert matched == "Success: 42"

    def test_match_failure(self):
        matched = fail(ValueError("Error message")).match(
            lambda v: f"Success: {v}", lambda e: f"Failure: {e}"
        )
        assert matched == "Failure: Error message"

    def test_get_or_else(self):
        assert ok(42).get_or_else(0) == 42
        assert fail(ValueError("Error")).get_or_else(0) == 0
        assert cancelled().get_or_else(0) == 0

    def test_get_or_call(self):
        assert ok(42).get_or_call(lambda e: len(str(e))) == 42
        assert fail(ValueError("Error message")).get_or_call(lambda e: len(str(e))) == 13

    def test_recover(self):
        assert ok(42).recover(lambda _: ok(0)).value == 42
        assert fail(ValueError("Error")).recover(lambda _: ok(0)).value == 0

    def test_recover_can_stay_failed(self):
        other = ValueError("still broken")
        assert fail("x").recover(lambda _: fail(other)).error is other

    def test_recover_cancelled(self):
        assert cancelled().recover(lambda _: ok("retried")) == ok("retried")

    def test_recover_exception_becomes_failure(self):
        def broken(_):
            raise RuntimeError("recovery failed")

        assert isinstance(fail("x").recover(broken).error, RuntimeError)

    def test_or_else(self):
        alternative = ok(0)
        assert ok(42).or_else(alternative).value == 42
        assert fail(ValueError("Error")).or_else(alternative) is alternative

    def test_or_else_requires_result(self):
        with pytest.raises(TypeError):
            fail("x").or_else(0)


class TestSerialization:
    def test_success(self):
        assert ok(42).to_dict() == {"success": True, "value": 42}

    def test_failure(self):
        record = fail(ValueError("JSON error")).to_dict()
        assert record == {
            "success": False,
            "error": {"name": "ValueError", "message": "JSON error"},
        }
        assert "value" not in record

    def test_result_error(self):
        record = fail(validation_error("bad")).to_dict()
        assert record["error"] == {
            "name": "ValidationError",
            "message": "Validation Error: bad",
        }

    def test_cancelled(self):
        record = cancelled("my-operation").to_dict()
        assert record["success"] is False
        assert record["error"]["name"] == "CancellationError"

    def test_non_exception_payload(self):
        record = fail("plain").to_dict()
        assert record["error"] == {"name": "Error", "message": "plain"}


class TestIntegration:
    def test_chaining(self):
        result = (
            ok(42)
            .map(lambda x: x + 8)
            .flat_map(
                lambda x: ok(f"Value: {x}") if x >= 50 else fail(ValueError("Value too small"))
            )
            .map(str.upper)
        )
        assert result == ok("VALUE: 50")

    def test_early_failure_propagation(self):
        result = (
            fail(ValueError("Initial error"))
            .map(lambda x: x + 8)
            .flat_map(lambda x: ok(f"Value: {x}"))
            .map(str.upper)
        )
        assert str(result.error) == "Initial error"

    def test_error_transformation(self):
        result = (
            ok(60)
            .map(lambda x: x + 8)
            .flat_map(
                lambda x: ok(x) if x < 50 else fail(validation_error("Value exceeds maximum"))
            )
            .map_error(lambda e: technical_error(f"Processing failed: {e.message}", cause=e))
        )
        assert result.error.name == "TechnicalError"
        assert result.error.message == (
            "Technical Error: Processing failed: Validation Error: Value exceeds maximum"
        )
        assert result.error.cause.is_kind(ErrorKind.VALIDATION)

    def test_match_scenario(self):
        seen = []
        ok(5).map(lambda x: x * 2).flat_map(
            lambda x: ok(x) if x > 8 else fail(ValueError("too small"))
        ).match(seen.append, lambda e: pytest.fail(str(e)))
        assert seen == [10]

    def test_error_payload_is_result_error(self):
        assert isinstance(cancelled().error, ResultError)
