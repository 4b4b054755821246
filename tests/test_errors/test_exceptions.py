"""Tests for custom exception hierarchy."""

from qchunk.errors.exceptions import AbortError, QChunkError, TaskTimeoutError


class TestExceptionHierarchy:
    def test_all_inherit_from_base(self):
        assert issubclass(AbortError, QChunkError)
        assert issubclass(TaskTimeoutError, QChunkError)

    def test_all_inherit_from_exception(self):
        assert issubclass(QChunkError, Exception)

    def test_timeout_is_builtin_timeout(self):
        assert issubclass(TaskTimeoutError, TimeoutError)


class TestAbortError:
    def test_defaults(self):
        err = AbortError()
        assert str(err) == "Operation aborted"
        assert err.message == "Operation aborted"
        assert err.reason is None

    def test_reason(self):
        err = AbortError("stopped", reason="shutdown")
        assert err.reason == "shutdown"
        assert "stopped" in str(err)


class TestTaskTimeoutError:
    def test_defaults(self):
        err = TaskTimeoutError()
        assert str(err) == "Operation timed out"
        assert err.timeout is None

    def test_attributes(self):
        err = TaskTimeoutError("too slow", timeout=0.5)
        assert err.timeout == 0.5
        assert err.message == "too slow"
