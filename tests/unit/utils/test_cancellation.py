"""Tests for cooperative cancellation."""

import threading

import pytest

from langvec.errors import LangVecError, OperationCancelledError, is_usage_error
from langvec.utils.cancellation import CancellationToken, check_cancelled


class TestCancellationToken:

    def test_initial_state(self):
        token = CancellationToken()
        assert token.is_cancelled is False
        token.raise_if_cancelled()

    def test_cancel_is_idempotent(self):
        token = CancellationToken()
        token.cancel()
        token.cancel()
        assert token.is_cancelled is True

    def test_raise_if_cancelled(self):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(OperationCancelledError) as exc_info:
            token.raise_if_cancelled()
        assert isinstance(exc_info.value, LangVecError)
        assert not is_usage_error(exc_info.value)

    def test_cancel_from_other_thread(self):
        token = CancellationToken()
        thread = threading.Thread(target=token.cancel)
        thread.start()
        thread.join()
        assert token.is_cancelled

    def test_repr(self):
        assert "cancelled=False" in repr(CancellationToken())


class TestCheckCancelled:

    def test_none_token(self):
        check_cancelled(None)

    def test_cancelled_token(self):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(OperationCancelledError):
            check_cancelled(token)
