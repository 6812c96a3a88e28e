"""
Tests for LoadState tagged value.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from meal_browser.application.meal_list.load_state import LoadState, LoadStatus


def test_factories() -> None:
    assert LoadState.idle().status is LoadStatus.IDLE
    assert LoadState.loading().is_loading
    assert LoadState.loaded().is_loaded
    failed = LoadState.failed("HTTP 500")
    assert failed.is_failed
    assert failed.reason == "HTTP 500"


def test_default_is_idle() -> None:
    assert LoadState() == LoadState.idle()


@pytest.mark.parametrize("status", [LoadStatus.IDLE, LoadStatus.LOADING, LoadStatus.LOADED])
def test_reason_only_allowed_when_failed(status: LoadStatus) -> None:
    with pytest.raises(PydanticValidationError):
        LoadState(status=status, reason="stale error")


@pytest.mark.parametrize("reason", [None, ""])
def test_failed_requires_reason(reason: object) -> None:
    with pytest.raises(PydanticValidationError):
        LoadState(status=LoadStatus.FAILED, reason=reason)


def test_state_is_immutable() -> None:
    state = LoadState.loading()

    with pytest.raises(PydanticValidationError):
        state.status = LoadStatus.LOADED  # type: ignore[misc]
