"""
Load state of an asynchronously fetched collection.

One tagged value per collection instead of loading/error flags:
a reason exists exactly when the status is FAILED.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CatalogCollection(str, Enum):
    """Collections loaded by the meal list."""

    MEALS = "meals"
    CATEGORIES = "categories"


class LoadStatus(str, Enum):
    """Lifecycle of a single fetch: IDLE → LOADING → LOADED | FAILED."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    LOADED = "LOADED"
    FAILED = "FAILED"


class LoadState(BaseModel):
    """
    Status of one collection's load.

    Example:
        >>> state = LoadState.failed("HTTP 500")
        >>> assert state.is_failed and state.reason == "HTTP 500"
        >>> assert LoadState.loaded().reason is None
    """

    model_config = ConfigDict(frozen=True)

    status: LoadStatus = Field(default=LoadStatus.IDLE)
    reason: Optional[str] = Field(None, description="Failure reason, FAILED only")

    @model_validator(mode="after")
    def reason_only_when_failed(self) -> LoadState:
        if self.status is LoadStatus.FAILED and not self.reason:
            raise ValueError("FAILED state requires a reason")
        if self.status is not LoadStatus.FAILED and self.reason is not None:
            raise ValueError(f"{self.status.value} state cannot carry a reason")
        return self

    @classmethod
    def idle(cls) -> LoadState:
        return cls(status=LoadStatus.IDLE)

    @classmethod
    def loading(cls) -> LoadState:
        return cls(status=LoadStatus.LOADING)

    @classmethod
    def loaded(cls) -> LoadState:
        return cls(status=LoadStatus.LOADED)

    @classmethod
    def failed(cls, reason: str) -> LoadState:
        return cls(status=LoadStatus.FAILED, reason=reason)

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def is_loaded(self) -> bool:
        return self.status is LoadStatus.LOADED

    @property
    def is_failed(self) -> bool:
        return self.status is LoadStatus.FAILED


class LoadFailure(BaseModel):
    """Failed load reported to the caller."""

    model_config = ConfigDict(frozen=True)

    collection: CatalogCollection
    reason: str
