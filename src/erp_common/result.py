"""Explicit success/failure values for store calls.

Constraint violations are expected outcomes, not exceptions: the store returns
``Err(StoreFailure.DUPLICATE_EMAIL)`` and the caller decides which domain
error it maps to.
"""

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class StoreFailure(str, enum.Enum):
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    failure: StoreFailure

