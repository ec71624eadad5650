# catalog/core.py
from dataclasses import dataclass
from typing import Any, Union

# Outcomes returned by the store layer. Handlers map them onto HTTP responses;
# nothing below the handlers raises for an expected failure.


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is missing."""


@dataclass(frozen=True)
class Ok:
    value: Any = None


@dataclass(frozen=True)
class NotFound:
    product_id: str


@dataclass(frozen=True)
class StoreFault:
    operation: str
    error: Exception


Outcome = Union[Ok, NotFound, StoreFault]
