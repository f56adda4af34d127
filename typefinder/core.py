import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

SEPARATOR = "."
SOURCE_EXTENSION = "py"


class ConfigurationError(ValueError):
    """Raised when the resolver is handed something it cannot work with."""


InvalidConfiguration = ConfigurationError


@runtime_checkable
class ResolverCache(Protocol):
    """Durable store for the name -> path memo table."""

    def load(self) -> Mapping[str, str] | object | None: ...

    def cache(self, data: Mapping[str, str]) -> None: ...


@dataclass
class TraceEvent:
    op: str
    payload: dict[str, Any]
    t: float = field(default_factory=time.time)


def normalize_name(name: str) -> str:
    return name.lstrip(SEPARATOR)


def target_of(name: str) -> str:
    return name.split(SEPARATOR)[-1]


def normalize_extension(ext: str) -> str:
    ext = (ext or "").strip().lstrip(".")
    if not ext:
        raise ConfigurationError("Extension must be a non-empty string")
    return ext
