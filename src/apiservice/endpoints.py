"""Endpoint descriptors resolved against the service base URL."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote


@runtime_checkable
class Endpoint(Protocol):
    """Anything that yields a path relative to the base URL."""

    def path(self) -> str: ...


@dataclass(frozen=True)
class Route:
    """
    Path template with parameters, usable as an ``Endpoint``.

    Parameter values are percent-quoted before substitution so they
    always stay inside a single path segment. Parameters are stored as
    sorted (name, value) pairs, so routes compare and hash by value.

    Example:
        Route("/users/{user_id}", user_id=42).path()  # "/users/42"
    """

    template: str
    params: tuple[tuple[str, Any], ...] = ()

    def __init__(self, template: str, **params: Any) -> None:
        object.__setattr__(self, "template", template)
        object.__setattr__(self, "params", tuple(sorted(params.items())))

    def path(self) -> str:
        if not self.params:
            return self.template
        quoted = {name: quote(str(value), safe="") for name, value in self.params}
        return self.template.format(**quoted)
