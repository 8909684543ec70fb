"""Registry of custom type names declared by a specification."""

from __future__ import annotations

from collections.abc import Iterator

from .types import Specification


class TypeRegistry:
    """Maps custom type names to the name emitted for them.

    A registry belongs to exactly one specification. It is filled from the
    struct and mapping definitions before any type is resolved, so a custom
    type may be referenced before its own definition.
    """

    def __init__(self) -> None:
        self._types: dict[str, str] = {}
        self._frozen = False

    @classmethod
    def from_spec(cls, spec: Specification) -> TypeRegistry:
        registry = cls()
        for struct in spec.structs:
            registry.register(struct.name)
        for mapping in spec.mappings:
            registry.register(mapping.name)
        registry.freeze()
        return registry

    def register(self, name: str) -> None:
        if self._frozen:
            raise RuntimeError(f"Cannot register {name}: registry is frozen")
        self._types[name] = name

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> str | None:
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)
