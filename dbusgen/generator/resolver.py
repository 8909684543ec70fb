"""Resolution of type references to type expressions."""

from __future__ import annotations

from .registry import TypeRegistry
from .signature import parse_signature
from .types import NamedType, TypeExpression


class TypeResolver:
    """Resolve member and argument types.

    A reference naming a registered custom type resolves to that name and is
    never parsed as a signature. Anything else must be a valid signature.
    """

    def __init__(self, registry: TypeRegistry):
        self.registry = registry
        self._cache: dict[str, TypeExpression] = {}

    def resolve(self, type_ref: str) -> TypeExpression:
        if type_ref in self._cache:
            return self._cache[type_ref]

        name = self.registry.lookup(type_ref)
        t: TypeExpression = NamedType(name) if name is not None else parse_signature(type_ref)

        self._cache[type_ref] = t
        return t
