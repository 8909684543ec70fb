"""Type definitions for specification decoding and code generation."""

from __future__ import annotations

from dataclasses import dataclass, field

from dataclasses_json import DataClassJsonMixin


class GeneratorError(RuntimeError):
    """Base class for errors that abort a generation run."""


class ArityError(GeneratorError):
    """Raised when a mapping definition does not have exactly two members."""


@dataclass
class Member(DataClassJsonMixin):
    """A member of a custom struct or mapping.

    ``type`` is either the name of a custom type or a raw D-Bus signature.
    """

    name: str
    type: str
    docstring: str = ""


@dataclass
class StructDef(DataClassJsonMixin):
    """A named struct with zero or more members."""

    name: str
    members: list[Member] = field(default_factory=list)
    docstring: str = ""


@dataclass
class MappingDef(DataClassJsonMixin):
    """A named key/value type. Must have exactly two members."""

    name: str
    members: list[Member] = field(default_factory=list)
    docstring: str = ""

    def check_arity(self) -> None:
        if len(self.members) != 2:
            raise ArityError(
                f"Mapping {self.name} has {len(self.members)} members, expected exactly 2"
            )

    @property
    def key(self) -> Member:
        self.check_arity()
        return self.members[0]

    @property
    def value(self) -> Member:
        self.check_arity()
        return self.members[1]


@dataclass
class Arg(DataClassJsonMixin):
    """A method argument. Any direction other than ``in`` is an output."""

    name: str
    type: str
    direction: str = ""

    @property
    def is_input(self) -> bool:
        return self.direction == "in"


@dataclass
class Method(DataClassJsonMixin):
    name: str
    args: list[Arg] = field(default_factory=list)

    @property
    def in_args(self) -> list[Arg]:
        return [arg for arg in self.args if arg.is_input]

    @property
    def out_args(self) -> list[Arg]:
        return [arg for arg in self.args if not arg.is_input]


@dataclass
class Interface(DataClassJsonMixin):
    name: str
    methods: list[Method] = field(default_factory=list)


@dataclass
class Node(DataClassJsonMixin):
    name: str = ""
    interfaces: list[Interface] = field(default_factory=list)


@dataclass
class Specification(DataClassJsonMixin):
    """Represents a complete decoded specification."""

    title: str = ""
    version: str = ""
    structs: list[StructDef] = field(default_factory=list)
    mappings: list[MappingDef] = field(default_factory=list)
    nodes: list[Node] = field(default_factory=list)

    @property
    def interfaces(self) -> list[Interface]:
        return [iface for node in self.nodes for iface in node.interfaces]


# Type expressions produced by signature resolution


@dataclass(frozen=True)
class PrimitiveType:
    """A single-character basic type, e.g. ``i`` for int32."""

    code: str
    name: str

    @property
    def signature(self) -> str:
        return self.code


@dataclass(frozen=True)
class ArrayType:
    element: TypeExpression

    @property
    def signature(self) -> str:
        return "a" + self.element.signature


@dataclass(frozen=True)
class MapType:
    key: TypeExpression
    value: TypeExpression

    @property
    def signature(self) -> str:
        return "a{" + self.key.signature + self.value.signature + "}"


@dataclass(frozen=True)
class StructField:
    name: str
    type: TypeExpression


@dataclass(frozen=True)
class StructType:
    """A positional struct. Field names are placeholders (A, B, C, ...)."""

    fields: tuple[StructField, ...] = ()

    @property
    def signature(self) -> str:
        return "(" + "".join(f.type.signature for f in self.fields) + ")"


@dataclass(frozen=True)
class NamedType:
    """A reference to a custom struct or mapping by name."""

    name: str

    @property
    def signature(self) -> str:
        return self.name


TypeExpression = PrimitiveType | ArrayType | MapType | StructType | NamedType


PRIMITIVE_CODES: dict[str, str] = {
    "b": "bool",
    "y": "byte",
    "n": "int16",
    "q": "uint16",
    "i": "int32",
    "u": "uint32",
    "x": "int64",
    "t": "uint64",
    "f": "float64",
    "s": "string",
    "o": "object_path",
    "g": "signature",
    "v": "variant",
}

PRIMITIVE_TYPES = frozenset(PRIMITIVE_CODES.values())


def is_primitive(t: TypeExpression) -> bool:
    """Check if a type expression is a primitive type."""
    return isinstance(t, PrimitiveType) and t.name in PRIMITIVE_TYPES
