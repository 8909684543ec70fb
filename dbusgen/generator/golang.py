"""Go code generator for D-Bus specifications."""

from jinja2 import Environment, PackageLoader

from .registry import TypeRegistry
from .resolver import TypeResolver
from .types import (
    Arg,
    ArrayType,
    MappingDef,
    MapType,
    Method,
    NamedType,
    Specification,
    StructType,
    TypeExpression,
    is_primitive,
)

env = Environment(
    loader=PackageLoader("dbusgen.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("golang.go.j2")

PRIMITIVE_TYPE_MAP = {
    "bool": "bool",
    "byte": "byte",
    "int16": "int16",
    "uint16": "uint16",
    "int32": "int32",
    "uint32": "uint32",
    "int64": "int64",
    "uint64": "uint64",
    "float64": "float64",
    "string": "string",
    "object_path": "dbus.ObjectPath",
    "signature": "dbus.Signature",
    "variant": "dbus.Variant",
}


def go_type(t: TypeExpression) -> str:
    """Spell a type expression as a Go type."""
    if is_primitive(t):
        return PRIMITIVE_TYPE_MAP[t.name]
    if isinstance(t, NamedType):
        return t.name
    if isinstance(t, ArrayType):
        return "[]" + go_type(t.element)
    if isinstance(t, MapType):
        return f"map[{go_type(t.key)}]{go_type(t.value)}"
    if isinstance(t, StructType):
        return "struct{" + "; ".join(f"{f.name} {go_type(f.type)}" for f in t.fields) + "}"
    raise RuntimeError(f"Unknown type expression {t!r}")


def _format_args(args: list[Arg], resolver: TypeResolver) -> str:
    return ", ".join(f"{arg.name} {go_type(resolver.resolve(arg.type))}" for arg in args)


def method_signature(method: Method, resolver: TypeResolver) -> str:
    """Format a method as ``Name(in args) (out args)``.

    The output list is omitted when the method has no output arguments.
    """
    output = f"{method.name}({_format_args(method.in_args, resolver)})"
    out_args = method.out_args
    if out_args:
        output += f" ({_format_args(out_args, resolver)})"
    return output


def _mapping_types(mapping: MappingDef, resolver: TypeResolver) -> tuple[str, str]:
    mapping.check_arity()
    return (
        go_type(resolver.resolve(mapping.key.type)),
        go_type(resolver.resolve(mapping.value.type)),
    )


def _header(spec: Specification) -> str:
    return " ".join(part for part in (spec.title, spec.version) if part)


def render(
    spec: Specification,
    *,
    package: str | None = None,
    registry: TypeRegistry | None = None,
) -> str:
    """Render a specification to Go declarations.

    Args:
        spec: Decoded specification
        package: If given, emit a package clause with this name
        registry: Custom types of ``spec``. Built from ``spec`` when omitted.
    """
    if registry is None:
        registry = TypeRegistry.from_spec(spec)
    resolver = TypeResolver(registry)

    def _resolve(type_ref: str) -> str:
        return go_type(resolver.resolve(type_ref))

    # Checked up front so that a bad mapping fails before anything renders
    for mapping in spec.mappings:
        mapping.check_arity()

    text = template.render(
        spec=spec,
        package=package,
        header=_header(spec),
        resolve=_resolve,
        mapping_types=lambda m: _mapping_types(m, resolver),
        method_signature=lambda m: method_signature(m, resolver),
    )
    return text.rstrip("\n") + "\n" if text.strip() else ""
