"""Specification reader for D-Bus introspection XML with spec extensions."""

from __future__ import annotations

import re

from lxml import etree

from .types import (
    Arg,
    ArityError,
    GeneratorError,
    Interface,
    MappingDef,
    Member,
    Method,
    Node,
    Specification,
    StructDef,
)

XMLNS_TP = "http://telepathy.freedesktop.org/wiki/DbusSpec#extensions-v0"

_XML_DECLARATION = re.compile(r"^\ufeff?\s*<\?xml\s[^>]*\?>")


class DecodeError(GeneratorError):
    """Raised when the input document cannot be decoded."""


def _tp(name: str) -> str:
    return f"{{{XMLNS_TP}}}{name}"


def _text(elem: etree._Element | None) -> str:
    if elem is None:
        return ""
    return " ".join("".join(elem.itertext()).split())


def _child_text(elem: etree._Element, tag: str) -> str:
    return _text(elem.find(tag))


def _attr(elem: etree._Element, name: str, default: str | None = None) -> str:
    value = elem.get(name, default)
    if value is None:
        raise DecodeError(
            f"<{etree.QName(elem).localname}> on line {elem.sourceline} is missing "
            f"the '{name}' attribute"
        )
    return value


def _member(elem: etree._Element) -> Member:
    return Member(
        name=_attr(elem, "name"),
        type=_attr(elem, "type"),
        docstring=_child_text(elem, _tp("docstring")),
    )


def _members(elem: etree._Element) -> list[Member]:
    return [_member(m) for m in elem.iterchildren(_tp("member"))]


def _struct(elem: etree._Element) -> StructDef:
    return StructDef(
        name=_attr(elem, "name"),
        members=_members(elem),
        docstring=_child_text(elem, _tp("docstring")),
    )


def _mapping(elem: etree._Element) -> MappingDef:
    return MappingDef(
        name=_attr(elem, "name"),
        members=_members(elem),
        docstring=_child_text(elem, _tp("docstring")),
    )


def _method(elem: etree._Element) -> Method:
    return Method(
        name=_attr(elem, "name"),
        args=[
            Arg(
                name=_attr(arg, "name", ""),
                type=_attr(arg, "type"),
                direction=_attr(arg, "direction", ""),
            )
            for arg in elem.iterchildren("arg")
        ],
    )


def _interface(elem: etree._Element) -> Interface:
    return Interface(
        name=_attr(elem, "name"),
        methods=[_method(m) for m in elem.iterchildren("method")],
    )


def _node(elem: etree._Element) -> Node:
    return Node(
        name=_attr(elem, "name", ""),
        interfaces=[_interface(i) for i in elem.iterchildren("interface")],
    )


def validate(spec: Specification) -> None:
    """Validate a decoded specification."""
    seen: set[str] = set()
    for name in [s.name for s in spec.structs] + [m.name for m in spec.mappings]:
        if name in seen:
            raise DecodeError(f"Custom type {name} declared more than once")
        seen.add(name)

    for mapping in spec.mappings:
        mapping.check_arity()


def parse(text: str | bytes) -> Specification:
    """Parse a specification document."""
    if isinstance(text, str):
        # The text is already decoded, so any declared encoding no longer applies
        text = _XML_DECLARATION.sub("", text, count=1)

    parser = etree.XMLParser(remove_comments=True, resolve_entities=False)
    try:
        root = etree.fromstring(text, parser)
    except etree.XMLSyntaxError as e:
        raise DecodeError(f"Malformed specification: {e}") from e

    if root.tag == "node":
        nodes = [_node(root)]
    elif root.tag == _tp("spec"):
        nodes = [_node(n) for n in root.iterchildren("node")]
    else:
        raise DecodeError(f"Expected <spec> in namespace {XMLNS_TP} but have <{root.tag}>")

    spec = Specification(
        title=_child_text(root, _tp("title")),
        version=_child_text(root, _tp("version")),
        structs=[_struct(s) for s in root.iter(_tp("struct"))],
        mappings=[_mapping(m) for m in root.iter(_tp("mapping"))],
        nodes=nodes,
    )

    validate(spec)
    return spec


__all__ = ["ArityError", "DecodeError", "XMLNS_TP", "parse", "validate"]
