"""Tests for the signature grammar."""

import pytest

from dbusgen.generator.signature import (
    PRIMITIVE_CODES,
    GrammarError,
    field_name,
    parse_next,
    parse_signature,
)
from dbusgen.generator.types import (
    PRIMITIVE_TYPES,
    ArrayType,
    MapType,
    NamedType,
    PrimitiveType,
    StructField,
    StructType,
    is_primitive,
)


def describe_primitives():
    @pytest.mark.parametrize("code", sorted(PRIMITIVE_CODES))
    def resolves_each_code(expect, code):
        t, remaining = parse_next(code)
        expect(t) == PrimitiveType(code, PRIMITIVE_CODES[code])
        expect(remaining) == ""

    def maps_codes_to_names(expect):
        expect(parse_signature("i").name) == "int32"
        expect(parse_signature("t").name) == "uint64"
        expect(parse_signature("f").name) == "float64"
        expect(parse_signature("o").name) == "object_path"
        expect(parse_signature("v").name) == "variant"

    def classifies_parsed_primitives(expect):
        for code in PRIMITIVE_CODES:
            expect(is_primitive(parse_signature(code))) == True
        expect(is_primitive(parse_signature("as"))) == False
        expect(is_primitive(NamedType("string"))) == False
        expect(is_primitive(PrimitiveType("d", "double"))) == False

    def names_every_primitive_type(expect):
        expect(PRIMITIVE_TYPES) == frozenset(PRIMITIVE_CODES.values())
        expect(len(PRIMITIVE_TYPES)) == 13


def describe_arrays():
    def parses_array_of_primitive(expect):
        expect(parse_signature("as")) == ArrayType(PrimitiveType("s", "string"))

    def parses_nested_arrays(expect):
        int32 = PrimitiveType("i", "int32")
        expect(parse_signature("aaai")) == ArrayType(ArrayType(ArrayType(int32)))

    def parses_array_of_struct(expect):
        t = parse_signature("a(us)")
        expect(isinstance(t, ArrayType)) == True
        expect(len(t.element.fields)) == 2


def describe_maps():
    def parses_map(expect):
        t = parse_signature("a{sv}")
        expect(t) == MapType(PrimitiveType("s", "string"), PrimitiveType("v", "variant"))

    def keeps_key_and_value_order(expect):
        t = parse_signature("a{us}")
        expect(t.key.name) == "uint32"
        expect(t.value.name) == "string"

    def parses_map_of_arrays(expect):
        t = parse_signature("a{sas}")
        expect(t.value) == ArrayType(PrimitiveType("s", "string"))

    def rejects_three_elements(expect):
        with pytest.raises(GrammarError) as exc:
            parse_signature("a{sss}")
        expect("map can only have 2 elements" in str(exc.value)) == True
        expect(exc.value.char) == "s"

    def rejects_unclosed_map(expect):
        with pytest.raises(GrammarError) as exc:
            parse_signature("a{ss")
        expect(exc.value.char) == None
        expect("end of signature" in str(exc.value)) == True


def describe_structs():
    def parses_empty_struct(expect):
        expect(parse_signature("()")) == StructType(())

    def names_fields_alphabetically(expect):
        t = parse_signature("(is)")
        expect(t.fields) == (
            StructField("A", PrimitiveType("i", "int32")),
            StructField("B", PrimitiveType("s", "string")),
        )

    def names_fields_past_the_alphabet(expect):
        t = parse_signature("(" + "y" * 28 + ")")
        names = [f.name for f in t.fields]
        expect(names[25]) == "Z"
        expect(names[26]) == "AA"
        expect(names[27]) == "AB"
        expect(len(set(names))) == 28

    def parses_nested_struct(expect):
        t = parse_signature("(u(ss))")
        expect(t.fields[1].type.fields[0].name) == "A"

    def rejects_unclosed_struct(expect):
        with pytest.raises(GrammarError):
            parse_signature("(ii")


def describe_field_name():
    def counts_like_spreadsheet_columns(expect):
        expect(field_name(0)) == "A"
        expect(field_name(25)) == "Z"
        expect(field_name(26)) == "AA"
        expect(field_name(51)) == "AZ"
        expect(field_name(52)) == "BA"
        expect(field_name(701)) == "ZZ"
        expect(field_name(702)) == "AAA"


def describe_errors():
    def rejects_unknown_char(expect):
        with pytest.raises(GrammarError) as exc:
            parse_signature("z")
        expect(exc.value.char) == "z"
        expect("unknown char: 'z'" in str(exc.value)) == True

    def reports_remaining_and_full_signature(expect):
        with pytest.raises(GrammarError) as exc:
            parse_signature("a{sz}")
        expect(exc.value.remaining) == "z}"
        expect(exc.value.signature) == "a{sz}"
        expect(exc.value.position) == 3
        expect("starting string: 'a{sz}'" in str(exc.value)) == True

    def rejects_empty_signature(expect):
        with pytest.raises(GrammarError):
            parse_signature("")

    def rejects_bare_array(expect):
        with pytest.raises(GrammarError):
            parse_signature("a")

    def rejects_trailing_characters(expect):
        with pytest.raises(GrammarError) as exc:
            parse_signature("ii")
        expect(exc.value.remaining) == "i"

    def step_parser_leaves_trailing_characters(expect):
        t, remaining = parse_next("ias")
        expect(t.name) == "int32"
        expect(remaining) == "as"


def describe_signature_property():
    def reencodes_composite_types(expect):
        expect(parse_signature("a{s(iav)}").signature) == "a{s(iav)}"
