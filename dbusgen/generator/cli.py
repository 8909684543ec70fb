"""Command-line interface for dbusgen code generation."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dbusgen.generator import GeneratorError, TypeRegistry, TypeResolver, golang, parse
from dbusgen.generator.golang import go_type, method_signature

if TYPE_CHECKING:
    from dbusgen.generator.types import Specification

_INPUT_FILE = click.Path(exists=True, dir_okay=False)


def _load(input_file: str) -> Specification:
    with open(input_file, "rb") as f:
        return parse(f.read())


def _fail(error: GeneratorError) -> NoReturn:
    print(f"Error: {error}", file=sys.stderr)
    sys.exit(1)


@click.group()
def cli() -> None:
    """D-Bus specification code generator."""


@cli.command()
@click.option("--language", "-l", default="go", show_default=True, help="Target language (go)")
@click.option(
    "--input", "-i", "input_file", required=True, type=_INPUT_FILE, help="Input specification file"
)
@click.option("--output", "-o", "output_file", default=None, help="Output file (default: stdout)")
@click.option("--package", "-p", default=None, help="Emit a package clause with this name")
def gen(language: str, input_file: str, output_file: str | None, package: str | None) -> None:
    """Generate declarations from a specification file."""
    if language != "go":
        print(f"Unknown language: {language}")
        sys.exit(1)

    try:
        generated_file = golang.render(_load(input_file), package=package)
    except GeneratorError as e:
        _fail(e)

    if output_file is None:
        sys.stdout.write(generated_file)
        return

    with open(output_file, "w", encoding="utf-8") as f:
        f.write(generated_file)


@cli.command()
@click.argument("signature")
@click.option(
    "--input",
    "-i",
    "input_file",
    default=None,
    type=_INPUT_FILE,
    help="Specification declaring custom types",
)
def resolve(signature: str, input_file: str | None) -> None:
    """Print the Go type of a single signature or custom type name."""
    try:
        registry = TypeRegistry.from_spec(_load(input_file)) if input_file else TypeRegistry()
        print(go_type(TypeResolver(registry).resolve(signature)))
    except GeneratorError as e:
        _fail(e)


@cli.command()
@click.option(
    "--input", "-i", "input_file", required=True, type=_INPUT_FILE, help="Input specification file"
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """Display the custom types and interfaces of a specification."""
    try:
        spec = _load(input_file)
        resolver = TypeResolver(TypeRegistry.from_spec(spec))
        if output_json:
            _output_json(spec, resolver)
        else:
            _output_plain(spec, resolver)
    except GeneratorError as e:
        _fail(e)


def _output_json(spec: Specification, resolver: TypeResolver) -> None:
    """Output the decoded specification as JSON, with resolved Go types."""
    data = spec.to_dict()

    for struct in data["structs"] + data["mappings"]:
        for member in struct["members"]:
            member["go_type"] = go_type(resolver.resolve(member["type"]))

    for node in data["nodes"]:
        for iface in node["interfaces"]:
            for method in iface["methods"]:
                for arg in method["args"]:
                    arg["go_type"] = go_type(resolver.resolve(arg["type"]))

    print(json.dumps(data, indent=2))


def _output_plain(spec: Specification, resolver: TypeResolver) -> None:
    """Output specification info using rich text formatting."""
    # Resolved before printing so a bad signature produces no output
    rows = [
        (iface.name, method_signature(method, resolver))
        for iface in spec.interfaces
        for method in iface.methods
    ]
    for mapping in spec.mappings:
        mapping.check_arity()
    for struct in spec.structs:
        for member in struct.members:
            resolver.resolve(member.type)

    console = Console()

    if spec.title or spec.version:
        console.print(f"[bold cyan]{escape(spec.title)}[/bold cyan] {escape(spec.version)}".strip())
        console.print()

    console.print("[bold cyan]Custom types[/bold cyan]")
    type_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    type_table.add_column("Name", style="white")
    type_table.add_column("Kind", style="dim")
    type_table.add_column("Members", style="yellow", justify="right")

    for struct in spec.structs:
        type_table.add_row(escape(struct.name), "struct", str(len(struct.members)))
    for mapping in spec.mappings:
        type_table.add_row(escape(mapping.name), "mapping", str(len(mapping.members)))

    console.print(type_table)
    console.print()

    console.print("[bold cyan]Interfaces[/bold cyan]")
    iface_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    iface_table.add_column("Interface", style="white")
    iface_table.add_column("Method", style="green")

    for iface_name, signature in rows:
        iface_table.add_row(escape(iface_name), escape(signature))

    console.print(iface_table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
