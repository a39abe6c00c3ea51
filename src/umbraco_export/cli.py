"""CLI for browsing an Umbraco export (list nodes, show a node, list children)."""

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from umbraco_export.config import ParsingOptions
from umbraco_export.errors import ContentParsingError
from umbraco_export.logging_config import configure_logging
from umbraco_export.models.node import Node
from umbraco_export.parser import ContentParser

app = typer.Typer(help="Browse the content tree of an umbraco.config XML cache or NuCache store.")

SourceArg = Annotated[Path, typer.Argument(help="umbraco.config or NuCache content store file")]
OptionsOpt = Annotated[
    Path | None,
    typer.Option("--options", "-o", help="JSON file with url_prefix_mapping, doctype_mapping, user_mapping"),
]
JsonOpt = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)


def _load(source: Path, options_file: Path | None) -> ContentParser:
    """Parse the export, turning any parsing error into exit status 1."""
    try:
        options = ParsingOptions.from_file(options_file) if options_file else None
        return ContentParser(source, options)
    except ContentParsingError as exc:
        logger.error("{}", exc)
        raise typer.Exit(1) from exc


def _find(parser: ContentParser, node: str) -> Node:
    found = parser.get_node(int(node)) if node.lstrip("-").isdigit() else parser.get_node_by_uid(node)
    if found is None:
        typer.echo(f"Node '{node}' not found.")
        raise typer.Exit(1)
    return found


def _node_to_dict(node: Node, *, with_properties: bool = False) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": node.id,
        "uid": node.uid,
        "parent_id": node.parent_id,
        "name": node.name,
        "url": node.url,
        "doctype": node.doctype,
        "level": node.level,
        "create_date": node.create_date.isoformat(),
        "update_date": node.update_date.isoformat(),
        "creator_name": node.creator_name,
        "writer_name": node.writer_name,
        "template_id": node.template_id,
        "path_ids": list(node.path_ids),
        "path_names": list(node.path_names) if node.path_names is not None else None,
    }
    if with_properties:
        data["properties"] = node.get_properties()
    return data


def _echo_nodes(nodes: list[Node], *, output_json: bool) -> None:
    if output_json:
        typer.echo(json.dumps([_node_to_dict(n) for n in nodes], indent=2))
        return
    for n in nodes:
        indent = "  " * (n.level - 1)
        typer.echo(f"{indent}{n.id}  {n.name}  [{n.doctype}]  {n.url or '-'}")


@app.command()
def nodes(
    source: SourceArg,
    options_file: OptionsOpt = None,
    doctype: Annotated[str | None, typer.Option("--doctype", "-t", help="Only nodes of this doctype")] = None,
    output_json: JsonOpt = False,
) -> None:
    """List every node in source order."""
    parser = _load(source, options_file)
    selected = [n for n in parser.get_nodes() if doctype is None or n.doctype == doctype]
    _echo_nodes(selected, output_json=output_json)


@app.command()
def show(
    source: SourceArg,
    node: Annotated[str, typer.Argument(help="Node ID or UID")],
    options_file: OptionsOpt = None,
    output_json: JsonOpt = False,
) -> None:
    """Show one node with its properties."""
    parser = _load(source, options_file)
    found = _find(parser, node)
    data = _node_to_dict(found, with_properties=True)

    if output_json:
        typer.echo(json.dumps(data, indent=2))
        return

    properties = data.pop("properties")
    for key, value in data.items():
        typer.echo(f"{key}: {value}")
    typer.echo(f"properties ({len(properties)}):")
    for key, value in properties.items():
        typer.echo(f"  {key} = {value[:80]}")


@app.command()
def children(
    source: SourceArg,
    node: Annotated[str, typer.Argument(help="Node ID or UID")],
    options_file: OptionsOpt = None,
    output_json: JsonOpt = False,
) -> None:
    """List the direct children of a node."""
    parser = _load(source, options_file)
    found = _find(parser, node)
    _echo_nodes(found.children, output_json=output_json)
