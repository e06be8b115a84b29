"""Designable Form Schema MCP Server

Provides tools for reading, writing, and converting form schemas.
Agents can work with either the editor's design tree or the persisted form
schema; conversion between the two is transparent.
"""

import sys
import json
import logging
from pathlib import Path
from typing import Any, Optional
from fastmcp import FastMCP, Context
from fastmcp.exceptions import ToolError

# Import version for CLI
try:
    from designable_formily import __version__
except ImportError:
    __version__ = "unknown"

from ..config import ServerConfig, get_config
from ..transformer import (
    TransformerOptions,
    TreeNode,
    create_options,
    load_json_document,
    transform_to_schema,
    transform_to_tree_node,
)

logger = logging.getLogger(__name__)

# Create MCP server
mcp = FastMCP("Designable Form Schema Manager")

config: ServerConfig = get_config()


def validate_path(filepath: str, base: Optional[Path] = None) -> Path:
    """Validate file path is within allowed directory"""
    base = base if base is not None else config.schemas_dir
    path = Path(filepath).resolve()
    try:
        path.relative_to(base.resolve())
        return path
    except ValueError:
        raise ToolError(f"Access denied: {filepath} is outside allowed directory")


def resolve_options(overrides: Optional[dict[str, Any]] = None) -> TransformerOptions:
    """Merge per-call option overrides over the configured component names."""
    options = config.transformer_options().model_dump()
    if overrides:
        options.update(create_options(overrides).model_dump(exclude_unset=True))
    return TransformerOptions.model_validate(options)


def read_schema_file(path: Path, options: Optional[TransformerOptions] = None) -> TreeNode:
    """Load a ``{schema, form}`` JSON document and convert it to a design tree."""
    document = load_json_document(path)
    if not isinstance(document, dict):
        raise ToolError(f"Expected a JSON object in {path}, got {type(document).__name__}")
    return transform_to_tree_node(document, options or resolve_options())


def write_schema_file(
    tree: dict[str, Any],
    path: Path,
    options: Optional[TransformerOptions] = None,
    indent: Optional[int] = None,
) -> dict[str, Any]:
    """Convert a design tree and write the resulting schema document to path."""
    document = transform_to_schema(tree, options or resolve_options())
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=indent if indent is not None else config.json_indent))
    return document


def tree_info(tree: TreeNode, options: Optional[TransformerOptions] = None) -> dict[str, Any]:
    """Summarize the form and field structure of a design tree."""
    options = options or resolve_options()
    form = tree.find(lambda node: node.component_name == options.designable_form_name)
    fields = tree.find_all(lambda node: node.component_name == options.designable_field_name)

    return {
        "has_form": form is not None,
        "form_id": form.id if form is not None else None,
        "node_count": sum(1 for _ in tree.walk()),
        "field_count": len(fields),
        "depth": tree.depth,
        "fields": [
            {
                "id": node.id,
                "name": node.props.get("name"),
                "type": node.props.get("type"),
                "child_count": len(node.children),
            }
            for node in fields
        ],
    }


# ===== FILE OPERATION TOOLS =====

@mcp.tool
async def read_schema(ctx: Context, filepath: str) -> dict:
    """Read a form schema file and return it as a design tree.

    The file must hold a ``{"schema": ..., "form": ...}`` JSON document as
    written by write_schema or by the form runtime.

    Args:
        filepath: Path to the schema document (.json)

    Returns:
        Design tree rooted at the form node, in JSON form

    Examples:
        read_schema("schemas/contact.json")
    """
    await ctx.info(f"Reading schema from {filepath}")

    try:
        path = validate_path(filepath)

        if not path.exists():
            raise ToolError(f"File not found: {filepath}")

        if path.suffix != ".json":
            raise ToolError(f"Unsupported file format: {path.suffix}")

        tree = read_schema_file(path)
        await ctx.info(f"✓ Converted to design tree ({len(tree.children)} top-level fields)")
        return tree.to_dict()

    except json.JSONDecodeError as e:
        raise ToolError(f"Invalid JSON in {filepath}: {e}")
    except ToolError:
        raise
    except Exception as e:
        raise ToolError(f"Error reading schema: {e}")


@mcp.tool
async def write_schema(ctx: Context, filepath: str, tree: dict) -> dict:
    """Write a design tree to disk as a form schema document.

    Args:
        filepath: Destination file path (.json)
        tree: Design tree in JSON form

    Returns:
        Status dict with path, size, and whether a form root was found

    Examples:
        write_schema("schemas/contact.json", tree)
    """
    await ctx.info(f"Writing schema to {filepath}")

    try:
        path = validate_path(filepath)

        if path.exists():
            await ctx.info(f"⚠️  File {filepath} already exists, will overwrite")

        document = write_schema_file(tree, path)
        await ctx.info(f"✓ Wrote schema to {filepath}")

        return {
            "status": "success",
            "path": str(path),
            "size": path.stat().st_size,
            "has_form": "form" in document,
        }

    except ToolError:
        raise
    except Exception as e:
        raise ToolError(f"Error writing schema: {e}")


@mcp.tool
def list_schemas(directory: Optional[str] = None, pattern: str = "*") -> list[dict]:
    """List schema documents in a directory.

    Args:
        directory: Directory to search (default: the configured schemas dir)
        pattern: Glob pattern for filtering (default: "*" for all files)

    Returns:
        List of schema file info dicts with name, size, modified time

    Examples:
        list_schemas()
        list_schemas("schemas/orders", "order_*")
    """
    try:
        search_path = validate_path(directory or str(config.schemas_dir))

        if not search_path.exists():
            raise ToolError(f"Directory not found: {search_path}")

        schemas = []
        for path in search_path.glob(f"{pattern}.json"):
            if path.is_file():
                stat = path.stat()
                schemas.append({
                    "name": path.name,
                    "path": str(path),
                    "size": stat.st_size,
                    "modified": stat.st_mtime,
                })

        schemas.sort(key=lambda s: s["name"])

        return schemas

    except ToolError:
        raise
    except Exception as e:
        raise ToolError(f"Error listing schemas: {e}")


# ===== CONVERSION TOOLS =====

@mcp.tool
def convert_tree_to_schema(tree: dict, options: Optional[dict] = None) -> dict:
    """Convert a design tree to a form schema document.

    Args:
        tree: Design tree in JSON form
        options: Optional overrides for designableFieldName / designableFormName

    Returns:
        ``{"schema": ..., "form": ...}``; ``form`` is omitted when the tree
        has no form root
    """
    try:
        return transform_to_schema(tree, resolve_options(options))
    except Exception as e:
        raise ToolError(f"Error converting tree: {e}")


@mcp.tool
def convert_schema_to_tree(document: dict, options: Optional[dict] = None) -> dict:
    """Convert a form schema document to a design tree.

    Args:
        document: ``{"schema": ..., "form": ...}``; both keys are optional
        options: Optional overrides for designableFieldName / designableFormName

    Returns:
        Design tree rooted at the form node, in JSON form
    """
    try:
        return transform_to_tree_node(document, resolve_options(options)).to_dict()
    except Exception as e:
        raise ToolError(f"Error converting schema: {e}")


@mcp.tool
def get_tree_info(tree: dict) -> dict:
    """Analyze design tree structure and return metadata.

    Args:
        tree: Design tree in JSON form

    Returns:
        Form presence, node and field counts, depth, and per-field summaries
    """
    try:
        return tree_info(TreeNode.from_dict(tree))
    except Exception as e:
        raise ToolError(f"Error analyzing tree: {e}")


# ===== RESOURCES =====

@mcp.resource("designable://docs/conventions")
async def docs_conventions() -> str:
    """Reserved attributes shared by design trees and form schemas."""
    return f"""# Design Tree / Form Schema Conventions

## Markers
- Form root component: `{config.designable_form_name}`
- Field component: `{config.designable_field_name}`

Only field nodes become schema properties. Other components are skipped.

## Reserved attributes
- `_designableId`: id of the design node a schema node came from. Reading a
  schema uses it as the node id, falling back to the property key.
- `x-index`: 0-based position of a property among its field siblings.
- `name`: the design node prop used as the property key (the node id when
  missing).

## Containers
- `type: "object"`: field children become `properties`.
- `type: "array"`: the first field child becomes `items` (the element
  template); the remaining field children become `properties` with their own
  `x-index` sequence starting at 0.
- Any other type is a leaf.

## Form props
The form root's props are stored in the top-level `form` key, never inside
`schema`.
"""


# ===== CLI SUPPORT =====

def main():
    """Main entry point for the CLI."""
    import argparse

    global config

    parser = argparse.ArgumentParser(
        description="Designable Form Schema MCP Server - design tree / form schema conversion"
    )
    parser.add_argument(
        "--schemas-dir",
        default=None,
        help=f"Directory for schema files (default: {config.schemas_dir})"
    )
    parser.add_argument(
        "--field-name",
        default=None,
        help=f"Field component name (default: {config.designable_field_name})"
    )
    parser.add_argument(
        "--form-name",
        default=None,
        help=f"Form root component name (default: {config.designable_form_name})"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"designable-formily {__version__}"
    )

    args = parser.parse_args()

    if args.schemas_dir:
        config.schemas_dir = Path(args.schemas_dir)
    if args.field_name:
        config.designable_field_name = args.field_name
    if args.form_name:
        config.designable_form_name = args.form_name
    config.schemas_dir.mkdir(parents=True, exist_ok=True)

    # Configure logging
    level = logging.DEBUG if args.debug else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(level=level, stream=sys.stderr)

    logger.info("Starting Designable Form Schema MCP Server")
    logger.info("Schemas: %s", config.schemas_dir)
    logger.info("Form/field markers: %s / %s", config.designable_form_name, config.designable_field_name)

    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Designable Form Schema MCP Server stopped")
        sys.exit(0)


# ===== MAIN =====

if __name__ == "__main__":
    main()
