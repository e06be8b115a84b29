"""Designable Formily - design tree / form schema conversion.

This package converts between the design tree produced by a drag-and-drop
form editor and the JSON-Schema-like form schema consumed by the form
runtime. Both directions preserve node ids and sibling order so a form can
be saved and loaded again without losing its structure.

Example:
    Convert an editor tree and back:

    >>> from designable_formily import transform_to_schema, transform_to_tree_node
    >>> document = transform_to_schema(tree)
    >>> tree = transform_to_tree_node(document)

    Or run the MCP server:

    $ designable-formily-mcp --schemas-dir ./schemas

Modules:
    transformer: Converters, tree nodes, schema wrapper and HTTP API
    mcp: Model Context Protocol server implementation
    config: Server configuration
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .transformer import (
    TransformerOptions,
    TreeNode,
    Schema,
    FormilySchema,
    TreeToSchemaConverter,
    SchemaToTreeConverter,
    transform_to_schema,
    transform_to_tree_node,
)

__all__ = [
    "TransformerOptions",
    "TreeNode",
    "Schema",
    "FormilySchema",
    "TreeToSchemaConverter",
    "SchemaToTreeConverter",
    "transform_to_schema",
    "transform_to_tree_node",
]
