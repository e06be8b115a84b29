"""Transformer package for Designable form trees.

This package converts between the editor's design tree and the JSON-Schema-like
form schema consumed by the form runtime.

Classes:
    TreeToSchemaConverter: Convert a design tree to a form schema document
    SchemaToTreeConverter: Convert a form schema document to a design tree

    TreeNode: Editor node with component name, props and children
    Schema: Schema node with ordered properties and an items template
    FormilySchema: Persisted ``{schema, form}`` document
    TransformerOptions: Form and field component names

Functions:
    transform_to_schema: Design tree to ``{form, schema}``
    transform_to_tree_node: ``{schema, form}`` to design tree
    create_options: Resolve options against the defaults
"""

from .options import (
    DEFAULT_FIELD_NAME,
    DEFAULT_FORM_NAME,
    TransformerOptions,
    create_options,
)
from .tree_nodes import TreeNode, uid
from .schema import Schema
from .converter import (
    FormilySchema,
    SchemaToTreeConverter,
    TreeToSchemaConverter,
    load_json_document,
    save_json_document,
    transform_to_schema,
    transform_to_tree_node,
)

__all__ = [
    "DEFAULT_FIELD_NAME",
    "DEFAULT_FORM_NAME",
    "TransformerOptions",
    "create_options",
    "TreeNode",
    "uid",
    "Schema",
    "FormilySchema",
    "SchemaToTreeConverter",
    "TreeToSchemaConverter",
    "load_json_document",
    "save_json_document",
    "transform_to_schema",
    "transform_to_tree_node",
]
