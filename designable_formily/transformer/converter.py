"""Converter between the editor's design tree and the form schema."""

import copy
import json
import logging
from typing import Any, Mapping
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field

from .options import TransformerOptions, create_options
from .schema import (
    DESIGNABLE_ID_KEY,
    INDEX_KEY,
    SCHEMA_OBJECT_MARKER,
    VERSION_KEY,
    Schema,
)
from .tree_nodes import TreeNode


logger = logging.getLogger(__name__)

ARRAY_TYPE = "array"
OBJECT_TYPE = "object"


class FormilySchema(BaseModel):
    """Persisted form document: the schema body plus form-level props."""

    model_config = ConfigDict(populate_by_name=True)

    schema_: dict[str, Any] | None = Field(None, alias="schema")
    form: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TreeToSchemaConverter:
    """Convert a design tree to a form schema document."""

    def __init__(self, options: TransformerOptions | Mapping[str, Any] | None = None):
        """Initialize converter with resolved options."""
        self.options = create_options(options)

    def convert(self, node: TreeNode | Mapping[str, Any]) -> dict[str, Any]:
        """Convert the first form root found under node to ``{form, schema}``.

        Without a form root the result is an empty object schema and no
        ``form`` key.
        """
        if not isinstance(node, TreeNode):
            node = TreeNode.from_dict(node)

        form_name = self.options.designable_form_name
        root = node.find(lambda child: child.component_name == form_name)
        schema: dict[str, Any] = {"type": "object", "properties": {}}
        if root is None:
            logger.debug("No %s node found, returning empty schema", form_name)
            return {"schema": schema}

        form = copy.deepcopy(root.props)
        self._build_schema(root, schema, is_root=True)
        logger.debug(
            "Converted form %s with %d top-level fields",
            root.id,
            len(schema.get("properties") or {}),
        )
        return {"form": form, "schema": schema}

    def _build_schema(
        self, node: TreeNode, schema: dict[str, Any] | None = None, is_root: bool = False
    ) -> dict[str, Any]:
        """Fill schema for node and recurse into its field children."""
        if schema is None:
            schema = {}
        if not is_root:
            schema.update(copy.deepcopy(node.props))
        schema[DESIGNABLE_ID_KEY] = node.id

        schema_type = schema.get("type")
        if schema_type == ARRAY_TYPE:
            children = node.children
            if children and self._is_field(children[0]):
                items = self._build_schema(children[0])
                items[INDEX_KEY] = 0
                schema["items"] = items
            self._add_properties(schema, children[1:])
        elif schema_type == OBJECT_TYPE:
            self._add_properties(schema, node.children)
        return schema

    def _add_properties(self, schema: dict[str, Any], children: list[TreeNode]) -> None:
        """Add field children as properties keyed by name, indexed from 0.

        Indices stay contiguous: a child whose key is already taken replaces
        that property in place and consumes no new index.
        """
        indices: dict[Any, int] = {}
        for child in children:
            if not self._is_field(child):
                continue
            key = child.props.get("name") or child.id
            if not isinstance(schema.get("properties"), dict):
                schema["properties"] = {}
            prop = self._build_schema(child)
            # Same name: the later field takes the slot of the earlier one
            prop[INDEX_KEY] = indices.setdefault(key, len(indices))
            schema["properties"][key] = prop

    def _is_field(self, node: TreeNode) -> bool:
        return node.component_name == self.options.designable_field_name


class SchemaToTreeConverter:
    """Convert a form schema document back to a design tree."""

    def __init__(self, options: TransformerOptions | Mapping[str, Any] | None = None):
        """Initialize converter with resolved options."""
        self.options = create_options(options)

    def convert(self, formily: FormilySchema | Mapping[str, Any] | None = None) -> TreeNode:
        """Convert ``{schema?, form?}`` to a tree rooted at a form node."""
        if formily is None:
            formily = FormilySchema()
        elif not isinstance(formily, FormilySchema):
            if not isinstance(formily, Mapping):
                raise TypeError(
                    f"Expected a form schema mapping, got {type(formily).__name__}"
                )
            formily = FormilySchema.model_validate(formily)

        schema = Schema(formily.schema_)
        root_fields: dict[str, Any] = {
            "component_name": self.options.designable_form_name,
            "props": copy.deepcopy(formily.form) if formily.form is not None else {},
        }
        if schema.designable_id:
            root_fields["id"] = str(schema.designable_id)
        root = TreeNode(**root_fields)

        for key, prop in schema.iter_properties():
            if not prop.designable_id:
                prop.designable_id = key
            self._append_tree_node(root, prop)

        logger.debug(
            "Converted schema to form %s with %d top-level fields",
            root.id,
            len(root.children),
        )
        return root

    def _append_tree_node(self, parent: TreeNode, schema: Schema) -> None:
        """Append a field node for schema under parent, then its items and properties."""
        fields: dict[str, Any] = {
            "component_name": self.options.designable_field_name,
            "props": self._clean_props(schema.to_json(recursion=False)),
        }
        if schema.designable_id:
            fields["id"] = str(schema.designable_id)
        current = TreeNode(**fields)
        parent.children.append(current)

        if isinstance(schema.items, Schema):
            self._append_tree_node(current, schema.items)
        for key, prop in schema.iter_properties():
            if not prop.designable_id:
                prop.designable_id = key
            self._append_tree_node(current, prop)

    @staticmethod
    def _clean_props(props: dict[str, Any]) -> dict[str, Any]:
        # _designableId and x-index stay visible to the editor
        props.pop(VERSION_KEY, None)
        props.pop(SCHEMA_OBJECT_MARKER, None)
        return props


def transform_to_schema(
    node: TreeNode | Mapping[str, Any],
    options: TransformerOptions | Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Convert a design tree to a ``{form, schema}`` document."""
    return TreeToSchemaConverter(options).convert(node)


def transform_to_tree_node(
    formily: FormilySchema | Mapping[str, Any] | None = None,
    options: TransformerOptions | Mapping[str, Any] | None = None,
) -> TreeNode:
    """Convert a ``{schema, form}`` document to a design tree."""
    return SchemaToTreeConverter(options).convert(formily)


def load_json_document(path: str | Path) -> dict[str, Any]:
    """Load a schema document or design tree from a JSON file."""
    with open(path) as f:
        return json.load(f)


def save_json_document(document: dict[str, Any], path: str | Path, indent: int = 2) -> None:
    """Save a schema document or design tree to a JSON file."""
    with open(path, "w") as f:
        json.dump(document, f, indent=indent)
