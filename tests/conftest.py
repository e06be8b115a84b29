"""Pytest configuration and shared fixtures."""

import pytest
import json
from pathlib import Path
from typing import Dict, Any

from designable_formily.transformer import (
    SchemaToTreeConverter,
    TreeNode,
    TreeToSchemaConverter,
)


def field(node_id: str, children=None, **props) -> Dict[str, Any]:
    """Build a field node in JSON form."""
    return {
        "id": node_id,
        "componentName": "DesignableField",
        "props": props,
        "children": children or [],
    }


@pytest.fixture
def sample_tree() -> Dict[str, Any]:
    """Sample editor tree: workspace root wrapping a form."""
    return {
        "id": "root",
        "componentName": "Root",
        "props": {},
        "children": [
            {
                "id": "form",
                "componentName": "DesignableForm",
                "props": {"labelCol": 6, "wrapperCol": 12},
                "children": [
                    field("name_field", name="username", type="string", title="User Name"),
                    {
                        "id": "divider",
                        "componentName": "Divider",
                        "props": {},
                        "children": [],
                    },
                    field(
                        "address_field",
                        [
                            field("city_field", name="city", type="string"),
                            field("zip_field", name="zip", type="number"),
                        ],
                        name="address",
                        type="object",
                    ),
                    field(
                        "contacts_field",
                        [
                            field(
                                "contact_item",
                                [field("phone_field", name="phone", type="string")],
                                type="object",
                            ),
                            field("add_button", name="add", type="void"),
                            field("remove_button", name="remove", type="void"),
                        ],
                        name="contacts",
                        type="array",
                    ),
                ],
            }
        ],
    }


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    """Sample persisted form schema document."""
    return {
        "form": {"labelCol": 6},
        "schema": {
            "type": "object",
            "_designableId": "form",
            "properties": {
                "username": {
                    "type": "string",
                    "title": "User Name",
                    "_designableId": "name_field",
                    "x-index": 0,
                },
                "tags": {
                    "type": "array",
                    "_designableId": "tags_field",
                    "x-index": 1,
                    "items": {
                        "type": "string",
                        "_designableId": "tag_item",
                        "x-index": 0,
                    },
                },
            },
        },
    }


@pytest.fixture
def sample_tree_node(sample_tree: Dict[str, Any]) -> TreeNode:
    """Sample editor tree as a TreeNode."""
    return TreeNode.from_dict(sample_tree)


@pytest.fixture
def tree_to_schema_converter() -> TreeToSchemaConverter:
    """Design tree to form schema converter instance."""
    return TreeToSchemaConverter()


@pytest.fixture
def schema_to_tree_converter() -> SchemaToTreeConverter:
    """Form schema to design tree converter instance."""
    return SchemaToTreeConverter()


@pytest.fixture
def temp_schema_file(tmp_path: Path, sample_document: Dict[str, Any]) -> Path:
    """Create a temporary schema document file."""
    schema_file = tmp_path / "contact.json"
    schema_file.write_text(json.dumps(sample_document, indent=2))
    return schema_file


class MockContext:
    """Mock MCP context for testing."""

    def __init__(self):
        self.messages = []

    async def info(self, message: str):
        """Mock info method."""
        self.messages.append(("info", message))

    async def error(self, message: str):
        """Mock error method."""
        self.messages.append(("error", message))


@pytest.fixture
def mock_context() -> MockContext:
    """Mock MCP context for testing tools."""
    return MockContext()
