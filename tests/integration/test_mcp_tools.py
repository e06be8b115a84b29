"""Integration tests for MCP server helpers."""

import pytest
import json
from pathlib import Path
from typing import Dict, Any
from fastmcp.exceptions import ToolError

from designable_formily.config import ServerConfig
from designable_formily.mcp import server
from designable_formily.transformer import TransformerOptions, TreeNode


@pytest.fixture
def schemas_dir(tmp_path: Path, monkeypatch) -> Path:
    """Point the server at a temporary schemas directory."""
    monkeypatch.setattr(server, "config", ServerConfig(schemas_dir=tmp_path))
    return tmp_path


class TestValidatePath:
    """Test file access confinement."""

    def test_inside_base(self, schemas_dir: Path):
        """Test paths under the schemas directory are accepted."""
        path = server.validate_path(str(schemas_dir / "form.json"))

        assert path == (schemas_dir / "form.json").resolve()

    def test_outside_base(self, schemas_dir: Path):
        """Test paths outside the schemas directory are refused."""
        with pytest.raises(ToolError, match="Access denied"):
            server.validate_path(str(schemas_dir.parent / "elsewhere.json"))


class TestResolveOptions:
    """Test per-call option overrides."""

    def test_config_defaults(self, schemas_dir: Path):
        """Test configured markers are used without overrides."""
        options = server.resolve_options()

        assert options.designable_field_name == "DesignableField"
        assert options.designable_form_name == "DesignableForm"

    def test_configured_markers(self, monkeypatch, tmp_path: Path):
        """Test markers from the server config."""
        monkeypatch.setattr(
            server, "config", ServerConfig(schemas_dir=tmp_path, designable_field_name="Input")
        )

        assert server.resolve_options().designable_field_name == "Input"

    def test_overrides_win(self, schemas_dir: Path):
        """Test call overrides replace only the keys given."""
        options = server.resolve_options({"designableFormName": "MyForm"})

        assert options.designable_form_name == "MyForm"
        assert options.designable_field_name == "DesignableField"


class TestSchemaFiles:
    """Test reading and writing schema documents."""

    def test_read_schema_file(self, temp_schema_file: Path):
        """Test a schema document file becomes a design tree."""
        tree = server.read_schema_file(temp_schema_file, TransformerOptions())

        assert tree.component_name == "DesignableForm"
        assert [child.id for child in tree.children] == ["name_field", "tags_field"]

    def test_read_non_object_file(self, tmp_path: Path):
        """Test a JSON file that is not an object is refused."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(ToolError, match="Expected a JSON object"):
            server.read_schema_file(path, TransformerOptions())

    def test_write_schema_file(self, schemas_dir: Path, sample_tree: Dict[str, Any]):
        """Test a design tree is written as a schema document."""
        path = schemas_dir / "nested" / "contact.json"

        document = server.write_schema_file(sample_tree, path)

        assert path.exists()
        assert json.loads(path.read_text()) == document
        assert document["form"] == {"labelCol": 6, "wrapperCol": 12}

    def test_write_then_read(self, schemas_dir: Path, sample_tree: Dict[str, Any]):
        """Test files written by the server read back to the same form."""
        path = schemas_dir / "contact.json"

        server.write_schema_file(sample_tree, path)
        tree = server.read_schema_file(path)

        assert tree.id == "form"
        assert [child.id for child in tree.children] == [
            "name_field", "address_field", "contacts_field"
        ]


class TestTreeInfo:
    """Test design tree analysis."""

    def test_tree_info(self, sample_tree_node: TreeNode):
        """Test counts and field summaries."""
        info = server.tree_info(sample_tree_node, TransformerOptions())

        assert info["has_form"] is True
        assert info["form_id"] == "form"
        assert info["node_count"] == 12
        assert info["field_count"] == 9
        assert info["depth"] == 5
        assert info["fields"][0] == {
            "id": "name_field",
            "name": "username",
            "type": "string",
            "child_count": 0,
        }

    def test_tree_info_without_form(self):
        """Test a tree with no form root."""
        info = server.tree_info(TreeNode(id="root", component_name="Root"), TransformerOptions())

        assert info["has_form"] is False
        assert info["form_id"] is None
        assert info["field_count"] == 0


def tool_function(tool):
    """Unwrap a registered tool to its plain function."""
    return getattr(tool, "fn", tool)


class TestFileTools:
    """Test the async file tools with a mock context."""

    @pytest.mark.asyncio
    async def test_read_schema(self, schemas_dir: Path, sample_document: Dict[str, Any], mock_context):
        """Test reading a schema document returns a design tree."""
        path = schemas_dir / "contact.json"
        path.write_text(json.dumps(sample_document))

        tree = await tool_function(server.read_schema)(mock_context, str(path))

        assert tree["componentName"] == "DesignableForm"
        assert [child["id"] for child in tree["children"]] == ["name_field", "tags_field"]
        assert mock_context.messages[0] == ("info", f"Reading schema from {path}")

    @pytest.mark.asyncio
    async def test_read_schema_missing(self, schemas_dir: Path, mock_context):
        """Test a missing file raises a tool error."""
        with pytest.raises(ToolError, match="File not found"):
            await tool_function(server.read_schema)(mock_context, str(schemas_dir / "missing.json"))

    @pytest.mark.asyncio
    async def test_read_schema_invalid_json(self, schemas_dir: Path, mock_context):
        """Test a broken file raises a tool error."""
        path = schemas_dir / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ToolError, match="Invalid JSON"):
            await tool_function(server.read_schema)(mock_context, str(path))

    @pytest.mark.asyncio
    async def test_write_schema(self, schemas_dir: Path, sample_tree: Dict[str, Any], mock_context):
        """Test writing a design tree reports the written file."""
        path = schemas_dir / "contact.json"

        status = await tool_function(server.write_schema)(mock_context, str(path), sample_tree)

        assert status["status"] == "success"
        assert status["has_form"] is True
        assert status["size"] == path.stat().st_size


class TestConversionTools:
    """Test the synchronous conversion tools."""

    def test_convert_tree_to_schema(self, schemas_dir: Path, sample_tree: Dict[str, Any]):
        """Test tree conversion through the tool."""
        document = tool_function(server.convert_tree_to_schema)(sample_tree)

        assert list(document["schema"]["properties"]) == ["username", "address", "contacts"]

    def test_convert_schema_to_tree(self, schemas_dir: Path, sample_document: Dict[str, Any]):
        """Test schema conversion through the tool."""
        tree = tool_function(server.convert_schema_to_tree)(sample_document, {"designableFieldName": "Input"})

        assert {child["componentName"] for child in tree["children"]} == {"Input"}

    def test_get_tree_info_invalid(self, schemas_dir: Path):
        """Test malformed trees raise a tool error."""
        with pytest.raises(ToolError, match="Error analyzing tree"):
            tool_function(server.get_tree_info)({"children": "oops"})

    def test_list_schemas(self, schemas_dir: Path):
        """Test listing finds JSON documents only."""
        (schemas_dir / "b.json").write_text("{}")
        (schemas_dir / "a.json").write_text("{}")
        (schemas_dir / "notes.txt").write_text("ignored")

        schemas = tool_function(server.list_schemas)()

        assert [entry["name"] for entry in schemas] == ["a.json", "b.json"]
