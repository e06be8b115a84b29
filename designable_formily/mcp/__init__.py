"""MCP Server package for Designable form schema management.

This package provides a Model Context Protocol (MCP) server that exposes
design tree / form schema conversion to AI agents.

File Operations:
    - read_schema: Read a schema document, return it as a design tree
    - write_schema: Write a design tree as a schema document
    - list_schemas: Discover schema files

Conversion Operations:
    - convert_tree_to_schema: Design tree to ``{schema, form}``
    - convert_schema_to_tree: ``{schema, form}`` to design tree
    - get_tree_info: Analyze design tree structure

Example:
    Start the MCP server:

    >>> from designable_formily.mcp.server import mcp
    >>> if __name__ == "__main__":
    ...     mcp.run()
"""

from .server import mcp, main

__all__ = [
    "mcp",
    "main",
]
