"""FastAPI HTTP API for design tree / form schema conversion."""

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from typing import Any

from .converter import transform_to_schema, transform_to_tree_node
from .options import TransformerOptions


app = FastAPI(
    title="Designable Formily API",
    description="Convert between Designable editor trees and Formily form schemas",
    version="0.1.0",
)


# Request/Response models
class TreeToSchemaRequest(BaseModel):
    """Request to convert a design tree to a form schema."""
    tree: dict[str, Any] = Field(..., description="Design tree in JSON form")
    options: TransformerOptions | None = Field(None, description="Component name overrides")


class TreeToSchemaResponse(BaseModel):
    """Response containing the form schema document."""
    model_config = ConfigDict(populate_by_name=True)

    schema_: dict[str, Any] = Field(..., alias="schema", description="Form schema")
    form: dict[str, Any] | None = Field(None, description="Form-level props")


class SchemaToTreeRequest(BaseModel):
    """Request to convert a form schema document to a design tree."""
    model_config = ConfigDict(populate_by_name=True)

    schema_: dict[str, Any] | None = Field(None, alias="schema", description="Form schema")
    form: dict[str, Any] | None = Field(None, description="Form-level props")
    options: TransformerOptions | None = Field(None, description="Component name overrides")


class SchemaToTreeResponse(BaseModel):
    """Response containing the design tree."""
    tree: dict[str, Any] = Field(..., description="Design tree in JSON form")


# Endpoints
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Designable Formily API",
        "version": "0.1.0",
        "endpoints": {
            "transformToSchema": "POST /transformToSchema - Convert design tree to form schema",
            "transformToTreeNode": "POST /transformToTreeNode - Convert form schema to design tree",
        },
    }


@app.post(
    "/transformToSchema",
    response_model=TreeToSchemaResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def tree_to_schema(request: TreeToSchemaRequest):
    """Convert a design tree to ``{schema, form}``."""
    try:
        result = transform_to_schema(request.tree, request.options)
        return TreeToSchemaResponse.model_validate(result)

    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to convert tree: {str(e)}")


@app.post("/transformToTreeNode", response_model=SchemaToTreeResponse)
async def schema_to_tree(request: SchemaToTreeRequest):
    """Convert ``{schema, form}`` to a design tree."""
    try:
        document = {"schema": request.schema_, "form": request.form}
        tree = transform_to_tree_node(document, request.options)
        return SchemaToTreeResponse(tree=tree.to_dict())

    except Exception as e:
        raise HTTPException(
            status_code=400, detail=f"Failed to convert schema: {str(e)}"
        )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
