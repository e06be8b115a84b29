"""Transformer options and their defaults."""

from typing import Any, Mapping
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_FIELD_NAME = "DesignableField"
DEFAULT_FORM_NAME = "DesignableForm"


class TransformerOptions(BaseModel):
    """Component names marking form roots and fields in a design tree."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    designable_field_name: str = Field(DEFAULT_FIELD_NAME, alias="designableFieldName")
    designable_form_name: str = Field(DEFAULT_FORM_NAME, alias="designableFormName")
    # Accepted for symmetry, not read by the converters yet
    schema_field_name: str | None = Field(None, alias="schemaFieldName")
    schema_form_name: str | None = Field(None, alias="schemaFormName")


def create_options(
    options: TransformerOptions | Mapping[str, Any] | None = None,
) -> TransformerOptions:
    """Fill in defaults for any option the caller left unset."""
    if options is None:
        return TransformerOptions()
    if isinstance(options, TransformerOptions):
        return options.model_copy()
    overrides = {key: value for key, value in options.items() if value is not None}
    return TransformerOptions.model_validate(overrides)
