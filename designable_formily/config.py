"""Configuration for the conversion server."""

from dataclasses import dataclass
from typing import Optional
from pathlib import Path
import os

from .transformer.options import (
    DEFAULT_FIELD_NAME,
    DEFAULT_FORM_NAME,
    TransformerOptions,
)


@dataclass
class ServerConfig:
    """Configuration for the MCP conversion server."""

    # Directory that file tools may read from and write to
    schemas_dir: Optional[Path] = None

    # Component names marking fields and form roots in design trees
    designable_field_name: str = DEFAULT_FIELD_NAME
    designable_form_name: str = DEFAULT_FORM_NAME

    # Output settings
    json_indent: int = 2
    log_level: str = "INFO"

    def __post_init__(self):
        """Initialize default values that depend on runtime."""
        if self.schemas_dir is None:
            self.schemas_dir = Path.cwd() / "schemas"
        else:
            self.schemas_dir = Path(self.schemas_dir)

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Create configuration from environment variables."""
        schemas_dir = os.getenv("DESIGNABLE_SCHEMAS_DIR")
        return cls(
            schemas_dir=Path(schemas_dir) if schemas_dir else None,
            designable_field_name=os.getenv("DESIGNABLE_FIELD_NAME", DEFAULT_FIELD_NAME),
            designable_form_name=os.getenv("DESIGNABLE_FORM_NAME", DEFAULT_FORM_NAME),
            json_indent=int(os.getenv("DESIGNABLE_JSON_INDENT", "2")),
            log_level=os.getenv("DESIGNABLE_LOG_LEVEL", "INFO").upper(),
        )

    def transformer_options(self) -> TransformerOptions:
        """Build converter options from the configured component names."""
        return TransformerOptions(
            designable_field_name=self.designable_field_name,
            designable_form_name=self.designable_form_name,
        )


def get_config() -> ServerConfig:
    """Get the current server configuration."""
    return ServerConfig.from_env()
