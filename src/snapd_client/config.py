"""Centralized client configuration."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_DATA_DIR = Path.home() / ".local" / "snapd-client"
DEFAULT_SOCKET_PATH = Path("/run/snapd.socket")


class Config(BaseModel):
    """Client-wide configuration."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Base directory for client data (config and log)")
    socket_path: Path = Field(default=DEFAULT_SOCKET_PATH, description="Unix domain socket of the daemon")
    base_url: str = Field(default="http://localhost", description="Base URL requests are addressed to")
    timeout: float = Field(default=30.0, gt=0, description="Transport timeout in seconds")

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "client.log"

    @staticmethod
    def build(data_dir: Path | None = None, socket_path: Path | None = None) -> "Config":
        """Build a Config from defaults, optional config.toml and explicit overrides."""
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            if isinstance(toml_data.get("socket_path"), str):
                kwargs["socket_path"] = Path(toml_data["socket_path"])
            if isinstance(toml_data.get("base_url"), str):
                kwargs["base_url"] = toml_data["base_url"]
            if isinstance(toml_data.get("timeout"), int | float):
                kwargs["timeout"] = toml_data["timeout"]
        if socket_path is not None:
            kwargs["socket_path"] = socket_path

        return Config(**kwargs)
