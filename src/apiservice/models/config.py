"""Pydantic configuration models for apiservice."""

import os
import re
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://api.example.com"
DEFAULT_REQUEST_TIMEOUT = 5.0

ENV_PREFIX = "APISERVICE_"


def _expand_env_var(value: Optional[str]) -> Optional[str]:
    """Expand environment variable references in a string.

    Supports $VAR and ${VAR} syntax. Returns original value if
    the env var is not set.
    """
    if value is None:
        return None

    # Match $VAR or ${VAR}
    pattern = r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)"

    def replace(match: re.Match) -> str:
        var_name = match.group(1) or match.group(2)
        return os.environ.get(var_name, match.group(0))

    return re.sub(pattern, replace, value)


class ServiceConfig(BaseModel):
    """
    Configuration for an APIService.

    Holds what would otherwise be process-wide state (the backend domain and
    logging setup) so it can be passed explicitly at construction.

    Example:
        config = ServiceConfig(base_url="https://api.example.com", token="$API_TOKEN")
        service = APIService.from_config(config)

    YAML format:
        base_url: https://api.example.com
        token: ${API_TOKEN}
        request_timeout: 5
        log_level: DEBUG
    """

    base_url: str = Field(DEFAULT_BASE_URL, description="Base URL that endpoint paths resolve against")
    token: Optional[str] = Field(None, description="Bearer token; $VAR and ${VAR} are expanded")
    request_timeout: float = Field(
        DEFAULT_REQUEST_TIMEOUT,
        gt=0,
        description="Connect and total transfer timeout in seconds",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def model_post_init(self, __context: object) -> None:
        """Expand environment variables in the token after init."""
        if self.token:
            object.__setattr__(self, "token", _expand_env_var(self.token))

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Create config from APISERVICE_* environment variables (evaluated at call time)."""
        data: dict[str, str] = {}
        for field_name, env_name in (
            ("base_url", "BASE_URL"),
            ("token", "TOKEN"),
            ("request_timeout", "TIMEOUT"),
            ("log_level", "LOG_LEVEL"),
            ("log_file", "LOG_FILE"),
        ):
            value = os.getenv(ENV_PREFIX + env_name)
            if value:
                data[field_name] = value.upper() if field_name == "log_level" else value
        return cls.model_validate(data)

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ServiceConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ServiceConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
