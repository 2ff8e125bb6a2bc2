"""Configuration for the edit tools.

Configuration is loaded and merged with precedence:
1. Environment variables (highest)
2. Project config (.patchrunner/config.json)
3. User profile (~/.patchrunner/profiles/<name>.json)
4. Defaults (lowest)
"""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from patchrunner.core.exceptions import ConfigurationError

DEFAULT_MAX_FILE_BYTES = 10 * 1024 * 1024


@dataclass
class EditConfig:
    """Limits and I/O settings applied by the edit tools.

    The patch engine itself is configuration-free; these settings govern the
    tool layer around it (how many operations a call may carry, how files are
    read and written, what the result includes).
    """

    max_edits: int = 50
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    encoding: str = "utf-8"
    include_diff: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_edits < 1:
            raise ConfigurationError(
                f"max_edits must be >= 1, got {self.max_edits}", key="max_edits"
            )
        if self.max_file_bytes < 1:
            raise ConfigurationError(
                f"max_file_bytes must be >= 1, got {self.max_file_bytes}",
                key="max_file_bytes",
            )
        try:
            "".encode(self.encoding)
        except LookupError as e:
            raise ConfigurationError(
                f"Unknown encoding: {self.encoding}", key="encoding", reason="lookup"
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditConfig":
        """Create config from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def _load_json_config(path: Path, label: str) -> EditConfig:
    try:
        with path.open() as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {label}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to load {label}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a JSON object in {label}")
    return EditConfig.from_dict(data)


def load_user_config(profile_name: str = "default") -> EditConfig:
    """Load user configuration from ~/.patchrunner/profiles/<name>.json.

    Args:
        profile_name: Name of profile to load (default: "default")

    Returns:
        EditConfig loaded from profile, or default config if not found

    Raises:
        ConfigurationError: If profile file is invalid
    """
    profile_path = Path.home() / ".patchrunner" / "profiles" / f"{profile_name}.json"

    if not profile_path.exists():
        return EditConfig()

    return _load_json_config(profile_path, f"profile {profile_name}")


def load_project_config(project_root: Path | None = None) -> EditConfig | None:
    """Load project-specific configuration from .patchrunner/config.json.

    Args:
        project_root: Directory containing .patchrunner/ (default: current directory)

    Returns:
        EditConfig if config file exists, None otherwise
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = project_root / ".patchrunner" / "config.json"

    if not config_path.exists():
        return None

    return _load_json_config(config_path, "project config")


def load_env_overrides() -> dict[str, Any]:
    """Load configuration overrides from environment variables.

    Supported environment variables:
    - PATCHRUNNER_MAX_EDITS: Maximum operations per edit call
    - PATCHRUNNER_MAX_FILE_BYTES: Largest file the tools will read
    - PATCHRUNNER_ENCODING: Text encoding for reading and writing files

    Returns:
        Dictionary of configuration overrides
    """
    overrides: dict[str, Any] = {}

    for env_name, key in (
        ("PATCHRUNNER_MAX_EDITS", "max_edits"),
        ("PATCHRUNNER_MAX_FILE_BYTES", "max_file_bytes"),
    ):
        if raw := os.getenv(env_name):
            try:
                overrides[key] = int(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {env_name}: {raw}", key=key) from e

    if encoding := os.getenv("PATCHRUNNER_ENCODING"):
        overrides["encoding"] = encoding

    return overrides


def merge_configs(
    base: EditConfig,
    project: EditConfig | None = None,
    env_overrides: dict[str, Any] | None = None,
) -> EditConfig:
    """Merge configurations with precedence: env > project > base.

    Project values only override the base when they differ from the defaults.
    """
    merged = base.to_dict()
    defaults = EditConfig().to_dict()

    if project:
        for key, value in project.to_dict().items():
            if value != defaults.get(key):
                merged[key] = value

    if env_overrides:
        merged.update(env_overrides)

    return EditConfig.from_dict(merged)


def load_config(profile_name: str = "default", project_root: Path | None = None) -> EditConfig:
    """Load and merge all configuration sources.

    Raises:
        ConfigurationError: If any config source is invalid
    """
    return merge_configs(
        load_user_config(profile_name),
        load_project_config(project_root),
        load_env_overrides(),
    )
