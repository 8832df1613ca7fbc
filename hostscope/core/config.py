"""
Configuration management.
"""

from pathlib import Path
from datetime import datetime
from typing import Any, Literal, Optional
import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILE_NAME = ".hostscope.yaml"


def load_config_file(search_dirs: Optional[list] = None) -> dict[str, Any]:
    """
    Load optional config from ~/.hostscope.yaml or ./.hostscope.yaml.
    The first file found wins. Returns only the keys present, converted,
    so callers can fall back to their own defaults.
    """
    import yaml

    result: dict[str, Any] = {}
    dirs = search_dirs if search_dirs is not None else [Path.home(), Path.cwd()]
    raw: dict[str, Any] = {}
    for directory in dirs:
        path = Path(directory) / CONFIG_FILE_NAME
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    raw = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError):
                raw = {}
            break
    if not isinstance(raw, dict) or not raw:
        return result
    if "output_dir" in raw:
        result["output_dir"] = Path(raw["output_dir"]).expanduser().resolve()
    if "verbose" in raw:
        result["verbose"] = bool(raw["verbose"])
    for key, cast in (("timeout", float), ("deadline", float), ("workers", int)):
        if key in raw:
            try:
                result[key] = cast(raw[key])
            except (TypeError, ValueError):
                pass
    if raw.get("elevate") in ("auto", "never"):
        result["elevate"] = raw["elevate"]
    if raw.get("format") in ("rich", "text", "json", "html"):
        result["format"] = raw["format"]
    return result


class AppConfig(BaseSettings):
    """Application configuration; environment variables use the HOSTSCOPE_ prefix."""

    model_config = SettingsConfigDict(env_prefix="HOSTSCOPE_", arbitrary_types_allowed=True)

    output_dir: Path = Field(default=Path("output"))
    verbose: bool = False
    timeout: float = Field(default=30.0, gt=0)
    deadline: Optional[float] = Field(default=600.0, gt=0)
    workers: int = Field(default=1, ge=1, le=32)
    elevate: Literal["auto", "never"] = "auto"
    format: Literal["rich", "text", "json", "html"] = "rich"

    @field_validator("output_dir", mode="before")
    @classmethod
    def validate_output_dir(cls, v):
        """Validate and convert output_dir to Path."""
        if v is None:
            return Path("output")
        if isinstance(v, str):
            return Path(v)
        if isinstance(v, Path):
            return v
        return Path("output")

    def model_post_init(self, __context):
        """Resolve the output directory to an absolute path."""
        self.output_dir = self.output_dir.expanduser().resolve()

    @classmethod
    def load(cls, **overrides) -> "AppConfig":
        """Build config from file values, then explicit overrides (None is ignored)."""
        values = load_config_file()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def create_run_dir(self, name: str = "snapshot") -> Path:
        """Create a timestamped directory for a saved snapshot."""
        timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
        run_dir = self.output_dir / f"{timestamp}_{name}"
        run_dir.mkdir(parents=True, exist_ok=True)
        return run_dir

    def save_metadata(self, run_dir: Path, metadata: dict):
        """Save run metadata to JSON file."""
        metadata_file = run_dir / "metadata.json"

        # Add timestamp
        metadata["timestamp"] = datetime.now().isoformat()

        with open(metadata_file, "w") as f:
            json.dump(metadata, f, indent=2, default=str)
