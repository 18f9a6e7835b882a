"""Configuration models and config-file loaders."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path("config") / "default.json"

MatchingStrategyName = Literal["selector", "similarity"]


class ViewportConfig(BaseModel):
    width: int = 1920
    height: int = 1080


class BrowserConfig(BaseModel):
    headless: bool = True
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)


class CssConfig(BaseModel):
    use_important: bool = False


class DiffConfig(BaseModel):
    # Properties compared when none are given on the command line
    default_properties: list[str] = Field(default_factory=list)

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    css: CssConfig = Field(default_factory=CssConfig)

    # Page load timeout, passed to the renderer
    timeout_ms: int = 30000

    matching_strategy: MatchingStrategyName = "selector"

    @classmethod
    def load(cls, path: str | Path) -> "DiffConfig":
        """Load config from a JSON or YAML file."""
        data = load_config_file(path)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return cls(**data)

    @classmethod
    def load_default(cls, path: str | Path = DEFAULT_CONFIG_PATH) -> "DiffConfig":
        """Load the project default config if present, otherwise built-in defaults."""
        if Path(path).exists():
            return cls.load(path)
        return cls()

    def save(self, path: str | Path) -> None:
        """Save config as JSON or YAML, by file extension."""
        path = Path(path)
        ext = path.suffix.lower()
        if ext not in (".json", ".yaml", ".yml"):
            raise ValueError(f"Unsupported config file format: {ext or '(none)'}")
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            if ext == ".json":
                json.dump(self.model_dump(), f, indent=2)
            else:
                yaml.safe_dump(self.model_dump(), f, sort_keys=False)


def load_config_file(path: str | Path) -> Any:
    """Parse a JSON or YAML document, dispatching on the file extension."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    ext = path.suffix.lower()
    if ext not in (".json", ".yaml", ".yml"):
        raise ValueError(f"Unsupported config file format: {ext or '(none)'}")

    with open(path, encoding="utf-8") as f:
        if ext == ".json":
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Failed to read JSON file at {path}: {e}") from e
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to read YAML file at {path}: {e}") from e


def load_selectors(path: str | Path) -> list[str]:
    """Load a selector list: either a bare list or an object with a ``selectors`` list."""
    data = load_config_file(path)

    if isinstance(data, dict) and isinstance(data.get("selectors"), list):
        selectors = data["selectors"]
    elif isinstance(data, list):
        selectors = data
    else:
        raise ValueError(
            "Invalid selectors config format. "
            'Expected array or object with "selectors" property.'
        )

    bad = [s for s in selectors if not isinstance(s, str)]
    if bad:
        raise ValueError(f"Selectors must be strings, got: {bad!r}")
    return selectors


def parse_csv_list(raw: str | None) -> list[str]:
    """Split a comma-separated CLI value, dropping empty entries."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]
