"""Flow file loader."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

_EXTENSIONS = (".yaml", ".yml", ".json")


class FlowLoadError(ValueError):
    """Raised when a flow file exists but cannot be parsed."""


class FlowLoader:
    """Loads raw flow payloads from a directory of YAML or JSON files.

    Payloads are returned unvalidated; the linter reports on their shape.
    """

    def __init__(self, flow_dir: str | Path):
        self.flow_dir = Path(flow_dir).expanduser().resolve()

    def resolve(self, flow_key: str) -> Path:
        for extension in _EXTENSIONS:
            file_path = self.flow_dir / f"{flow_key}{extension}"
            if file_path.exists():
                return file_path
        raise FileNotFoundError(f"Flow definition not found for '{flow_key}' in {self.flow_dir}")

    def load(self, flow_key: str) -> Any:
        return self.load_path(self.resolve(flow_key))

    def load_path(self, path: str | Path) -> Any:
        file_path = Path(path).expanduser().resolve()
        if not file_path.exists():
            raise FileNotFoundError(f"Flow file not found at {file_path}")

        with file_path.open("r", encoding="utf-8") as handle:
            try:
                if file_path.suffix == ".json":
                    return json.load(handle)
                return yaml.safe_load(handle)
            except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
                raise FlowLoadError(f"could not parse flow file {file_path}: {exc}") from exc
