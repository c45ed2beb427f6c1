"""Configuration manager for loading and saving trace settings."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .models import TraceConfig

console = Console()

# Default config location
CONFIG_DIR = Path.home() / ".api-tracer"
CONFIG_FILE = "config.json"


def get_default_config_path() -> Path:
    return CONFIG_DIR / CONFIG_FILE


def load_config(path: Optional[Union[str, Path]] = None) -> Optional[TraceConfig]:
    """Load a configuration file.

    With no path, the default file is used when it exists and built-in
    defaults otherwise. The file holds either a bare settings object or the
    ``{"config": {...}}`` envelope written by :func:`save_config`.
    Returns None if the file is missing or invalid.
    """
    if path is None:
        path = get_default_config_path()
        if not path.exists():
            return TraceConfig()

    config_path = Path(path)
    if not config_path.exists():
        console.print(f"[red]✗[/] Config file not found: [bold]{config_path}[/]")
        return None

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        config_data = data.get("config", data) if isinstance(data, dict) else data
        config = TraceConfig.model_validate(config_data)
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[red]✗[/] Error loading config: {escape(str(e))}")
        return None

    console.print(f"[green]✓[/] Config loaded: [bold]{config_path}[/]")
    return config


def save_config(config: TraceConfig, path: Optional[Union[str, Path]] = None) -> Path:
    """Save a configuration so the classifier lists can be edited by hand."""
    config_path = Path(path) if path else get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = {
        "updated_at": datetime.now().isoformat(),
        "config": config.model_dump(mode="json"),
    }

    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_dict, f, indent=2)

    console.print(f"[green]✓[/] Config saved: [bold]{config_path}[/]")
    return config_path
