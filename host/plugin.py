"""
Plugin context - the identity configs and protection modules belong to.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


PLUGINS_DIR = "plugins"


@dataclass
class Plugin:
    """
    A loaded plugin.

    Attributes:
        name: Plugin name
        base_dir: Server root directory
        defaults: Compiled-in defaults for config.yml
    """
    name: str
    base_dir: Path = field(default_factory=Path)
    defaults: dict[str, Any] = field(default_factory=dict)
    logger: logging.Logger = field(init=False)

    def __post_init__(self):
        self.base_dir = Path(self.base_dir)
        self.logger = logging.getLogger(f"plugins.{self.name}")

    @property
    def data_folder(self) -> Path:
        """Directory holding this plugin's files."""
        return self.base_dir / PLUGINS_DIR / self.name.replace(" ", "_")

    def get_defaults(self) -> dict[str, Any]:
        return copy.deepcopy(self.defaults)
