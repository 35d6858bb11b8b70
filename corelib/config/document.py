"""
Hierarchical document - a tree of string-keyed nodes backed by YAML.

Paths address nodes with '.'-joined segments. Writing creates intermediate
nodes; writing None removes the leaf.

Usage:
    doc = Document.load(Path("plugins/Demo/config.yml"), defaults={"options": {"debug": False}})
    doc.set("options.debug", True)
    doc.save(Path("plugins/Demo/config.yml"), header="Demo settings")
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from corelib.errors import ConfigError


SEPARATOR = "."

logger = logging.getLogger(__name__)


def _normalize(node: Any) -> Any:
    """Stringify mapping keys recursively."""
    if isinstance(node, dict):
        return {str(k): _normalize(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_normalize(v) for v in node]
    return node


def _merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge overlay into base (in place)."""
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class Document:
    """
    In-memory YAML tree.

    Attributes:
        root: The top-level mapping
    """

    def __init__(
        self,
        data: dict[str, Any] | None = None,
        defaults: dict[str, Any] | None = None,
    ):
        self.root: dict[str, Any] = copy.deepcopy(_normalize(defaults)) if defaults else {}
        if data:
            _merge(self.root, _normalize(data))

    # Loading / saving

    @classmethod
    def load(cls, file: Path, defaults: dict[str, Any] | None = None) -> Document:
        """
        Load a document from disk, overlaid on defaults.

        A missing or empty file yields the defaults alone.

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML
                or is not a mapping
        """
        file = Path(file)
        if not file.exists():
            return cls(defaults=defaults)

        try:
            with open(file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Could not read {file}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"{file} must contain a mapping, got {type(data).__name__}")

        return cls(data, defaults)

    @staticmethod
    def load_header(file: Path) -> str | None:
        """
        Read the leading comment block of a file, if any.

        Raises:
            ConfigError: If the file cannot be read
        """
        file = Path(file)
        if not file.exists():
            return None

        lines = []
        try:
            with open(file, 'r', encoding='utf-8') as f:
                for line in f:
                    if not line.startswith("#"):
                        break
                    lines.append(line[1:].rstrip("\n").removeprefix(" "))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Could not read {file}: {e}") from e

        return "\n".join(lines) if lines else None

    def dump(self, header: str | None = None) -> str:
        """Serialize to YAML text, with an optional comment header."""
        text = ""
        if header is not None:
            text = "".join(f"# {line}".rstrip() + "\n" for line in header.splitlines())
            text += "\n"
        if self.root:
            text += yaml.safe_dump(self.root, sort_keys=False, allow_unicode=True)
        return text

    def save(self, file: Path, header: str | None = None) -> None:
        """
        Write the document to disk.

        Raises:
            OSError: If the file cannot be written
            yaml.YAMLError: If a stored value is not representable
        """
        file = Path(file)
        text = self.dump(header)
        file.parent.mkdir(parents=True, exist_ok=True)
        with open(file, 'w', encoding='utf-8') as f:
            f.write(text)

    # Path access

    def _walk(self, path: str) -> tuple[dict[str, Any] | None, str]:
        """Resolve the parent node of a path without creating anything."""
        *parents, leaf = path.split(SEPARATOR)
        node: Any = self.root
        for segment in parents:
            if not isinstance(node, dict):
                return None, leaf
            node = node.get(segment)
        if not isinstance(node, dict):
            return None, leaf
        return node, leaf

    def contains(self, path: str) -> bool:
        parent, leaf = self._walk(path)
        return parent is not None and leaf in parent

    def get(self, path: str, default: Any = None) -> Any:
        parent, leaf = self._walk(path)
        if parent is None:
            return default
        return parent.get(leaf, default)

    def set(self, path: str, value: Any) -> None:
        """Set a value, creating intermediate nodes. None removes the entry."""
        if value is None:
            parent, leaf = self._walk(path)
            if parent is not None:
                parent.pop(leaf, None)
            return

        *parents, leaf = path.split(SEPARATOR)
        node = self.root
        for segment in parents:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[leaf] = value

    def section(self, path: str) -> dict[str, Any] | None:
        """Get the mapping at a path, or None if it is not a mapping."""
        value = self.get(path)
        return value if isinstance(value, dict) else None

    def keys(self, path: str | None = None) -> set[str]:
        """Immediate child keys of the root, or of the mapping at path."""
        node = self.root if path is None else self.section(path)
        return set(node) if node is not None else set()

    # Native coercion

    def get_string(self, path: str) -> str | None:
        value = self.get(path)
        if value is None or isinstance(value, dict):
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_int(self, path: str) -> int:
        value = self.get(path)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return int(value)
        return 0

    def get_double(self, path: str) -> float:
        value = self.get(path)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return 0.0

    def get_boolean(self, path: str) -> bool:
        value = self.get(path)
        return value if isinstance(value, bool) else False

    def get_string_list(self, path: str) -> list[str]:
        value = self.get(path)
        if not isinstance(value, list):
            return []
        return [
            str(v) for v in value
            if v is not None and not isinstance(v, (dict, list))
        ]

    def get_int_list(self, path: str) -> list[int]:
        """Integers in the list at path; unparsable entries are skipped."""
        value = self.get(path)
        if not isinstance(value, list):
            return []

        result = []
        for v in value:
            if isinstance(v, bool):
                continue
            if isinstance(v, (int, float)):
                result.append(int(v))
            elif isinstance(v, str):
                try:
                    result.append(int(v.strip()))
                except ValueError:
                    logger.debug(f"Skipping non-integer list entry {v!r} at {path}")
        return result
