"""
Config module - typed settings files.

Provides:
- Config: typed store over a YAML document
- Document: the YAML tree itself
- Codec, CodecRegistry: value marshalling for rich types
"""

from corelib.config.document import Document
from corelib.config.codecs import Codec, CodecRegistry, default_registry
from corelib.config.store import Config

__all__ = [
    "Config",
    "Document",
    "Codec",
    "CodecRegistry",
    "default_registry",
]
