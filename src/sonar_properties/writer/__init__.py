"""Properties-file text generation."""

from __future__ import annotations

from .escaping import encode_multi_value, escape
from .properties_writer import PropertiesWriter, WriterState, WriterStateError

__all__ = [
    "PropertiesWriter",
    "WriterState",
    "WriterStateError",
    "encode_multi_value",
    "escape",
]
