"""Source-to-model conversion."""

from .converter import Converter, ConverterEvent

__all__ = ["Converter", "ConverterEvent"]
