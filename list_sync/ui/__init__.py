"""Слой отображения."""

from .console import ConsoleRenderer, format_table
from .renderer import MessageBoard, Renderer

__all__ = ["Renderer", "MessageBoard", "ConsoleRenderer", "format_table"]
