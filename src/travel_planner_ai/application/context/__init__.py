"""Prompt context composition."""

from .base_provider import BaseContextProvider
from .composer import ContextComposer

__all__ = ["BaseContextProvider", "ContextComposer"]
