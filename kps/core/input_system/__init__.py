"""
Input system module for handling user interactions.

This module maps raw key presses to game actions through
context-aware, YAML-configurable key bindings.
"""

from .context_manager import InputContextManager, InputContext
from .key_config_loader import KeyConfigLoader

__all__ = [
    'InputContextManager',
    'InputContext',
    'KeyConfigLoader'
]
