"""
Basic test fixtures for the KPS test suite.

Provides fresh game state, event bus and key configuration fixtures.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from kps.core.events import EventManager
from kps.core.game_state import GameState
from kps.core.input_system import KeyConfigLoader
from kps.core.round_state import Round


@pytest.fixture
def game_state():
    """Create a fresh game state for testing."""
    return GameState()


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def fresh_round():
    """Create a round at full health."""
    return Round()


@pytest.fixture
def key_config():
    """Key configuration loaded from the bundled YAML file."""
    loader = KeyConfigLoader()
    loader.load_config()
    return loader


@pytest.fixture
def fallback_key_config(tmp_path):
    """Key configuration built from the hardcoded fallback bindings."""
    loader = KeyConfigLoader(config_path=str(tmp_path / "missing.yaml"))
    loader.load_config()
    return loader
