"""
Configuration loader for key mappings.

This module handles loading and parsing of YAML configuration files
for customizable key bindings.
"""
import os
import yaml
from typing import Callable, Optional, Any
from pathlib import Path

from .context_manager import InputContext
from ..input import Key


DEFAULT_CONFIG_PATH = "assets/config/key_mappings.yaml"

# Action names used in the mapping files
MOVE_ACTION_PREFIX = "move_"
QUIT_ACTION = "quit_game"
EXIT_ACTION = "exit_game"
ANY_KEY = "ANY"

# Built-in bindings, used when the file is unusable or leaves a context empty
FALLBACK_KEY_MAPPINGS: dict[InputContext, dict[Key, str]] = {
    InputContext.FIGHT: {
        Key.K: "move_kick",
        Key.P: "move_punch",
        Key.S: "move_sweep",
        Key.C: "move_crouch",
        Key.B: "move_block",
        Key.J: "move_jump",
        Key.Q: QUIT_ACTION,
    },
    InputContext.GAME_OVER: {},
}
FALLBACK_ANY_KEY_ACTIONS: dict[InputContext, str] = {
    InputContext.GAME_OVER: EXIT_ACTION,
}


class KeyConfigLoader:
    """Loads and manages key mapping configurations from YAML files."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        on_warning: Optional[Callable[[str], None]] = None,
    ):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._config: dict[str, Any] = {}
        self._key_mappings: dict[InputContext, dict[Key, str]] = {}
        self._any_key_actions: dict[InputContext, str] = {}
        self._active_scheme: str = "default"
        self._on_warning = on_warning
        self.warnings: list[str] = []

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        if self._on_warning:
            self._on_warning(message)

    def _section(self, data: Any, name: str) -> dict[str, Any]:
        """Return ``data`` if it is a mapping; warn and treat it as empty otherwise."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            self._warn(f"Key config section '{name}' must be a mapping, got {type(data).__name__}")
            return {}
        return data

    def resolve_path(self) -> Path:
        """Resolve the config path, treating relative paths as project-root relative."""
        if os.path.isabs(self.config_path):
            return Path(self.config_path)
        project_root = Path(__file__).parent.parent.parent.parent
        return project_root / self.config_path

    def load_config(self) -> bool:
        """
        Load configuration from the YAML file.

        Returns:
            bool: True if config was loaded successfully
        """
        config_file = self.resolve_path()

        if not config_file.exists():
            self._warn(f"Key config file not found: {config_file}")
            self._load_fallback_config()
            return False

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._warn(f"Error loading key config: {e}")
            self._load_fallback_config()
            return False

        if loaded is not None and not isinstance(loaded, dict):
            self._warn(f"Key config {config_file} must be a mapping, got {type(loaded).__name__}")
            self._load_fallback_config()
            return False
        self._config = loaded or {}

        config_section = self._section(self._config.get('config'), 'config')
        self._active_scheme = str(config_section.get('active_scheme', 'default'))

        self._parse_key_mappings()
        return True

    def _parse_key_mappings(self) -> None:
        """Parse the key mappings from the loaded config."""
        self._key_mappings.clear()
        self._any_key_actions.clear()

        contexts_config = self._section(self._config.get('contexts'), 'contexts')
        schemes_config = self._section(self._config.get('schemes'), 'schemes')

        scheme: dict[str, Any] = {}
        if self._active_scheme != 'default':
            if self._active_scheme in schemes_config:
                scheme = self._section(schemes_config[self._active_scheme], f"schemes.{self._active_scheme}")
            else:
                self._warn(f"Unknown key scheme '{self._active_scheme}' in config")
        scheme_overrides = self._section(scheme.get('overrides'), f"schemes.{self._active_scheme}.overrides")

        for context_name, context_data in contexts_config.items():
            try:
                context = InputContext(str(context_name).lower())
            except ValueError:
                self._warn(f"Unknown context '{context_name}' in config")
                continue

            context_data = self._section(context_data, f"contexts.{context_name}")
            final_mappings = dict(self._section(context_data.get('mappings'), f"contexts.{context_name}.mappings"))
            # Scheme overrides replace individual bindings
            final_mappings.update(
                self._section(scheme_overrides.get(context_name), f"overrides.{context_name}")
            )

            key_mapping = {}
            for key_str, action in final_mappings.items():
                if not isinstance(action, str):
                    self._warn(f"Action for key '{key_str}' must be a string, got {type(action).__name__}")
                    continue
                if str(key_str).upper().strip() == ANY_KEY:
                    self._any_key_actions[context] = action
                    continue
                key = self._parse_key_string(str(key_str))
                if key:
                    key_mapping[key] = action

            self._key_mappings[context] = key_mapping

        self._fill_missing_contexts()

    def _fill_missing_contexts(self) -> None:
        """Give every context without a single binding the built-in ones."""
        for context in InputContext:
            if self._key_mappings.get(context) or context in self._any_key_actions:
                continue
            self._warn(f"No key bindings for context '{context.value}'; using defaults")
            self._key_mappings[context] = dict(FALLBACK_KEY_MAPPINGS[context])
            if context in FALLBACK_ANY_KEY_ACTIONS:
                self._any_key_actions[context] = FALLBACK_ANY_KEY_ACTIONS[context]

    def _parse_key_string(self, key_str: str) -> Optional[Key]:
        """
        Parse a key string into a Key enum.

        Args:
            key_str: String representation of the key ("k", "ENTER", "1")

        Returns:
            Key: The corresponding Key enum, or None if invalid
        """
        key_str = key_str.upper().strip()

        if len(key_str) == 1 and key_str in "0123456789":
            return getattr(Key, f"NUM_{key_str}")

        try:
            return Key[key_str]
        except KeyError:
            self._warn(f"Unknown key '{key_str}' in config")
            return None

    def get_key_mappings(self, context: InputContext) -> dict[Key, str]:
        return self._key_mappings.get(context, {})

    def get_action_for_key(self, key: Key, context: InputContext) -> Optional[str]:
        """
        Get the action associated with a key in a specific context.

        Falls back to the context's catch-all action when one is configured.
        """
        action = self._key_mappings.get(context, {}).get(key)
        if action is None:
            action = self._any_key_actions.get(context)
        return action

    def get_keys_for_action(self, action: str, context: InputContext) -> list[Key]:
        return [key for key, mapped in self.get_key_mappings(context).items() if mapped == action]

    def get_available_schemes(self) -> list[str]:
        schemes = self._config.get('schemes')
        names = schemes.keys() if isinstance(schemes, dict) else []
        return ['default'] + [name for name in names if name != 'default']

    def get_active_scheme(self) -> str:
        return self._active_scheme

    def set_active_scheme(self, scheme_name: str) -> bool:
        """
        Set the active key scheme.

        Args:
            scheme_name: Name of the scheme to activate

        Returns:
            bool: True if scheme was set successfully
        """
        if scheme_name not in self.get_available_schemes():
            return False

        self._active_scheme = scheme_name
        self._parse_key_mappings()
        return True

    def _load_fallback_config(self) -> None:
        """Load hardcoded fallback configuration if file loading fails."""
        self._config = {}
        self._active_scheme = "default"
        self._key_mappings = {context: dict(keys) for context, keys in FALLBACK_KEY_MAPPINGS.items()}
        self._any_key_actions = dict(FALLBACK_ANY_KEY_ACTIONS)
