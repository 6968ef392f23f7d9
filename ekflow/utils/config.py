"""
Configuration utilities
"""

import copy
import logging
import yaml
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'solver': {
        'max_augmentations': None,
        'validate_input': False,
        'log_every': 0
    },
    'experiments': {
        'parallel': False,
        'network_directory': 'data/networks'
    },
    'visualization': {
        'style': 'light',
        'save_plots': False
    },
    'output': {
        'results_directory': 'data/results',
        'show_worker_logs_in_parallel': True
    }
}

def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged

class Config:
    """Project configuration backed by a YAML file"""

    def __init__(self, config_path: str = "config.yaml"):
        self.config_path = Path(config_path)
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Loads the YAML file on top of the defaults"""
        if not self.config_path.exists():
            logger.warning(f"⚠️  Config file {self.config_path} not found, using defaults")
            return self._get_default_config()

        try:
            with open(self.config_path, 'r') as file:
                loaded = yaml.safe_load(file) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"❌ Error loading config: {e}")
            return self._get_default_config()

        if not isinstance(loaded, dict):
            logger.error(f"❌ Config file {self.config_path} does not contain a mapping, using defaults")
            return self._get_default_config()

        logger.info(f"✅ Config loaded from {self.config_path}")
        return _merge(DEFAULT_CONFIG, loaded)

    def _get_default_config(self) -> Dict[str, Any]:
        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key_path: str, default=None):
        """Reads a value with dot notation (e.g. 'solver.max_augmentations')"""
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any):
        """Sets a value with dot notation"""
        keys = key_path.split('.')
        config_ref = self.config

        for key in keys[:-1]:
            if key not in config_ref:
                config_ref[key] = {}
            config_ref = config_ref[key]

        config_ref[keys[-1]] = value

    def as_dict(self) -> Dict[str, Any]:
        return self.config

    def save(self):
        """Writes the current configuration back to its file"""
        with open(self.config_path, 'w') as file:
            yaml.dump(self.config, file, default_flow_style=False)
        logger.info(f"✅ Config saved to {self.config_path}")
