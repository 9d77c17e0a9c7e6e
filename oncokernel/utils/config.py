"""Configuration management for the classification kernel."""

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from ..exceptions import InvalidInputError

# Mirrors configs/default.yaml
DEFAULT_CONFIG: Dict[str, Any] = {
    'preprocessing': {
        'scaling': 'standard',
    },
    'models': {
        'logistic_regression': {
            'learning_rate': 0.01,
            'max_iterations': 1000,
        },
        'knn': {
            'k': 5,
        },
        'decision_tree': {
            'max_depth': 10,
            'min_samples_split': 2,
        },
        'naive_bayes': {},
    },
    'evaluation': {
        'threshold': 0.5,
    },
}


class Config:
    """
    YAML configuration loader.

    Sections missing from the file fall back to ``DEFAULT_CONFIG``. The
    ``models`` section is taken as a whole when present, so it also selects
    which models a suite trains.
    """

    def __init__(self, config_path: Union[str, Path]):
        """Load configuration from YAML file."""
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")
        with open(self.config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        self.config = self._merge_defaults(loaded)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> 'Config':
        """Build a configuration from an in-memory mapping."""
        instance = cls.__new__(cls)
        instance.config_path = None
        instance.config = cls._merge_defaults(config)
        return instance

    @classmethod
    def default(cls) -> 'Config':
        return cls.from_dict({})

    @staticmethod
    def _merge_defaults(config: Mapping[str, Any]) -> Dict[str, Any]:
        if not isinstance(config, Mapping):
            raise InvalidInputError(f"Configuration must be a mapping, got {type(config).__name__}")
        merged = copy.deepcopy(DEFAULT_CONFIG)
        for section, value in config.items():
            if section != 'models' and isinstance(value, Mapping) and isinstance(merged.get(section), dict):
                merged[section].update(copy.deepcopy(dict(value)))
            else:
                merged[section] = copy.deepcopy(value)
        if not isinstance(merged.get('models'), Mapping):
            raise InvalidInputError("'models' section must be a mapping of model name to parameters")
        return merged

    def get_model_config(self, model_name: str) -> Dict[str, Any]:
        """
        Get model configuration.

        Args:
            model_name: Model name from 'models' section

        Returns:
            Deep copy of the model's parameters

        Raises:
            InvalidInputError: If model not found
        """
        models = self.config.get('models', {})
        if model_name not in models:
            raise InvalidInputError(f"Model '{model_name}' not found")
        return copy.deepcopy(models[model_name] or {})

    def get_model_names(self) -> list:
        return list(self.config.get('models', {}).keys())

    # Simple getters for other sections
    def get_preprocessing_config(self) -> Dict[str, Any]:
        """Get preprocessing configuration."""
        return self.config.get('preprocessing', {})

    def get_evaluation_config(self) -> Dict[str, Any]:
        """Get evaluation configuration."""
        return self.config.get('evaluation', {})

    def __getitem__(self, key: str) -> Any:
        """Allow dict-like access to config."""
        return self.config[key]

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with default."""
        return self.config.get(key, default)
