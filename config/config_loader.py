"""
Scenario loader

Reads and writes SimulationConfig scenarios as YAML. A scenario file holds
a top-level ``simulation`` mapping (building, lift, door, dispatch and the
scripted requests); missing sections fall back to the dataclass defaults.
"""

import yaml
from pathlib import Path
from typing import Union

from simulator.exceptions import InvalidConfigurationError
from .simulation import SimulationConfig


def _parse_scenario(text: str, source: str) -> SimulationConfig:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(f"{source} is not valid YAML: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise InvalidConfigurationError(f"{source} must contain a mapping, got {type(data).__name__}")

    config = SimulationConfig.from_dict(data)
    config.validate()
    return config


class ConfigLoader:
    """Loads and saves simulation scenarios"""

    @staticmethod
    def load_simulation(file_path: Union[str, Path]) -> SimulationConfig:
        """
        Load a scenario file

        Raises:
            FileNotFoundError: If file doesn't exist
            InvalidConfigurationError: If the contents are malformed or out of bounds
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Scenario file not found: {file_path}")

        return _parse_scenario(file_path.read_text(encoding='utf-8'), str(file_path))

    @staticmethod
    def loads_simulation(text: str) -> SimulationConfig:
        """Build a scenario from inline YAML text"""
        return _parse_scenario(text, "inline scenario")

    @staticmethod
    def save_simulation(config: SimulationConfig, file_path: Union[str, Path]):
        """Write a scenario file, creating parent directories as needed"""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def load_simulation_config(file_path: Union[str, Path]) -> SimulationConfig:
    return ConfigLoader.load_simulation(file_path)


def save_simulation_config(config: SimulationConfig, file_path: Union[str, Path]):
    ConfigLoader.save_simulation(config, file_path)
