"""
Configuration management package

Provides the simulation configuration classes and the YAML loader.
"""

from .simulation import (
    SimulationConfig,
    BuildingConfig,
    LiftConfig,
    DoorConfig,
    DispatchConfig,
    ScriptedRequest,
    MIN_FLOORS,
    MAX_FLOORS,
    MIN_LIFTS,
    MAX_LIFTS
)

from .config_loader import (
    ConfigLoader,
    load_simulation_config,
    save_simulation_config
)

__all__ = [
    # Simulation
    'SimulationConfig',
    'BuildingConfig',
    'LiftConfig',
    'DoorConfig',
    'DispatchConfig',
    'ScriptedRequest',
    'MIN_FLOORS',
    'MAX_FLOORS',
    'MIN_LIFTS',
    'MAX_LIFTS',

    # Loader
    'ConfigLoader',
    'load_simulation_config',
    'save_simulation_config',
]
