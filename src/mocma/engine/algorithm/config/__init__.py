"""Algorithm configuration module.

Examples:
    from mocma.engine.algorithm.config import MOCMAConfig

    # Fluent builder
    cfg = MOCMAConfig().mu(50).indicator("epsilon").fixed()

    # Quick defaults
    cfg = MOCMAConfig.default(mu=20)
"""

from .loader import load_config, load_config_mapping
from .mocma import MOCMAConfig, MOCMAConfigData, coerce_config

__all__ = [
    "MOCMAConfig",
    "MOCMAConfigData",
    "coerce_config",
    "load_config",
    "load_config_mapping",
]
