"""MO-CMA-ES configuration."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from mocma.foundation.exceptions import (
    ConfigurationError,
    InvalidEvalBackendError,
    InvalidNotionOfSuccessError,
)

from .base import _SerializableConfig, _require_fields

DEFAULT_MU = 100
DEFAULT_PENALTY_FACTOR = 1e-6
DEFAULT_SUCCESS_THRESHOLD = 0.44
DEFAULT_NOTION_OF_SUCCESS = "individual"
DEFAULT_INITIAL_SIGMA = 1.0
DEFAULT_INDICATOR = "hypervolume"

_NOTION_ALIASES = {
    "individual": "individual",
    "individualbased": "individual",
    "individual_based": "individual",
    "population": "population",
    "populationbased": "population",
    "population_based": "population",
}

_EVAL_BACKENDS = ("serial", "process")

# Key names of the original property-tree configuration.
_LEGACY_KEYS = {
    "Mu": "mu",
    "PenaltyFactor": "penalty_factor",
    "SuccessThreshold": "success_threshold",
    "NotionOfSuccess": "notion_of_success",
    "InitialSigma": "initial_sigma",
    "Indicator": "indicator",
}


def normalize_notion_of_success(value: str) -> str:
    key = str(value).strip().lower()
    try:
        return _NOTION_ALIASES[key]
    except KeyError:
        raise InvalidNotionOfSuccessError(str(value)) from None


@dataclass(frozen=True)
class MOCMAConfigData(_SerializableConfig):
    mu: int = DEFAULT_MU
    penalty_factor: float = DEFAULT_PENALTY_FACTOR
    success_threshold: float = DEFAULT_SUCCESS_THRESHOLD
    notion_of_success: str = DEFAULT_NOTION_OF_SUCCESS
    initial_sigma: float = DEFAULT_INITIAL_SIGMA
    indicator: str = DEFAULT_INDICATOR
    indicator_params: Dict[str, Any] = field(default_factory=dict)
    eval_backend: str = "serial"
    n_workers: Optional[int] = None

    def __post_init__(self) -> None:
        from mocma.engine.algorithm.mocma.indicators import canonical_indicator_name

        if isinstance(self.mu, bool) or not isinstance(self.mu, numbers.Integral) or self.mu <= 0:
            raise ConfigurationError(
                f"mu must be a positive integer, got {self.mu!r}.",
                suggestion="Use a parent population size of at least 1.",
                details={"mu": self.mu},
            )
        object.__setattr__(self, "mu", int(self.mu))
        if not math.isfinite(self.penalty_factor) or self.penalty_factor < 0.0:
            raise ConfigurationError(
                f"penalty_factor must be a non-negative finite number, got {self.penalty_factor!r}.",
                details={"penalty_factor": self.penalty_factor},
            )
        if not 0.0 < self.success_threshold <= 1.0:
            raise ConfigurationError(
                f"success_threshold must lie in (0, 1], got {self.success_threshold!r}.",
                details={"success_threshold": self.success_threshold},
            )
        if not math.isfinite(self.initial_sigma) or self.initial_sigma <= 0.0:
            raise ConfigurationError(
                f"initial_sigma must be positive, got {self.initial_sigma!r}.",
                details={"initial_sigma": self.initial_sigma},
            )
        object.__setattr__(self, "notion_of_success", normalize_notion_of_success(self.notion_of_success))
        object.__setattr__(self, "indicator", canonical_indicator_name(self.indicator))
        backend = str(self.eval_backend).lower()
        if backend not in _EVAL_BACKENDS:
            raise InvalidEvalBackendError(str(self.eval_backend), available=list(_EVAL_BACKENDS))
        object.__setattr__(self, "eval_backend", backend)

    @property
    def population_based(self) -> bool:
        return self.notion_of_success == "population"


class MOCMAConfig:
    """
    Declarative configuration holder for MO-CMA-ES settings.

    Examples:
        cfg = MOCMAConfig.default()
        cfg = MOCMAConfig().mu(20).indicator("epsilon").notion_of_success("population").fixed()
        cfg = MOCMAConfig.from_mapping({"Mu": 50, "NotionOfSuccess": "PopulationBased"})
    """

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    @classmethod
    def default(cls, mu: int = DEFAULT_MU, indicator: str = DEFAULT_INDICATOR) -> MOCMAConfigData:
        """Create a default MO-CMA-ES configuration."""
        return (
            cls()
            .mu(mu)
            .penalty_factor(DEFAULT_PENALTY_FACTOR)
            .success_threshold(DEFAULT_SUCCESS_THRESHOLD)
            .notion_of_success(DEFAULT_NOTION_OF_SUCCESS)
            .initial_sigma(DEFAULT_INITIAL_SIGMA)
            .indicator(indicator)
            .fixed()
        )

    @classmethod
    def from_mapping(cls, node: Mapping[str, Any]) -> MOCMAConfigData:
        """Build a configuration from a mapping; unset keys take the documented defaults.

        Recognized keys (snake_case or the original CamelCase): ``mu``/``Mu``,
        ``penalty_factor``/``PenaltyFactor``, ``success_threshold``/``SuccessThreshold``,
        ``notion_of_success``/``NotionOfSuccess``, ``initial_sigma``/``InitialSigma``,
        ``indicator``/``Indicator``, ``indicator_params``, ``eval_backend``, ``n_workers``.
        """
        builder = cls()
        indicator_params = None
        for key, value in node.items():
            name = _LEGACY_KEYS.get(key, key)
            if name == "indicator_params":
                indicator_params = dict(value or {})
                continue
            setter = getattr(builder, name, None)
            if name.startswith("_") or name in {"fixed", "default", "from_mapping"} or not callable(setter):
                raise ConfigurationError(
                    f"Unknown MO-CMA-ES configuration key '{key}'.",
                    suggestion=f"Known keys: {', '.join(sorted(_LEGACY_KEYS.values()))}, indicator_params, eval_backend, n_workers",
                    details={"key": key},
                )
            setter(value)
        if indicator_params is not None:
            builder._cfg["indicator_params"] = indicator_params
        builder._cfg.setdefault("mu", DEFAULT_MU)
        return builder.fixed()

    def mu(self, value: int) -> "MOCMAConfig":
        self._cfg["mu"] = value
        return self

    def penalty_factor(self, value: float) -> "MOCMAConfig":
        self._cfg["penalty_factor"] = float(value)
        return self

    def success_threshold(self, value: float) -> "MOCMAConfig":
        self._cfg["success_threshold"] = float(value)
        return self

    def notion_of_success(self, value: str) -> "MOCMAConfig":
        self._cfg["notion_of_success"] = str(value)
        return self

    def initial_sigma(self, value: float) -> "MOCMAConfig":
        self._cfg["initial_sigma"] = float(value)
        return self

    def indicator(self, name: str, **params: Any) -> "MOCMAConfig":
        self._cfg["indicator"] = str(name)
        self._cfg["indicator_params"] = dict(params)
        return self

    def eval_backend(self, name: str, n_workers: int | None = None) -> "MOCMAConfig":
        self._cfg["eval_backend"] = str(name)
        if n_workers is not None:
            self._cfg["n_workers"] = int(n_workers)
        return self

    def n_workers(self, value: int | None) -> "MOCMAConfig":
        self._cfg["n_workers"] = None if value is None else int(value)
        return self

    def fixed(self) -> MOCMAConfigData:
        _require_fields(self._cfg, ("mu",), "MOCMAConfig")
        return MOCMAConfigData(
            mu=self._cfg["mu"],
            penalty_factor=self._cfg.get("penalty_factor", DEFAULT_PENALTY_FACTOR),
            success_threshold=self._cfg.get("success_threshold", DEFAULT_SUCCESS_THRESHOLD),
            notion_of_success=self._cfg.get("notion_of_success", DEFAULT_NOTION_OF_SUCCESS),
            initial_sigma=self._cfg.get("initial_sigma", DEFAULT_INITIAL_SIGMA),
            indicator=self._cfg.get("indicator", DEFAULT_INDICATOR),
            indicator_params=dict(self._cfg.get("indicator_params", {})),
            eval_backend=self._cfg.get("eval_backend", "serial"),
            n_workers=self._cfg.get("n_workers"),
        )


def coerce_config(config: MOCMAConfigData | Mapping[str, Any] | None) -> MOCMAConfigData:
    """Accept a fixed config, a plain mapping, or None (defaults)."""
    if config is None:
        return MOCMAConfig.default()
    if isinstance(config, MOCMAConfigData):
        return config
    if isinstance(config, Mapping):
        return MOCMAConfig.from_mapping(config)
    raise ConfigurationError(
        f"Unsupported configuration type {type(config).__name__}.",
        suggestion="Pass a MOCMAConfigData (MOCMAConfig().mu(...).fixed()) or a dict.",
    )


__all__ = [
    "DEFAULT_MU",
    "DEFAULT_PENALTY_FACTOR",
    "DEFAULT_SUCCESS_THRESHOLD",
    "DEFAULT_NOTION_OF_SUCCESS",
    "DEFAULT_INITIAL_SIGMA",
    "DEFAULT_INDICATOR",
    "MOCMAConfig",
    "MOCMAConfigData",
    "coerce_config",
    "normalize_notion_of_success",
]
