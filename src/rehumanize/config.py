"""Layered TOML configuration with typed dataclass mapping.

Priority stack (highest wins):
    1. Hardcoded defaults (RehumanizeConfig())
    2. config/default.toml (bundled)
    3. ~/.config/rehumanize/config.toml (user config)
    4. CLI overrides (dot-notation)
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})

# Keys whose values stay strings even when they look numeric or boolean
_STRING_KEYS = frozenset(
    {"general.log_level", "service.base_url", "service.api_key", "service.model"}
)

# ---------------------------------------------------------------------------
# Typed config tree — all frozen, slots for memory efficiency
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GeneralConfig:
    """Top-level general settings."""

    log_level: str = "warning"

    def __post_init__(self) -> None:
        if self.log_level.lower() not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}"
            )


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Remote humanization service connection settings."""

    base_url: str = "https://humanize.undetectable.ai"
    api_key: str = ""
    timeout_seconds: float = 60.0
    connect_timeout_seconds: float = 10.0
    model: str = "v11"

    def masked(self) -> str:
        """Return the API key with all but the last four characters hidden."""
        if len(self.api_key) <= 4:
            return "*" * len(self.api_key)
        return "*" * (len(self.api_key) - 4) + self.api_key[-4:]


@dataclass(frozen=True, slots=True)
class PollingConfig:
    """Job polling budget."""

    max_attempts: int = 15
    interval_seconds: float = 3.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.interval_seconds < 0:
            raise ValueError(f"interval_seconds must be >= 0, got {self.interval_seconds}")


@dataclass(frozen=True, slots=True)
class FallbackConfig:
    """Local fallback transformer settings."""

    seed: int | None = None


@dataclass(frozen=True, slots=True)
class RehumanizeConfig:
    """Root configuration node."""

    general: GeneralConfig = field(default_factory=GeneralConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    fallback: FallbackConfig = field(default_factory=FallbackConfig)

    def to_dict(self, mask_secrets: bool = True) -> dict[str, Any]:
        """Serialize to a nested dictionary, masking the API key by default."""
        return {
            "general": {"log_level": self.general.log_level},
            "service": {
                "base_url": self.service.base_url,
                "api_key": self.service.masked() if mask_secrets else self.service.api_key,
                "timeout_seconds": self.service.timeout_seconds,
                "connect_timeout_seconds": self.service.connect_timeout_seconds,
                "model": self.service.model,
            },
            "polling": {
                "max_attempts": self.polling.max_attempts,
                "interval_seconds": self.polling.interval_seconds,
            },
            "fallback": {"seed": self.fallback.seed},
        }


# ---------------------------------------------------------------------------
# Config loading helpers
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Lists replace, dicts recurse."""
    merged = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _coerce_value(s: str) -> bool | int | float | str:
    """Coerce a CLI string value to its typed equivalent."""
    if s.lower() == "true":
        return True
    if s.lower() == "false":
        return False
    try:
        return int(s)
    except ValueError:
        pass
    try:
        return float(s)
    except ValueError:
        pass
    return s


def _apply_dot_override(raw: dict[str, Any], dot_key: str, str_value: str) -> None:
    """Apply a dot-notation CLI override into the raw config dict.

    Example: _apply_dot_override(raw, "polling.max_attempts", "5")
    sets raw["polling"]["max_attempts"] = 5
    String-typed keys such as service.api_key are stored verbatim.
    """
    parts = dot_key.split(".")
    target = raw
    for part in parts[:-1]:
        if part not in target:
            target[part] = {}
        target = target[part]
    target[parts[-1]] = str_value if dot_key in _STRING_KEYS else _coerce_value(str_value)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file, returning empty dict if not found."""
    if not path.is_file():
        return {}
    with open(path, "rb") as f:
        return tomllib.load(f)


def _load_bundled_toml(filename: str) -> dict[str, Any]:
    """Load a TOML file bundled in the config/ directory relative to project root."""
    current = Path(__file__).resolve().parent
    for _ in range(5):
        config_path = current / "config" / filename
        if config_path.is_file():
            with open(config_path, "rb") as f:
                return tomllib.load(f)
        current = current.parent

    # Installed packages: try importlib.resources
    try:
        config_pkg = resources.files("rehumanize").joinpath(f"../../../config/{filename}")
        if hasattr(config_pkg, "read_bytes"):
            data = config_pkg.read_bytes()
            return tomllib.loads(data.decode("utf-8"))
    except (FileNotFoundError, TypeError):
        pass

    return {}


def _build_config(raw: dict[str, Any]) -> RehumanizeConfig:
    """Map a merged raw dict to the typed RehumanizeConfig tree."""
    service_raw = dict(raw.get("service", {}))
    for key in ("timeout_seconds", "connect_timeout_seconds"):
        if key in service_raw:
            service_raw[key] = float(service_raw[key])
    if "api_key" in service_raw:
        service_raw["api_key"] = str(service_raw["api_key"])

    polling_raw = dict(raw.get("polling", {}))
    if "interval_seconds" in polling_raw:
        polling_raw["interval_seconds"] = float(polling_raw["interval_seconds"])

    return RehumanizeConfig(
        general=GeneralConfig(**raw.get("general", {})),
        service=ServiceConfig(**service_raw),
        polling=PollingConfig(**polling_raw),
        fallback=FallbackConfig(**raw.get("fallback", {})),
    )


def load_config(
    user_config_path: Path | None = None,
    cli_overrides: dict[str, str] | None = None,
) -> RehumanizeConfig:
    """Load configuration with the 4-layer priority stack.

    Args:
        user_config_path: Path to user config TOML. Defaults to
            ~/.config/rehumanize/config.toml.
        cli_overrides: Dot-notation key→value pairs from CLI flags.

    Returns:
        Fully resolved, typed RehumanizeConfig.
    """
    # Layer 1: hardcoded defaults (implicit via dataclass defaults)
    # Layer 2: bundled default.toml
    raw = _load_bundled_toml("default.toml")

    # Layer 3: user config
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "rehumanize" / "config.toml"
    raw = _deep_merge(raw, _load_toml_file(user_config_path))

    # Layer 4: CLI overrides
    if cli_overrides:
        for dot_key, str_value in cli_overrides.items():
            _apply_dot_override(raw, dot_key, str_value)

    return _build_config(raw)
