"""Factory helpers for constructing verification engines from configuration."""
from __future__ import annotations

import importlib
from typing import Any, Mapping, Optional

from .config import ConfigurationError, verification_config
from .rate_limit import DelayPolicy, RateLimitedEngine, RateLimiter


def _load_class(path: str):
    module_name, _, attr = path.rpartition(".")
    if not module_name:
        raise ConfigurationError(f"Invalid engine class path '{path}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Could not import engine module '{module_name}': {exc}") from exc
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ConfigurationError(f"Module '{module_name}' does not define '{attr}'") from exc


def build_verification_engine(config: Optional[Mapping[str, Any]]) -> Optional[RateLimitedEngine]:
    """Instantiate the verification engine defined in the configuration file."""

    engine_cfg = verification_config(config)
    if engine_cfg is None:
        return None

    class_path = engine_cfg.get("class")
    if not class_path:
        raise ConfigurationError("Verification configuration missing required 'class' field")

    options = engine_cfg.get("options", {})
    engine_cls = _load_class(class_path)
    try:
        engine_instance = engine_cls(**options)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid options for engine '{class_path}': {exc}") from exc

    delay_seconds = float(engine_cfg.get("delay_seconds", 0) or 0)
    calls_per_minute = engine_cfg.get("rate_limit_per_minute")
    rate_limiter = RateLimiter(float(calls_per_minute)) if calls_per_minute else RateLimiter(None)

    return RateLimitedEngine(
        engine_instance,
        display_name=engine_cfg.get("name"),
        delay_policy=DelayPolicy(delay_seconds=delay_seconds),
        rate_limiter=rate_limiter,
    )
