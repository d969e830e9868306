"""
Resurfacer Configuration System
===============================
Centralized, validated configuration with environment variable overrides.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field

import yaml

from resurfacer.core.exceptions import ConfigurationError
from resurfacer.core.constants import (
    DEBUG_ONE_DAY,
    DEBUG_ONE_YEAR,
    MINIMUM_TWEET_GAP,
    ONE_DAY,
    ONE_YEAR,
    SCROLL_THRESHOLD,
    VIEWPORT_BUFFER,
)


@dataclass(frozen=True)
class SchedulingConfig:
    """Review interval bounds. Debug mode shrinks a day to a minute."""
    debug_mode: bool = False

    @property
    def one_day(self) -> int:
        return DEBUG_ONE_DAY if self.debug_mode else ONE_DAY

    @property
    def one_year(self) -> int:
        return DEBUG_ONE_YEAR if self.debug_mode else ONE_YEAR


@dataclass(frozen=True)
class QueueConfig:
    minimum_gap: int = MINIMUM_TWEET_GAP
    scroll_threshold_px: float = SCROLL_THRESHOLD
    viewport_buffer: float = VIEWPORT_BUFFER
    drain_delay_seconds: float = 0.5


@dataclass(frozen=True)
class DueScanConfig:
    enabled: bool = True
    interval_seconds: float = 60.0
    initial_delay_seconds: float = 2.0
    ready_retry_delay_seconds: float = 1.0
    ready_max_attempts: int = 30


@dataclass(frozen=True)
class StoreConfig:
    path: str = "./data/saved_items.json"
    namespace: str = "savedTweets"


@dataclass(frozen=True)
class ObservabilityConfig:
    log_level: str = "INFO"
    json_logs: bool = False


@dataclass(frozen=True)
class ResurfacerConfig:
    """Root configuration for Resurfacer."""

    version: str = "1.0"
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)
    due_scan: DueScanConfig = field(default_factory=DueScanConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)


def _env_override(key: str, default):
    """Check for RESURFACER_<KEY> environment variable override."""
    env_key = f"RESURFACER_{key.upper()}"
    val = os.environ.get(env_key)
    if val is None:
        return default
    # Type coercion based on the default's type
    if isinstance(default, bool):
        return val.lower() in ("true", "1", "yes")
    if isinstance(default, int):
        return int(val)
    if isinstance(default, float):
        return float(val)
    return val


def _require_positive(key: str, value, allow_zero: bool = False) -> None:
    if allow_zero and value == 0:
        return
    if value <= 0:
        raise ConfigurationError(
            config_key=key,
            reason=f"must be {'non-negative' if allow_zero else 'positive'}, got {value}",
        )


def load_config(path: Optional[Path] = None) -> ResurfacerConfig:
    """
    Load configuration from YAML file with environment variable overrides.

    Priority: ENV > YAML > defaults.

    Args:
        path: Path to config.yaml. If None, searches ./config.yaml and the repo root.

    Returns:
        Validated ResurfacerConfig instance.

    Raises:
        ConfigurationError: If a numeric setting is out of range or the YAML
            document is not a mapping.
    """
    if path is None:
        candidates = [
            Path("config.yaml"),
            Path(__file__).parent.parent.parent.parent / "config.yaml",
        ]
        for candidate in candidates:
            if candidate.exists():
                path = candidate
                break

    raw = {}
    if path is not None and path.exists():
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(config_key=str(path), reason="top-level YAML document must be a mapping")
        raw = loaded.get("resurfacer") or {}

    # Build scheduling config
    sched_raw = raw.get("scheduling") or {}
    scheduling = SchedulingConfig(
        debug_mode=_env_override("DEBUG_MODE", sched_raw.get("debug_mode", False)),
    )

    # Build queue config
    queue_raw = raw.get("queue") or {}
    queue = QueueConfig(
        minimum_gap=_env_override("QUEUE_MINIMUM_GAP", queue_raw.get("minimum_gap", MINIMUM_TWEET_GAP)),
        scroll_threshold_px=_env_override("QUEUE_SCROLL_THRESHOLD_PX", float(queue_raw.get("scroll_threshold_px", SCROLL_THRESHOLD))),
        viewport_buffer=_env_override("QUEUE_VIEWPORT_BUFFER", float(queue_raw.get("viewport_buffer", VIEWPORT_BUFFER))),
        drain_delay_seconds=_env_override("QUEUE_DRAIN_DELAY_SECONDS", float(queue_raw.get("drain_delay_seconds", 0.5))),
    )
    _require_positive("queue.minimum_gap", queue.minimum_gap)
    _require_positive("queue.viewport_buffer", queue.viewport_buffer, allow_zero=True)
    _require_positive("queue.drain_delay_seconds", queue.drain_delay_seconds, allow_zero=True)

    # Build due-scan config; debug mode scans four times as often
    scan_raw = raw.get("due_scan") or {}
    default_interval = 15.0 if scheduling.debug_mode else 60.0
    due_scan = DueScanConfig(
        enabled=_env_override("DUE_SCAN_ENABLED", scan_raw.get("enabled", True)),
        interval_seconds=_env_override("DUE_SCAN_INTERVAL_SECONDS", float(scan_raw.get("interval_seconds", default_interval))),
        initial_delay_seconds=_env_override("DUE_SCAN_INITIAL_DELAY_SECONDS", float(scan_raw.get("initial_delay_seconds", 2.0))),
        ready_retry_delay_seconds=_env_override("DUE_SCAN_READY_RETRY_DELAY_SECONDS", float(scan_raw.get("ready_retry_delay_seconds", 1.0))),
        ready_max_attempts=_env_override("DUE_SCAN_READY_MAX_ATTEMPTS", scan_raw.get("ready_max_attempts", 30)),
    )
    _require_positive("due_scan.interval_seconds", due_scan.interval_seconds)
    _require_positive("due_scan.ready_max_attempts", due_scan.ready_max_attempts)

    # Build store config
    store_raw = raw.get("store") or {}
    store = StoreConfig(
        path=_env_override("STORE_PATH", store_raw.get("path", "./data/saved_items.json")),
        namespace=_env_override("STORE_NAMESPACE", store_raw.get("namespace", "savedTweets")),
    )
    if not store.namespace:
        raise ConfigurationError(config_key="store.namespace", reason="must not be empty")

    # Build observability config
    obs_raw = raw.get("observability") or {}
    observability = ObservabilityConfig(
        log_level=_env_override("LOG_LEVEL", obs_raw.get("log_level", "INFO")),
        json_logs=_env_override("JSON_LOGS", obs_raw.get("json_logs", False)),
    )

    return ResurfacerConfig(
        version=raw.get("version", "1.0"),
        scheduling=scheduling,
        queue=queue,
        due_scan=due_scan,
        store=store,
        observability=observability,
    )


# Module-level singleton (lazy-loaded)
_CONFIG: Optional[ResurfacerConfig] = None


def get_config() -> ResurfacerConfig:
    """Get or initialize the global config singleton."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def reset_config():
    """Reset the global config singleton (useful for testing)."""
    global _CONFIG
    _CONFIG = None
