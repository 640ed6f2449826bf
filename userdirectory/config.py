"""Configuration management for the user directory service."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "info"
_LOG_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


@dataclass(frozen=True)
class ServiceConfig:
    """Runtime settings for the HTTP service."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    seed_users: Tuple[Mapping[str, Any], ...] = field(default_factory=tuple)

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> "ServiceConfig":
        """Create a :class:`ServiceConfig` from raw dictionary data."""
        unknown = set(data.keys()) - {"host", "port", "log_level", "seed_users"}
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        host = str(data.get("host") or DEFAULT_HOST).strip() or DEFAULT_HOST
        port = _parse_port(data.get("port", DEFAULT_PORT))
        log_level = _parse_log_level(data.get("log_level", DEFAULT_LOG_LEVEL))

        seeds_raw = data.get("seed_users") or []
        if not isinstance(seeds_raw, list):
            raise ValueError("'seed_users' must be a list of user objects")
        for index, entry in enumerate(seeds_raw):
            if not isinstance(entry, Mapping):
                raise ValueError(f"Seed user #{index + 1} must be a mapping")

        return ServiceConfig(
            host=host,
            port=port,
            log_level=log_level,
            seed_users=tuple(_normalise_seed(entry) for entry in seeds_raw),
        )

    def with_overrides(self, env: Mapping[str, str]) -> "ServiceConfig":
        """Apply ``USER_DIRECTORY_*`` environment overrides."""
        host = env.get("USER_DIRECTORY_HOST", "").strip() or self.host
        port_raw = env.get("USER_DIRECTORY_PORT", "").strip()
        port = _parse_port(port_raw) if port_raw else self.port
        level_raw = env.get("USER_DIRECTORY_LOG_LEVEL", "").strip()
        log_level = _parse_log_level(level_raw) if level_raw else self.log_level
        return ServiceConfig(host=host, port=port, log_level=log_level, seed_users=self.seed_users)


def _normalise_seed(entry: Mapping[str, Any]) -> Dict[str, Any]:
    seed = dict(entry)
    # YAML turns unquoted 1986-01-01 into a date; the API only accepts text.
    birth_date = seed.get("birth_date")
    if isinstance(birth_date, date) and not isinstance(birth_date, datetime):
        seed["birth_date"] = birth_date.isoformat()
    return seed


def _parse_port(value: object) -> int:
    try:
        port = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid port: {value!r}") from exc
    if port < 1 or port > 65535:
        raise ValueError("Port must be between 1 and 65535")
    return port


def _parse_log_level(value: object) -> str:
    level = str(value).strip().lower()
    if level not in _LOG_LEVELS:
        raise ValueError(f"Unsupported log level: {value!r}")
    return level


def load_config(config_path: Path) -> ServiceConfig:
    """Load service settings from a YAML file."""
    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping at the top level")
    return ServiceConfig.from_dict(raw)


def default_config_path() -> Path:
    return (Path(__file__).resolve().parent.parent / "config" / "userdirectory.yaml").resolve(strict=False)


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    return default_config_path()


def load_service_config(
    path: Optional[str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> ServiceConfig:
    """Resolve, load and override the configuration used by the CLI.

    An explicitly requested file must exist. When no path is given the bundled
    default location is used if present, otherwise built-in defaults apply.
    """
    environ: Dict[str, str] = dict(os.environ if env is None else env)
    explicit = path or environ.get("USER_DIRECTORY_CONFIG")
    config_path = resolve_config_path(explicit)

    if config_path.exists():
        config = load_config(config_path)
    elif explicit:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    else:
        config = ServiceConfig()

    return config.with_overrides(environ)


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "ServiceConfig",
    "default_config_path",
    "load_config",
    "load_service_config",
    "resolve_config_path",
]
