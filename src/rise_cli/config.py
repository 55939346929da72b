"""Configuration for the rise CLI."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path.home() / ".rise" / "config.toml"
DEFAULT_HOST = "https://api.rise.sh"
DEFAULT_DOMAIN = "rise.cloud"
DEFAULT_ACCEPT = "application/vnd.rise.v0+json"
PROJECT_JSON = "rise.json"
DEFAULT_PROJECT_JSON = "rise.default.json"

HOST_ENV_VAR = "RISE_HOST"
DEFAULT_DOMAIN_ENV_VAR = "RISE_DEFAULT_DOMAIN"


def cli_version() -> str:
    try:
        return pkg_version("rise-cli")
    except PackageNotFoundError:
        return "0.0.0+local"


def default_user_agent() -> str:
    return f"RiseCLI/{cli_version()} ({sys.platform})"


@dataclass(frozen=True)
class CLIConfig:
    host: str = DEFAULT_HOST
    default_domain: str = DEFAULT_DOMAIN
    accept: str = DEFAULT_ACCEPT
    user_agent: str = field(default_factory=default_user_agent)
    project_json: str = PROJECT_JSON
    default_project_json: str = DEFAULT_PROJECT_JSON
    request_timeout: float | None = None


class ConfigError(ValueError):
    """Raised when CLI config is invalid."""


def _load_toml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")

    try:  # Python 3.11+
        import tomllib  # type: ignore[attr-defined]
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except ModuleNotFoundError:
        try:
            import tomli
        except ModuleNotFoundError as exc:
            raise ConfigError("toml parser unavailable; install tomli for Python < 3.11") from exc
        try:
            return tomli.loads(raw)
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _to_str(source: dict[str, Any], field_name: str, default: str) -> str:
    value = str(source.get(field_name, default)).strip()
    if not value:
        raise ConfigError(f"{field_name} must not be empty")
    return value


def _to_timeout(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError("request_timeout must be a number of seconds")
    if value <= 0:
        raise ConfigError("request_timeout must be positive")
    return float(value)


def _file_name(source: dict[str, Any], field_name: str, default: str) -> str:
    value = _to_str(source, field_name, default)
    if os.path.isabs(value) or Path(value).name != value:
        raise ConfigError(f"{field_name} must be a plain file name")
    return value


def load_cli_config(path: str | Path | None = None) -> CLIConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if config_path.exists():
        parsed = _load_toml(config_path)
    else:
        parsed = {}

    section = parsed.get("cli")
    if isinstance(section, dict):
        source = section
    elif section is None:
        source = parsed
    else:
        raise ConfigError("[cli] must be a table")

    env_host = os.getenv(HOST_ENV_VAR)
    host = env_host.strip() if env_host else _to_str(source, "host", DEFAULT_HOST)
    if not host.startswith(("http://", "https://")):
        raise ConfigError("host must be an http(s) URL")

    env_domain = os.getenv(DEFAULT_DOMAIN_ENV_VAR)
    default_domain = (
        env_domain.strip() if env_domain else _to_str(source, "default_domain", DEFAULT_DOMAIN)
    )
    if default_domain.startswith(".") or default_domain.endswith("."):
        raise ConfigError("default_domain must not begin or end with a dot")

    return CLIConfig(
        host=host,
        default_domain=default_domain,
        accept=_to_str(source, "accept", DEFAULT_ACCEPT),
        user_agent=_to_str(source, "user_agent", default_user_agent()),
        project_json=_file_name(source, "project_json", PROJECT_JSON),
        default_project_json=_file_name(source, "default_project_json", DEFAULT_PROJECT_JSON),
        request_timeout=_to_timeout(source.get("request_timeout")),
    )
