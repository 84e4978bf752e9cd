"""Connection settings for a Cachet installation."""
from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_CONFIG = "CACHET_CONFIG"
ENV_URL = "CACHET_URL"
ENV_TOKEN = "CACHET_TOKEN"
DEFAULT_CANDIDATES = (Path("config") / "cachet.yaml", Path("config") / "cachet.yml")

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z0-9_]+)\}")


@dataclass(slots=True)
class CachetSettings:
    base_url: str
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    timeout_s: float = 10.0
    verify_tls: bool = True


def _load_dotenv(directories: Iterable[Path]) -> None:
    """Export `.env` files found in ``directories``; set variables win."""
    for directory in dict.fromkeys(d.resolve() for d in directories):
        env_file = directory / ".env"
        if env_file.is_file():
            load_dotenv(env_file, override=False)


def _substitute(text: str, source: Path) -> str:
    def lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        value = os.environ.get(name)
        if value is None:
            raise ConfigurationError(f"{source}: `${{{name}}}` refers to an unset environment variable")
        return value

    return _PLACEHOLDER.sub(lookup, text)


def _resolve_placeholders(raw: Mapping[str, object], source: Path) -> Dict[str, object]:
    """Replace `${VAR}` in string settings; other values pass through."""
    return {key: _substitute(value, source) if isinstance(value, str) else value for key, value in raw.items()}


def _load_file(path: Path) -> Dict[str, object]:
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        elif suffix == ".json":
            data = json.loads(text) if text.strip() else {}
        else:
            raise ConfigurationError(f"Unsupported configuration format '{suffix}'; use YAML or JSON")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Invalid configuration file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    section = data.get("cachet", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"`cachet` section in {path} must be a mapping")
    return section


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in {"0", "false", "no", "off", ""}
    return bool(value)


def _build(raw: Mapping[str, object]) -> CachetSettings:
    base_url = os.getenv(ENV_URL) or raw.get("base_url") or raw.get("url")
    if not base_url:
        raise ConfigurationError(f"Cachet base URL is not configured; set `base_url` or {ENV_URL}")
    token = os.getenv(ENV_TOKEN) or raw.get("token") or raw.get("api_token")
    try:
        timeout_s = float(raw.get("timeout_s", 10.0))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid `timeout_s`: {raw.get('timeout_s')!r}") from exc
    if timeout_s <= 0:
        raise ConfigurationError("`timeout_s` must be positive")
    return CachetSettings(
        base_url=str(base_url),
        token=str(token) if token else None,
        username=str(raw["username"]) if raw.get("username") else None,
        password=str(raw["password"]) if raw.get("password") is not None else None,
        timeout_s=timeout_s,
        verify_tls=_as_bool(raw.get("verify_tls", True)),
    )


def load_settings(path: Optional[Path | str] = None) -> CachetSettings:
    """Locate and parse the client configuration.

    Looks at ``path``, then ``$CACHET_CONFIG``, then ``config/cachet.yaml``.
    ``CACHET_URL`` and ``CACHET_TOKEN`` take precedence over the file and are
    enough on their own when no file exists.
    """
    directories = [Path.cwd()]
    if path:
        directories.append(Path(path).parent)
    _load_dotenv(directories)

    candidates: List[Path] = []
    if path:
        if not Path(path).exists():
            raise ConfigurationError(f"Configuration file {path} does not exist")
        candidates.append(Path(path))
    env_path = os.getenv(ENV_CONFIG)
    if env_path:
        candidates.append(Path(env_path))
    candidates.extend(DEFAULT_CANDIDATES)

    for candidate in candidates:
        if not candidate.exists():
            continue
        _load_dotenv([candidate.parent])
        raw = _resolve_placeholders(_load_file(candidate), candidate)
        logger.info("Loaded Cachet settings from %s", candidate)
        return _build(raw)

    if os.getenv(ENV_URL):
        return _build({})
    raise ConfigurationError("No Cachet configuration found")


__all__ = ["CachetSettings", "load_settings"]
