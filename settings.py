"""Run configuration resolved from the process environment."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

LOOP_INTERVAL = 60
# plain native transfer
GAS_LIMIT = 21000
RECEIPT_TIMEOUT = 120
RECEIPT_POLL_INTERVAL = 5
CONNECT_ATTEMPTS = 3
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when the environment does not describe a usable run."""


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    private_key: str = field(repr=False)
    proxy: Optional[str] = None
    chain_id: Optional[int] = None
    log_level: str = "INFO"
    receipt_timeout: int = RECEIPT_TIMEOUT


def _optional_int(environ: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    if environ is None:
        environ = os.environ

    rpc_url = (environ.get("RPC_URL") or "").strip()
    private_key = (environ.get("PRIVATE_KEY") or "").strip()

    missing = [name for name, value in (("RPC_URL", rpc_url), ("PRIVATE_KEY", private_key)) if not value]
    if missing:
        raise ConfigError(f"{' and '.join(missing)} not set in the environment or .env file")

    proxy = (environ.get("PROXY") or "").strip()
    if not proxy or proxy.lower() == "no_proxy":
        proxy = None

    receipt_timeout = _optional_int(environ, "RECEIPT_TIMEOUT", RECEIPT_TIMEOUT)
    if receipt_timeout <= 0:
        raise ConfigError("RECEIPT_TIMEOUT must be positive")

    log_level = (environ.get("LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Settings(
        rpc_url=rpc_url,
        private_key=private_key,
        proxy=proxy,
        chain_id=_optional_int(environ, "CHAIN_ID", None),
        log_level=log_level,
        receipt_timeout=receipt_timeout,
    )
