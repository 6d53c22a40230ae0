"""
Client configuration: timeouts, retry policy and discovery heuristics.

- Loads sane defaults and supports overrides via environment variables (ARK_CLIENT_*).
- Every knob the discovery loop depends on (probe timeout, quorum, self
  addresses, ...) lives here so callers and tests can inject their own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from . import constants as C
from .utils.retry import RetryPolicy
from .version import user_agent as _default_user_agent


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v.strip() if v is not None else default


def _env_float(name: str, default: float) -> float:
    v = _env(name)
    if v is None or v == "":
        return float(default)
    try:
        return float(v)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {v!r}") from None


def _env_int(name: str, default: int) -> int:
    v = _env(name)
    if v is None or v == "":
        return int(default)
    try:
        return int(v, 10)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {v!r}") from None


@dataclass(slots=True)
class ClientConfig:
    # HTTP behavior
    request_timeout: float = C.REQUEST_TIMEOUT
    probe_timeout: float = C.PROBE_TIMEOUT
    config_timeout: float = C.CONFIG_TIMEOUT
    max_retries: int = C.MAX_RETRIES
    backoff_base: float = C.BACKOFF_BASE
    # Discovery
    quorum: int = C.PEER_QUORUM
    self_addresses: Tuple[str, ...] = C.SELF_ADDRESSES
    ok_statuses: Tuple[Union[str, int], ...] = C.OK_STATUSES
    # Sub-service (v2)
    wallet_api_port: int = C.WALLET_API_PORT
    api_plugin: str = C.CORE_API_PLUGIN
    # Identity / data
    user_agent: str = field(default_factory=_default_user_agent)
    seeds_file: Optional[str] = None

    def __post_init__(self) -> None:
        if self.quorum < 1:
            raise ValueError(f"quorum must be >= 1, got {self.quorum}")
        for name in ("request_timeout", "probe_timeout", "config_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")

    @classmethod
    def from_env(cls, prefix: str = "ARK_CLIENT_") -> "ClientConfig":
        """
        Create config from environment variables:

        ARK_CLIENT_TIMEOUT              (float seconds, resource calls)
        ARK_CLIENT_PROBE_TIMEOUT        (float seconds, peer-list probes)
        ARK_CLIENT_CONFIG_TIMEOUT       (float seconds, /config lookups)
        ARK_CLIENT_MAX_RETRIES          (int)
        ARK_CLIENT_BACKOFF              (float)
        ARK_CLIENT_QUORUM               (int)
        ARK_CLIENT_WALLET_API_PORT      (int)
        ARK_CLIENT_API_PLUGIN           (str)
        ARK_CLIENT_USER_AGENT           (str)
        ARK_CLIENT_SEEDS_FILE           (path to a JSON seed table)
        """
        return cls(
            request_timeout=_env_float(f"{prefix}TIMEOUT", C.REQUEST_TIMEOUT),
            probe_timeout=_env_float(f"{prefix}PROBE_TIMEOUT", C.PROBE_TIMEOUT),
            config_timeout=_env_float(f"{prefix}CONFIG_TIMEOUT", C.CONFIG_TIMEOUT),
            max_retries=_env_int(f"{prefix}MAX_RETRIES", C.MAX_RETRIES),
            backoff_base=_env_float(f"{prefix}BACKOFF", C.BACKOFF_BASE),
            quorum=_env_int(f"{prefix}QUORUM", C.PEER_QUORUM),
            wallet_api_port=_env_int(f"{prefix}WALLET_API_PORT", C.WALLET_API_PORT),
            api_plugin=_env(f"{prefix}API_PLUGIN") or C.CORE_API_PLUGIN,
            user_agent=_env(f"{prefix}USER_AGENT") or _default_user_agent(),
            seeds_file=_env(f"{prefix}SEEDS_FILE") or None,
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["ClientConfig"] = None, **overrides: Any
    ) -> "ClientConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        data["self_addresses"] = tuple(data["self_addresses"])
        data["ok_statuses"] = tuple(data["ok_statuses"])
        return cls(**data)

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(retries=self.max_retries, base=self.backoff_base)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_timeout": float(self.request_timeout),
            "probe_timeout": float(self.probe_timeout),
            "config_timeout": float(self.config_timeout),
            "max_retries": int(self.max_retries),
            "backoff_base": float(self.backoff_base),
            "quorum": int(self.quorum),
            "self_addresses": list(self.self_addresses),
            "ok_statuses": list(self.ok_statuses),
            "wallet_api_port": int(self.wallet_api_port),
            "api_plugin": self.api_plugin,
            "user_agent": self.user_agent,
            "seeds_file": self.seeds_file,
        }


__all__ = ["ClientConfig"]
