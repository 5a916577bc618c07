"""
SDK configuration: execution backend selection, compiler location and logging.

- Loads sane defaults and supports overrides via environment variables (SANDBOX_*).
- Resolves the execution backend factory from a ``"module:attr"`` path.
"""

from __future__ import annotations

import importlib
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .errors import BackendUnavailableError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("console", "json")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v not in (None, "") else default


def _parse_log_level(val: Optional[str], default: str = "INFO") -> str:
    if not val:
        return default
    level = val.strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"log level must be one of {_LOG_LEVELS}, got: {val!r}")
    return level


def _parse_log_format(val: Optional[str], default: str = "console") -> str:
    if not val:
        return default
    fmt = val.strip().lower()
    if fmt not in _LOG_FORMATS:
        raise ValueError(f"log format must be one of {_LOG_FORMATS}, got: {val!r}")
    return fmt


@dataclass(slots=True)
class SandboxConfig:
    # "package.module:Factory" returning a fresh backend session when called
    backend: Optional[str] = None
    # Explicit path to the `sui` binary; skips discovery when set
    sui_bin: Optional[str] = None
    log_level: str = field(default="INFO")
    log_format: str = field(default="console")

    @classmethod
    def from_env(cls, prefix: str = "SANDBOX_") -> "SandboxConfig":
        """
        Create config from environment variables:

        SANDBOX_BACKEND      ("module:attr" of the backend session factory)
        SANDBOX_SUI_BIN      (path to the sui CLI)
        SANDBOX_LOG_LEVEL    (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        SANDBOX_LOG_FORMAT   (console/json)
        """
        return cls(
            backend=_env(f"{prefix}BACKEND"),
            sui_bin=_env(f"{prefix}SUI_BIN"),
            log_level=_parse_log_level(_env(f"{prefix}LOG_LEVEL")),
            log_format=_parse_log_format(_env(f"{prefix}LOG_FORMAT")),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["SandboxConfig"] = None, **overrides: Any
    ) -> "SandboxConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys and None values are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data and v is not None})
        data["log_level"] = _parse_log_level(data["log_level"])
        data["log_format"] = _parse_log_format(data["log_format"])
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backend": self.backend,
            "sui_bin": self.sui_bin,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


def load_backend_factory(path: str) -> Callable[[], Any]:
    """
    Import a backend session factory from ``"package.module:attr"``.

    The attribute may be a class or any zero-argument callable returning a
    backend session.
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise BackendUnavailableError(
            f"backend path must look like 'package.module:Factory', got {path!r}"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise BackendUnavailableError(f"cannot import backend module {module_name!r}: {e}") from e
    factory = module
    for part in attr.split("."):
        try:
            factory = getattr(factory, part)
        except AttributeError as e:
            raise BackendUnavailableError(
                f"backend module {module_name!r} has no attribute {attr!r}"
            ) from e
    if not callable(factory):
        raise BackendUnavailableError(f"backend factory {path!r} is not callable")
    return factory


__all__ = ["SandboxConfig", "load_backend_factory"]
