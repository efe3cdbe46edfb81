"""
config.py: Default limits and per-call options for imguri.

Defaults are plain constants. Every call receives its own EncodeOptions, so
concurrent callers with different settings never interfere.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Optional, Mapping

from .errors import InvalidArgument

# 128KB - practical for modern icons and small images
DEFAULT_SIZE_LIMIT = 131072
# Milliseconds, applied to each remote request separately
DEFAULT_TIMEOUT = 20000
DEFAULT_CONCURRENCY = 10

ENV_PREFIX = "IMGURI_"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _require_int(name: str, value, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidArgument(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class EncodeOptions:
    """Options for a single encode call.

    Attributes:
        force: Bypass the size gate.
        size_limit: Maximum accepted payload size in bytes.
        timeout: Deadline for each remote request in milliseconds.
        concurrency: Maximum number of inputs encoded at the same time in a batch.
    """
    force: bool = False
    size_limit: int = DEFAULT_SIZE_LIMIT
    timeout: int = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.force, bool):
            raise InvalidArgument(f"force must be a bool, got {self.force!r}")
        _require_int("size_limit", self.size_limit, 0)
        _require_int("timeout", self.timeout, 1)
        _require_int("concurrency", self.concurrency, 1)

    def with_overrides(self, **overrides) -> "EncodeOptions":
        """Return a copy with the given fields replaced (None values are ignored)."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise InvalidArgument(f"Unknown option(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EncodeOptions":
        """Build options from IMGURI_* environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        values = {}

        force = env.get(ENV_PREFIX + "FORCE")
        if force is not None:
            lowered = force.strip().lower()
            if lowered in _TRUTHY:
                values["force"] = True
            elif lowered in _FALSY:
                values["force"] = False
            else:
                raise InvalidArgument(f"{ENV_PREFIX}FORCE must be a boolean, got {force!r}")

        for name in ("size_limit", "timeout", "concurrency"):
            key = ENV_PREFIX + name.upper()
            raw = env.get(key)
            if raw is None or not raw.strip():
                continue
            try:
                values[name] = int(raw)
            except ValueError:
                raise InvalidArgument(f"{key} must be an integer, got {raw!r}")

        return cls(**values)


def resolve_options(options) -> EncodeOptions:
    """Accept None, an EncodeOptions instance, or a mapping of option fields."""
    if options is None:
        return EncodeOptions()
    if isinstance(options, EncodeOptions):
        return options
    if isinstance(options, Mapping):
        return EncodeOptions().with_overrides(**dict(options))
    raise InvalidArgument(f"options must be EncodeOptions or a mapping, got {type(options).__name__}")
