import os
from dataclasses import dataclass, replace
from typing import Optional

from .errors import ConfigError

FALLBACK_STEP_LIMIT = 5000


def default_step_limit(environ=None) -> int:
    """Per-call budget for run_once; BF_STEP_LIMIT if it is a positive integer."""
    env = os.environ if environ is None else environ
    try:
        limit = int(env.get("BF_STEP_LIMIT") or FALLBACK_STEP_LIMIT)
    except ValueError:
        return FALLBACK_STEP_LIMIT
    return limit if limit > 0 else FALLBACK_STEP_LIMIT


DEFAULT_STEP_LIMIT = default_step_limit()

TAPE_KINDS = ("sparse", "dense")
EOF_POLICIES = ("halt", "unchanged", "zero", "max")
CELL_WIDTHS = (8, 16, 32)


@dataclass
class VMConfig:
    cell_bits: int = 8
    tape: str = "sparse"
    tape_size: int = 30000
    circular: bool = False
    eof: str = "halt"
    step_limit: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.cell_bits not in CELL_WIDTHS:
            raise ConfigError(f"cell_bits must be one of {CELL_WIDTHS}, got {self.cell_bits}")
        if self.tape not in TAPE_KINDS:
            raise ConfigError(f"tape must be one of {TAPE_KINDS}, got {self.tape!r}")
        if self.tape_size <= 0:
            raise ConfigError(f"tape_size must be positive, got {self.tape_size}")
        if self.eof not in EOF_POLICIES:
            raise ConfigError(f"eof must be one of {EOF_POLICIES}, got {self.eof!r}")
        if self.step_limit is not None and self.step_limit <= 0:
            raise ConfigError(f"step_limit must be positive, got {self.step_limit}")

    @property
    def cell_modulus(self) -> int:
        return 1 << self.cell_bits

    def with_overrides(self, **changes) -> "VMConfig":
        """Copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, environ=None) -> "VMConfig":
        """Build a config from BF_* environment variables."""
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("BF_CELL_BITS"):
            kwargs["cell_bits"] = _parse_int("BF_CELL_BITS", env["BF_CELL_BITS"])
        if env.get("BF_TAPE"):
            kwargs["tape"] = env["BF_TAPE"].strip().lower()
        if env.get("BF_TAPE_SIZE"):
            kwargs["tape_size"] = _parse_int("BF_TAPE_SIZE", env["BF_TAPE_SIZE"])
        if env.get("BF_CIRCULAR"):
            kwargs["circular"] = _parse_bool("BF_CIRCULAR", env["BF_CIRCULAR"])
        if env.get("BF_EOF"):
            kwargs["eof"] = env["BF_EOF"].strip().lower()
        if env.get("BF_STEP_LIMIT"):
            limit = _parse_int("BF_STEP_LIMIT", env["BF_STEP_LIMIT"])
            kwargs["step_limit"] = limit or None
        return cls(**kwargs)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")
