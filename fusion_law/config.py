# fusion_law/config.py
"""
Fusion Law Configuration

Constants and the runtime configuration shared by the engines:

- MAX_PURE_PIECE_SIZE: largest graded piece whose pure subsets are
  enumerated (a piece of size k has 2^k - 1 pure subsets)
- ENV_MAX_PURE_PIECE_SIZE: environment variable overriding the piece limit
"""

import os
from dataclasses import dataclass, replace


# =============================================================================
# Defaults
# =============================================================================

MAX_PURE_PIECE_SIZE = 16

ENV_MAX_PURE_PIECE_SIZE = "FUSION_LAW_MAX_PURE_PIECE_SIZE"

# Record marker used by the serializer
RECORD_CLASS = "Fusion law"


@dataclass(frozen=True)
class FusionLawConfig:
    """
    Runtime knobs for the useful rule engine.

    Attributes:
        max_pure_piece_size: Refuse to enumerate pure subsets of larger pieces
    """
    max_pure_piece_size: int = MAX_PURE_PIECE_SIZE

    def __post_init__(self):
        if self.max_pure_piece_size < 1:
            raise ValueError("max_pure_piece_size must be >= 1")

    @classmethod
    def from_env(cls) -> "FusionLawConfig":
        """Build a config, taking overrides from the environment."""
        raw = os.environ.get(ENV_MAX_PURE_PIECE_SIZE)
        if raw is None:
            return cls()
        try:
            size = int(raw)
        except ValueError:
            raise ValueError(f"{ENV_MAX_PURE_PIECE_SIZE} must be an integer, got {raw!r}")
        return cls(max_pure_piece_size=size)

    def with_overrides(self, **changes) -> "FusionLawConfig":
        return replace(self, **changes)


_config = FusionLawConfig.from_env()


def get_config() -> FusionLawConfig:
    """Return the active configuration."""
    return _config


def set_config(config: FusionLawConfig) -> FusionLawConfig:
    """Install a new configuration and return the previous one."""
    global _config
    previous = _config
    _config = config
    return previous
