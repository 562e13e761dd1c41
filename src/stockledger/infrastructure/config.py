"""Settings read from the environment, with defaults for local use."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.stock import DEFAULT_REORDER_LEVEL, DEFAULT_REORDER_QUANTITY

ENV_PREFIX = "STOCKLEDGER_"

# Project root when installed in editable mode (src/stockledger/infrastructure -> root).
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str = "INFO"
    reorder_level: int = DEFAULT_REORDER_LEVEL
    reorder_quantity: int = DEFAULT_REORDER_QUANTITY

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            data_dir=Path(env.get(f"{ENV_PREFIX}DATA_DIR", str(_DEFAULT_DATA_DIR))),
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
            reorder_level=_int(env, "REORDER_LEVEL", DEFAULT_REORDER_LEVEL),
            reorder_quantity=_int(env, "REORDER_QUANTITY", DEFAULT_REORDER_QUANTITY),
        )


def _int(env, name: str, default: int) -> int:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValidationError(f"{ENV_PREFIX}{name} cannot be negative, got {value}")
    return value
