"""Warehouse — a location that holds stock records."""

from __future__ import annotations

from dataclasses import dataclass

from stockledger.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Warehouse:

    id: str
    code: str
    name: str = ""

    def __post_init__(self) -> None:
        if not self.code or not self.code.strip():
            raise ValidationError("Warehouse code is required")
