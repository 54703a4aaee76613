"""Declarative models for bounded integer types.

An IntegerTypeConfig describes a bounded type as data, e.g. loaded from
JSON or YAML::

    {"name": "Int8", "bounds": [-128, 127], "overflow": "wrap"}
    {"name": "Mod5", "modulus": 5}

``build()`` turns it into a certified BoundedInteger type via the
factory.  This module defines the models and the loader only.
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, Field, field_validator, model_validator

from bounded import BoundedInteger
from bounds import Bounds, OverflowMode
from config import Settings
from factory import DarkFactory


class IntegerTypeConfig(BaseModel):
    """Declaration of one bounded integer type."""

    name: str = Field(..., min_length=1, max_length=128)
    bounds: tuple[int, int] | None = Field(
        default=None,
        description="Inclusive [lo, hi] domain",
    )
    modulus: int | None = Field(default=None, ge=2)
    overflow: OverflowMode = OverflowMode.WRAP
    description: str = Field(default="", max_length=512)

    @field_validator("name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"Type name must be a valid identifier, got {v!r}")
        return v

    @model_validator(mode="after")
    def exactly_one_domain(self) -> IntegerTypeConfig:
        if (self.bounds is None) == (self.modulus is None):
            raise ValueError("Give exactly one of 'bounds' or 'modulus'")
        if self.modulus is not None and self.overflow != OverflowMode.WRAP:
            raise ValueError("A 'modulus' type always wraps")
        if self.bounds is not None:
            lo, hi = self.bounds
            if lo > hi:
                raise ValueError(f"lo ({lo}) must be <= hi ({hi})")
            if not (lo <= 0 and 1 <= hi):
                raise ValueError(
                    f"bounds [{lo}, {hi}] must contain the ring identities 0 and 1"
                )
        return self

    def to_bounds(self) -> Bounds:
        if self.modulus is not None:
            return Bounds(lo=0, hi=self.modulus - 1, overflow=OverflowMode.WRAP)
        lo, hi = self.bounds
        return Bounds(lo=lo, hi=hi, overflow=self.overflow)

    def build(self, settings: Settings | None = None) -> type[BoundedInteger]:
        """Create and certify the declared type."""
        return DarkFactory.create(self.name, self.to_bounds(), settings)


def load_types(
    payloads: Iterable[dict[str, Any] | IntegerTypeConfig],
    settings: Settings | None = None,
) -> dict[str, type[BoundedInteger]]:
    """Build every declared type; names must be unique."""
    types: dict[str, type[BoundedInteger]] = {}
    for payload in payloads:
        cfg = (
            payload if isinstance(payload, IntegerTypeConfig)
            else IntegerTypeConfig.model_validate(payload)
        )
        if cfg.name in types:
            raise ValueError(f"Duplicate type name: {cfg.name!r}")
        types[cfg.name] = cfg.build(settings)
    return types
