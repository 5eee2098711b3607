"""Synthesis model documents persisted in the sound bank."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_FORBIDDEN_ID_CHARS = ("/", "\\", "\x00")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HarmonicPartial(_CamelModel):
    idx: int = Field(ge=1, description="1-based partial index")
    amp: float = Field(ge=0.0, le=1.0)


class NoiseBand(_CamelModel):
    freq: float = Field(gt=0.0, description="Center frequency in Hz")
    gain: float = Field(ge=0.0, le=1.0)


class HarmonicModel(_CamelModel):
    f0: float = Field(gt=0.0, description="Fundamental in Hz")
    partial_count: int = Field(ge=0)
    partials: List[HarmonicPartial] = Field(default_factory=list)
    decay: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class NoiseModel(_CamelModel):
    tilt: float = Field(default=0.0, ge=-1.0, le=1.0, description="Negative is darker, positive brighter")
    bands: List[NoiseBand] = Field(default_factory=list)


class Envelope(_CamelModel):
    attack: float = Field(ge=0.0, description="Seconds")
    release: float = Field(ge=0.0, description="Seconds")


class ModelSource(_CamelModel):
    filename: str


class ModelMeta(_CamelModel):
    id: str
    created_at: int
    updated_at: int
    tags: List[str] = Field(default_factory=list)
    source: Optional[ModelSource] = None

    @field_validator("id")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        return validate_model_id(value)


class SmsModel(_CamelModel):
    method: Literal["sms"] = "sms"
    name: str
    harmonic: HarmonicModel
    noise: NoiseModel
    envelope: Envelope
    meta: ModelMeta

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    @classmethod
    def from_json(cls, payload: str) -> "SmsModel":
        return cls.model_validate_json(payload)


def validate_model_id(value: str) -> str:
    """Ensure ``value`` can be used as a single file name."""
    value = value.strip()
    if not value or value in {".", ".."}:
        raise ValueError("Model id must not be empty")
    if any(char in value for char in _FORBIDDEN_ID_CHARS):
        raise ValueError(f"Model id must not contain path separators: {value!r}")
    return value


__all__ = [
    "Envelope",
    "HarmonicModel",
    "HarmonicPartial",
    "ModelMeta",
    "ModelSource",
    "NoiseBand",
    "NoiseModel",
    "SmsModel",
    "validate_model_id",
]
