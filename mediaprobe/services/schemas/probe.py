# mediaprobe/services/schemas/probe.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_opt_str(v: Any) -> Optional[str]:
    # ffprobe prints most numbers as strings, but not always; normalize to str
    if v is None:
        return None
    if isinstance(v, bool):
        return str(v).lower()
    return str(v)


def _to_tag_dict(v: Any) -> Optional[Dict[str, str]]:
    if v is None:
        return None
    if not isinstance(v, dict):
        raise ValueError("tags must be an object")
    return {str(k): "" if val is None else str(val) for k, val in v.items()}


class FFprobeFormat(BaseModel):
    bit_rate: Optional[str] = None
    duration: Optional[str] = None
    format_name: Optional[str] = None
    tags: Optional[Dict[str, str]] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("bit_rate", "duration", "format_name", mode="before")
    @classmethod
    def _stringify(cls, v):
        return _to_opt_str(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v):
        return _to_tag_dict(v)


class FFprobeStream(BaseModel):
    index: Optional[int] = None
    codec_type: Optional[str] = None
    codec_name: Optional[str] = None
    channels: Optional[int] = None
    sample_rate: Optional[str] = None
    bit_rate: Optional[str] = None
    duration: Optional[str] = None
    tags: Optional[Dict[str, str]] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("codec_type", "codec_name", "sample_rate", "bit_rate", "duration", mode="before")
    @classmethod
    def _stringify(cls, v):
        return _to_opt_str(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v):
        return _to_tag_dict(v)


class FFprobeDocument(BaseModel):
    """`ffprobe -show_format -show_streams -print_format json` output."""
    format: Optional[FFprobeFormat] = None
    streams: List[FFprobeStream] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("streams", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return [] if v is None else v

    @property
    def is_empty(self) -> bool:
        return self.format is None and not self.streams
