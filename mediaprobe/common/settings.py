# mediaprobe/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional
from pydantic import BaseModel, Field, field_validator, computed_field
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from mediaprobe.common.strings.splitters import csv_to_list
from mediaprobe.domain.enums.media_kind import MediaKind
from mediaprobe.domain.errors import UnsupportedMediaKindError


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class ConcurrencyConfig(BaseModel):
    probe_workers: int = Field(4, ge=1, le=64)
    thread_queue_maxsize: int = 64
    cancel_on_exit: bool = True

    @field_validator("cancel_on_exit", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)


class FFProbeConfig(BaseModel):
    bin: str = "ffprobe"
    timeout_sec: int = Field(30, ge=1)
    log_level: str = "error"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "mediaprobe"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Paths & layout --------
    data_root: Path = Path("~/.local/share/mediaprobe").expanduser()
    cache_subdir: str = "cache"
    ffprobe_audio_cache_subdir: str = "ffprobe-audio"

    # Optional absolute override (leave empty to use DATA_ROOT + cache_subdir + subdir)
    ffprobe_audio_cache_override: Optional[Path] = Field(default=None, alias="FFPROBE_AUDIO_CACHE_DIR")

    # -------- Allowed extensions --------
    audio_exts: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["mp3", "flac", "m4a", "aac", "ogg", "opus", "wav", "wma", "ape"]
    )

    @field_validator("audio_exts", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)

    # -------- Sub-configs --------
    ffprobe: FFProbeConfig = FFProbeConfig()
    concurrency: ConcurrencyConfig = ConcurrencyConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # ===== Derived paths =====
    @computed_field  # type: ignore[misc]
    @property
    def cache_root(self) -> Path:
        return self.data_root / self.cache_subdir

    @computed_field  # type: ignore[misc]
    @property
    def ffprobe_audio_cache_root(self) -> Path:
        if self.ffprobe_audio_cache_override:
            return Path(self.ffprobe_audio_cache_override)
        return self.cache_root / self.ffprobe_audio_cache_subdir

    def cache_root_for(self, kind: MediaKind) -> Path:
        """Probe cache root for a media kind. Only audio is probed by this package."""
        if kind == MediaKind.audio:
            return self.ffprobe_audio_cache_root
        raise UnsupportedMediaKindError(f"No probe cache configured for media kind {kind!s}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Read it at composition time and pass
    the values you need down explicitly:
        from mediaprobe.common.settings import get_settings
        cfg = get_settings()
    """
    s = Settings()  # pydantic_settings will read from .env automatically
    if s.app_env in ("development", "test"):
        for p in (s.data_root, s.cache_root):
            p.mkdir(parents=True, exist_ok=True)
    return s
