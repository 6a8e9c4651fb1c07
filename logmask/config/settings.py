# logmask/config/settings.py
"""
Masking settings with Pydantic v2 BaseSettings.

Environment variables with LOGMASK_ prefix, or a JSON/YAML profile file
pointed to by LOGMASK_PROFILE.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from logmask.common.pii.config import DEFAULT_MASKING_CONFIG, MaskingConfig
from logmask.common.pii.patterns import DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING

log = logging.getLogger("logmask.config")

_PROFILE_KEYS = frozenset(MaskingConfig.model_fields) | frozenset(
    field.alias for field in MaskingConfig.model_fields.values() if field.alias
)


class MaskingSettings(BaseSettings):
    """Masking switches read from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="LOGMASK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    ENABLED: bool = Field(default=False, description="Master switch; off means identity pass")
    MASK_EMAILS: bool = True
    MASK_SSNS: bool = True
    MASK_PRIVATE_KEYS: bool = True
    MASK_BASE64_BLOBS: bool = True
    MASK_JWTS: bool = True
    MASK_API_KEYS: bool = True
    MASK_BEARER_TOKENS: bool = True
    MASK_PASSWORDS: bool = True
    MASK_GENERIC_SECRETS: bool = True
    MAX_DEPTH: int = Field(default=DEFAULT_MAX_DEPTH, ge=0, le=MAX_DEPTH_CEILING)
    PROFILE: Optional[str] = Field(default=None, description="JSON/YAML profile path; overrides the flags above")

    def to_masking_config(self) -> MaskingConfig:
        return MaskingConfig(
            enabled=self.ENABLED,
            mask_emails=self.MASK_EMAILS,
            mask_ssns=self.MASK_SSNS,
            mask_private_keys=self.MASK_PRIVATE_KEYS,
            mask_base64_blobs=self.MASK_BASE64_BLOBS,
            mask_jwts=self.MASK_JWTS,
            mask_api_keys=self.MASK_API_KEYS,
            mask_bearer_tokens=self.MASK_BEARER_TOKENS,
            mask_passwords=self.MASK_PASSWORDS,
            mask_generic_secrets=self.MASK_GENERIC_SECRETS,
            max_depth=self.MAX_DEPTH,
        )


def _read_profile(file: Path) -> Any:
    text = file.read_text(encoding="utf-8")
    if file.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_profile(path: str | Path) -> MaskingConfig:
    """Load a MaskingConfig from a JSON or YAML profile.

    Keys may be snake_case or camelCase and may sit under a top-level
    ``masking`` key. A missing or unreadable profile falls back to
    DEFAULT_MASKING_CONFIG; invalid values raise ValidationError.
    """
    file = Path(path)
    if not file.exists():
        log.warning("masking profile not found path=%s, using defaults", file)
        return DEFAULT_MASKING_CONFIG
    try:
        data = _read_profile(file)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        log.warning("masking profile unreadable path=%s error=%s, using defaults", file, exc)
        return DEFAULT_MASKING_CONFIG

    if isinstance(data, dict) and isinstance(data.get("masking"), dict):
        data = data["masking"]
    if not isinstance(data, dict):
        log.warning("masking profile is not a mapping path=%s, using defaults", file)
        return DEFAULT_MASKING_CONFIG

    section: Dict[str, Any] = data
    unknown = sorted(str(k) for k in section if k not in _PROFILE_KEYS)
    if unknown:
        log.warning("masking profile has unknown keys path=%s keys=%s", file, ",".join(unknown))
    return MaskingConfig.model_validate(section)


def load_masking_config() -> MaskingConfig:
    """Resolve the process masking config: profile file first, then env flags."""
    settings = MaskingSettings()
    if settings.PROFILE:
        return load_profile(settings.PROFILE)
    return settings.to_masking_config()


__all__ = ["MaskingSettings", "load_masking_config", "load_profile"]
