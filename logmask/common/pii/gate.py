from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from .config import DEFAULT_MASKING_CONFIG, MaskingConfig
from .masker import SensitiveDataMasker, mask_object


@lru_cache(maxsize=32)
def build_masker(config: MaskingConfig) -> SensitiveDataMasker:
    """Masker applying exactly the categories ``config`` turns on."""
    return SensitiveDataMasker(categories=config.active_categories(), max_depth=config.max_depth)


def mask_with_config(value: Any, config: MaskingConfig = DEFAULT_MASKING_CONFIG) -> Any:
    if not config.enabled:
        return value
    return build_masker(config).mask_value(value)


def mask(value: Any, config: Optional[MaskingConfig] = None) -> Any:
    """Entry point for log emitters.

    Without a config every category is applied at the default depth;
    with one, the config decides (including turning masking off).
    """
    if config is None:
        return mask_object(value)
    return mask_with_config(value, config)


__all__ = ["build_masker", "mask", "mask_with_config"]
