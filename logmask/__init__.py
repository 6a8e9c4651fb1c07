"""
logmask: secret and PII masking for log records
"""
from .common.pii import (
    DEFAULT_MASKING_CONFIG,
    MASK_TOKEN,
    Category,
    MaskingConfig,
    SensitiveDataMasker,
    build_masker,
    mask,
    mask_object,
    mask_string,
    mask_with_config,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MASKING_CONFIG",
    "MASK_TOKEN",
    "Category",
    "MaskingConfig",
    "SensitiveDataMasker",
    "build_masker",
    "mask",
    "mask_object",
    "mask_string",
    "mask_with_config",
]
