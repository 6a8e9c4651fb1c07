from .config import DEFAULT_MASKING_CONFIG, MaskingConfig
from .gate import build_masker, mask, mask_with_config
from .masker import SensitiveDataMasker, mask_object, mask_string
from .patterns import CATALOG, CATEGORY_ORDER, MASK_TOKEN, MAX_STRING_LENGTH, Category, Rule, patterns_for

__all__ = [
    "CATALOG",
    "CATEGORY_ORDER",
    "Category",
    "DEFAULT_MASKING_CONFIG",
    "MASK_TOKEN",
    "MAX_STRING_LENGTH",
    "MaskingConfig",
    "Rule",
    "SensitiveDataMasker",
    "build_masker",
    "mask",
    "mask_object",
    "mask_string",
    "mask_with_config",
    "patterns_for",
]
