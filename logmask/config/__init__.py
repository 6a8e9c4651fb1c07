from .settings import MaskingSettings, load_masking_config, load_profile

__all__ = ["MaskingSettings", "load_masking_config", "load_profile"]
