"""
Security module: log record masking
"""
from .logging_filter import MaskingFilter, attach_masking_filter

__all__ = ["MaskingFilter", "attach_masking_filter"]
