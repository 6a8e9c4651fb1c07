"""Logging filter that masks sensitive data before records are emitted.

Usage:
    import logging
    from logmask.security.logging_filter import attach_masking_filter

    handler = logging.StreamHandler()
    attach_masking_filter(handler)
    logging.getLogger().addHandler(handler)
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from logmask.common.pii.config import MaskingConfig
from logmask.common.pii.gate import mask


class MaskingFilter(logging.Filter):
    """Mask ``record.msg`` and ``record.args`` in place; never drops a record."""

    def __init__(self, config: Optional[MaskingConfig] = None) -> None:
        super().__init__()
        self.config = config

    def _mask(self, value: Any) -> Any:
        return mask(value, self.config)

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.args:
            record.msg = self._mask(record.msg)
            return True

        # a masked format string can lose its placeholders, so render first
        try:
            message = record.getMessage()
        except (TypeError, ValueError, KeyError):
            # leave the mismatch for the handler's handleError, with args masked
            record.msg = self._mask(record.msg)
            if isinstance(record.args, Mapping):
                record.args = self._mask(dict(record.args))
            else:
                record.args = self._mask(record.args)
            return True
        record.msg = self._mask(message)
        record.args = None
        return True


def attach_masking_filter(
    target: Union[logging.Handler, logging.Logger],
    config: Optional[MaskingConfig] = None,
) -> MaskingFilter:
    """Add a MaskingFilter to a handler or logger and return it.

    Logger-level filters do not see records propagated from child loggers;
    attach to the handler to cover a whole tree.
    """
    masking_filter = MaskingFilter(config)
    target.addFilter(masking_filter)
    return masking_filter


__all__ = ["MaskingFilter", "attach_masking_filter"]
