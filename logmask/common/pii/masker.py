from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, FrozenSet, Iterable, Tuple

from .patterns import (
    CATALOG,
    CATEGORY_ORDER,
    DEFAULT_MAX_DEPTH,
    JWT_SEGMENT_THRESHOLD,
    MASK_TOKEN,
    MAX_STRING_LENGTH,
    Category,
)

log = logging.getLogger("logmask.masker")

_SCALARS = (bool, int, float, complex)


def _normalize_categories(categories: Iterable[Category | str] | None) -> FrozenSet[Category]:
    if categories is None:
        return frozenset(CATEGORY_ORDER)
    return frozenset(Category(c) for c in categories)


def _is_jwt(text: str) -> bool:
    (jwt_shape,) = CATALOG[Category.JWT]
    if not jwt_shape.fullmatch(text):
        return False
    _, payload, signature = text.split(".")
    return len(payload) > JWT_SEGMENT_THRESHOLD or len(signature) > JWT_SEGMENT_THRESHOLD


class SensitiveDataMasker:
    """Masks sensitive substrings in text and in nested containers.

    Instances are immutable and safe to share between threads. ``categories``
    selects the active rule families (all of them when omitted) and
    ``max_depth`` bounds the structural walk; nodes at or below that depth
    are returned as-is.
    """

    def __init__(
        self,
        *,
        categories: Iterable[Category | str] | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._categories = _normalize_categories(categories)
        self._passes = tuple(c for c in CATEGORY_ORDER if c in self._categories)
        self._max_depth = max_depth

    @property
    def categories(self) -> FrozenSet[Category]:
        return self._categories

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def mask_text_with_count(self, text: Any) -> Tuple[Any, int]:
        """Mask ``text`` and return ``(masked, replacements)``.

        Non-string and empty input is returned unchanged. Input longer than
        ``MAX_STRING_LENGTH`` is replaced wholesale without being scanned.

        The pass sequence repeats until a full round replaces nothing: a
        later pass can put ``****`` next to text an earlier ``\\b``-anchored
        pass skipped. Every rule matches more than four characters, so each
        replacement shortens the string and the loop ends.
        """
        if not isinstance(text, str) or not text:
            return text, 0
        if len(text) > MAX_STRING_LENGTH:
            log.debug("oversized string masked wholesale length=%d limit=%d", len(text), MAX_STRING_LENGTH)
            return MASK_TOKEN, 1

        out = text
        count = 0
        while True:
            out, hits = self._run_passes(out)
            if not hits:
                return out, count
            count += hits

    def _run_passes(self, text: str) -> Tuple[str, int]:
        out = text
        count = 0
        for category in self._passes:
            if category is Category.JWT:
                if _is_jwt(out):
                    out = MASK_TOKEN
                    count += 1
                continue
            for pattern in CATALOG[category]:
                out, hits = pattern.subn(MASK_TOKEN, out)
                count += hits
        return out, count

    def mask_text(self, text: Any) -> Any:
        return self.mask_text_with_count(text)[0]

    def mask_value_with_count(self, value: Any, current_depth: int = 0) -> Tuple[Any, int]:
        if current_depth >= self._max_depth:
            if log.isEnabledFor(logging.DEBUG) and isinstance(value, (str, list, tuple, Mapping)):
                log.debug(
                    "depth limit reached, subtree left unmasked depth=%d max_depth=%d type=%s",
                    current_depth,
                    self._max_depth,
                    type(value).__name__,
                )
            return value, 0

        if value is None or isinstance(value, _SCALARS):
            return value, 0

        if isinstance(value, str):
            return self.mask_text_with_count(value)

        if isinstance(value, (list, tuple)):
            items = []
            total = 0
            for item in value:
                masked, hits = self.mask_value_with_count(item, current_depth + 1)
                items.append(masked)
                total += hits
            if isinstance(value, list):
                return items, total
            if hasattr(value, "_fields"):
                return type(value)(*items), total
            return tuple(items), total

        if isinstance(value, Mapping):
            out = {}
            total = 0
            for key, item in value.items():
                masked, hits = self.mask_value_with_count(item, current_depth + 1)
                out[key] = masked
                total += hits
            return out, total

        return value, 0

    def mask_value(self, value: Any, current_depth: int = 0) -> Any:
        """Return a masked copy of ``value`` with the same shape."""
        return self.mask_value_with_count(value, current_depth)[0]

    def __repr__(self) -> str:
        names = ",".join(c.value for c in self._passes)
        return f"SensitiveDataMasker(categories=[{names}], max_depth={self._max_depth})"


_ALL_CATEGORIES = SensitiveDataMasker()


def mask_string(text: Any, categories: Iterable[Category | str] | None = None) -> Any:
    if categories is None:
        return _ALL_CATEGORIES.mask_text(text)
    return SensitiveDataMasker(categories=categories).mask_text(text)


def mask_object(
    value: Any,
    max_depth: int = DEFAULT_MAX_DEPTH,
    current_depth: int = 0,
    categories: Iterable[Category | str] | None = None,
) -> Any:
    if categories is None and max_depth == DEFAULT_MAX_DEPTH:
        return _ALL_CATEGORIES.mask_value(value, current_depth)
    return SensitiveDataMasker(categories=categories, max_depth=max_depth).mask_value(value, current_depth)


__all__ = ["SensitiveDataMasker", "mask_object", "mask_string"]
