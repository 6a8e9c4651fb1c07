"""Detection rule catalog for sensitive log content.

Rules are grouped by category and applied in ``CATEGORY_ORDER``. Every
pattern is bounded by character classes so matching stays linear in the
input length; the masker additionally refuses to scan strings longer than
``MAX_STRING_LENGTH``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Pattern, Tuple

MASK_TOKEN = "****"
MAX_STRING_LENGTH = 100_000
JWT_SEGMENT_THRESHOLD = 100
DEFAULT_MAX_DEPTH = 8
MAX_DEPTH_CEILING = 256

_FLAGS = re.ASCII
_IFLAGS = re.ASCII | re.IGNORECASE


class Category(str, Enum):
    """Sensitive data classes, declared in the order they are masked."""

    PRIVATE_KEY = "private_key"
    BASE64_BLOB = "base64_blob"
    JWT = "jwt"
    EMAIL = "email"
    SSN = "ssn"
    API_KEY = "api_key"
    BEARER_TOKEN = "bearer_token"
    PASSWORD = "password"
    GENERIC_SECRET = "generic_secret"


CATEGORY_ORDER: Tuple[Category, ...] = tuple(Category)


@dataclass(frozen=True)
class Rule:
    category: Category
    name: str
    pattern: Pattern[str]


def _rule(category: Category, name: str, pattern: str, flags: int = _FLAGS) -> Rule:
    return Rule(category=category, name=name, pattern=re.compile(pattern, flags))


RULES: Tuple[Rule, ...] = (
    # PEM blocks
    _rule(
        Category.PRIVATE_KEY,
        "pem_rsa",
        r"-----BEGIN\s+(?:RSA\s+)?PRIVATE\s+KEY-----\s*[\s\S]*?-----END\s+(?:RSA\s+)?PRIVATE\s+KEY-----",
        _IFLAGS,
    ),
    _rule(
        Category.PRIVATE_KEY,
        "pem_ec",
        r"-----BEGIN\s+EC\s+PRIVATE\s+KEY-----\s*[\s\S]*?-----END\s+EC\s+PRIVATE\s+KEY-----",
        _IFLAGS,
    ),
    _rule(
        Category.PRIVATE_KEY,
        "pem_dsa",
        r"-----BEGIN\s+DSA\s+PRIVATE\s+KEY-----\s*[\s\S]*?-----END\s+DSA\s+PRIVATE\s+KEY-----",
        _IFLAGS,
    ),
    _rule(Category.BASE64_BLOB, "base64_blob", r"[A-Za-z0-9+/=]{200,}"),
    # whole-string shape only, see JWT_SEGMENT_THRESHOLD
    _rule(Category.JWT, "jwt", r"[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
    _rule(
        Category.EMAIL,
        "email",
        r"\b[A-Za-z0-9][A-Za-z0-9._%+-]{0,63}@"
        r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
        r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*"
        r"\.[A-Za-z]{2,}\b",
    ),
    _rule(Category.SSN, "ssn", r"\b\d{3}-\d{2}-\d{4}\b|\b\d{9}\b"),
    _rule(Category.API_KEY, "openai", r"sk-[a-zA-Z0-9]{20,}"),
    _rule(Category.API_KEY, "openai_project", r"sk-proj-[a-zA-Z0-9_-]+"),
    _rule(Category.API_KEY, "anthropic", r"sk-ant-[a-zA-Z0-9_-]+"),
    _rule(Category.API_KEY, "aws_access_key", r"AKIA[0-9A-Z]{16}"),
    _rule(Category.API_KEY, "github_pat", r"ghp_[a-zA-Z0-9]{36}"),
    _rule(Category.API_KEY, "github_oauth", r"gho_[a-zA-Z0-9]{36}"),
    _rule(Category.API_KEY, "github_server", r"ghs_[a-zA-Z0-9]{36}"),
    _rule(Category.API_KEY, "github_user", r"ghu_[a-zA-Z0-9]{36}"),
    _rule(Category.API_KEY, "gitlab_pat", r"glpat-[a-zA-Z0-9_-]{20}"),
    _rule(Category.API_KEY, "slack", r"xox[baprs]-[a-zA-Z0-9-]+"),
    _rule(Category.API_KEY, "google_cloud", r"AIza[0-9A-Za-z_-]{35}"),
    _rule(Category.BEARER_TOKEN, "bearer", r"Bearer\s+[\w.-]+", _IFLAGS),
    _rule(Category.PASSWORD, "password", r"password[\s:=\"']+[^\s\"']+", _IFLAGS),
    _rule(Category.GENERIC_SECRET, "api_key", r"api[_-]?key[\s:=\"']+[\w-]+", _IFLAGS),
    _rule(Category.GENERIC_SECRET, "secret", r"secret[\s:=\"']+[^\s\"']+", _IFLAGS),
    _rule(Category.GENERIC_SECRET, "token", r"token[\s:=\"']+[^\s\"']+", _IFLAGS),
)


def _group_rules() -> Dict[Category, Tuple[Rule, ...]]:
    grouped: Dict[Category, Tuple[Rule, ...]] = {}
    for category in CATEGORY_ORDER:
        grouped[category] = tuple(r for r in RULES if r.category is category)
    return grouped


_RULES_BY_CATEGORY = MappingProxyType(_group_rules())

CATALOG: Mapping[Category, Tuple[Pattern[str], ...]] = MappingProxyType(
    {category: tuple(r.pattern for r in rules) for category, rules in _RULES_BY_CATEGORY.items()}
)


def rules_for(category: Category | str) -> Tuple[Rule, ...]:
    return _RULES_BY_CATEGORY[Category(category)]


def patterns_for(category: Category | str) -> Tuple[Pattern[str], ...]:
    """Return the compiled patterns detecting ``category``."""
    return CATALOG[Category(category)]


__all__ = [
    "CATALOG",
    "CATEGORY_ORDER",
    "Category",
    "DEFAULT_MAX_DEPTH",
    "JWT_SEGMENT_THRESHOLD",
    "MASK_TOKEN",
    "MAX_DEPTH_CEILING",
    "MAX_STRING_LENGTH",
    "RULES",
    "Rule",
    "patterns_for",
    "rules_for",
]
