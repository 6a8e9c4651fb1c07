from __future__ import annotations

from typing import Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field

from .patterns import CATEGORY_ORDER, DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING, Category

_CATEGORY_FLAGS: Dict[Category, str] = {
    Category.PRIVATE_KEY: "mask_private_keys",
    Category.BASE64_BLOB: "mask_base64_blobs",
    Category.JWT: "mask_jwts",
    Category.EMAIL: "mask_emails",
    Category.SSN: "mask_ssns",
    Category.API_KEY: "mask_api_keys",
    Category.BEARER_TOKEN: "mask_bearer_tokens",
    Category.PASSWORD: "mask_passwords",
    Category.GENERIC_SECRET: "mask_generic_secrets",
}


class MaskingConfig(BaseModel):
    """Which rule families fire, and how deep structured values are walked.

    Masking is off unless ``enabled`` is set; once enabled every category
    is active unless narrowed explicitly. Instances are frozen so one
    config can be shared by concurrent callers.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    enabled: bool = False
    mask_emails: bool = Field(default=True, alias="maskEmails")
    mask_ssns: bool = Field(default=True, alias="maskSSNs")
    mask_private_keys: bool = Field(default=True, alias="maskPrivateKeys")
    mask_base64_blobs: bool = Field(default=True, alias="maskBase64Blobs")
    mask_jwts: bool = Field(default=True, alias="maskJWTs")
    mask_api_keys: bool = Field(default=True, alias="maskApiKeys")
    mask_bearer_tokens: bool = Field(default=True, alias="maskBearerTokens")
    mask_passwords: bool = Field(default=True, alias="maskPasswords")
    mask_generic_secrets: bool = Field(default=True, alias="maskGenericSecrets")
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0, le=MAX_DEPTH_CEILING, alias="maxDepth")

    def is_enabled(self, category: Category | str) -> bool:
        return bool(getattr(self, _CATEGORY_FLAGS[Category(category)]))

    def active_categories(self) -> FrozenSet[Category]:
        return frozenset(c for c in CATEGORY_ORDER if self.is_enabled(c))

    @classmethod
    def only(cls, *categories: Category | str, max_depth: int = DEFAULT_MAX_DEPTH) -> "MaskingConfig":
        """Enabled config with exactly ``categories`` active."""
        wanted = {Category(c) for c in categories}
        flags = {flag: category in wanted for category, flag in _CATEGORY_FLAGS.items()}
        return cls(enabled=True, max_depth=max_depth, **flags)


DEFAULT_MASKING_CONFIG = MaskingConfig()


__all__ = ["DEFAULT_MASKING_CONFIG", "MaskingConfig"]
