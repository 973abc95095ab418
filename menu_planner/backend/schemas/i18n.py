"""
Multilingual Text Schemas.

Every user-facing name is kept in English, Spanish and Catalan.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Language = Literal["en", "es", "ca"]

LANGUAGES: tuple[Language, ...] = ("en", "es", "ca")


class MultilingualText(BaseModel):
    """Text required in all three locales."""

    en: str = Field(..., min_length=1, max_length=255, examples=["Paella"])
    es: str = Field(..., min_length=1, max_length=255, examples=["Paella"])
    ca: str = Field(..., min_length=1, max_length=255, examples=["Paella"])

    model_config = ConfigDict(str_strip_whitespace=True, from_attributes=True)

    def values(self) -> list[str]:
        return [getattr(self, lang) for lang in LANGUAGES]


class OptionalMultilingualText(BaseModel):
    """Text where each locale may be missing (menu descriptions)."""

    en: str | None = Field(default=None, max_length=2000)
    es: str | None = Field(default=None, max_length=2000)
    ca: str | None = Field(default=None, max_length=2000)

    model_config = ConfigDict(str_strip_whitespace=True, from_attributes=True)

    def values(self) -> list[str]:
        return [value for value in (self.en, self.es, self.ca) if value]
