"""Pydantic models describing the managed language configuration."""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self

DEFAULT_TRANSLATE_ENDPOINT = "https://translate.googleapis.com/translate_a/single"

# Codes double as catalogue file stems, so they may not contain separators.
_LANGUAGE_CODE_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class LanguageConfig(ImmutableModel):
    """A managed language and the tag used when talking to the translator."""

    code: str
    provider_code: str | None = None
    reference: bool = False
    label: str | None = None

    @field_validator("code", mode="before")
    @classmethod
    def _validate_code(cls, value: Any) -> str:
        if not isinstance(value, str) or not _LANGUAGE_CODE_PATTERN.match(value):
            raise ConfigurationError(
                f"Language code {value!r} must be a file-safe identifier"
            )
        return value

    @computed_field
    @property
    def translation_code(self) -> str:
        return self.provider_code or self.code

    @computed_field
    @property
    def filename(self) -> str:
        return f"{self.code}.json"


class TranslatorConfig(ImmutableModel):
    """Connection settings for the default HTTP translation provider."""

    endpoint: str = DEFAULT_TRANSLATE_ENDPOINT
    client: str = "gtx"
    data_type: str = "t"
    timeout: float = 10.0


class ManagerConfiguration(ImmutableModel):
    """Top-level configuration: which catalogues exist and how to fill them."""

    base_dir: str | None = None
    workers: int = 1
    languages: Sequence[LanguageConfig] = Field(default_factory=tuple)
    translator: TranslatorConfig = Field(default_factory=TranslatorConfig)

    @field_validator("languages", mode="before")
    @classmethod
    def _coerce_languages(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, Mapping):
            # Shorthand: ``{code: provider_code}`` pairs, first entry is the reference.
            return tuple(
                {"code": code, "provider_code": provider, "reference": index == 0}
                for index, (code, provider) in enumerate(value.items())
            )
        return tuple(value)

    @model_validator(mode="after")
    def _validate_languages(self) -> Self:
        if not self.languages:
            raise ConfigurationError("At least one managed language must be configured")

        seen: set[str] = set()
        for language in self.languages:
            if language.code in seen:
                raise ConfigurationError(
                    f"Duplicate language code '{language.code}' declared in the configuration"
                )
            seen.add(language.code)

        references = [language.code for language in self.languages if language.reference]
        if len(references) != 1:
            raise ConfigurationError(
                "Exactly one reference language must be configured, "
                f"found {len(references)}"
            )
        return self

    @property
    def reference(self) -> LanguageConfig:
        return next(language for language in self.languages if language.reference)

    @property
    def ordered_languages(self) -> tuple[LanguageConfig, ...]:
        """Return the reference language followed by the others as declared."""

        reference = self.reference
        return (reference,) + tuple(
            language for language in self.languages if language is not reference
        )

    def get_language(self, code: str) -> LanguageConfig:
        for language in self.languages:
            if language.code == code:
                return language
        raise KeyError(code)


__all__ = [
    "ConfigurationError",
    "DEFAULT_TRANSLATE_ENDPOINT",
    "ImmutableModel",
    "LanguageConfig",
    "ManagerConfiguration",
    "TranslatorConfig",
]
