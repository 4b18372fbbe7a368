"""Pydantic configuration models for bundle-compressed.

This module provides:
- ExtractionConfig: Traversal and content extraction settings
- ExtensionDescriptor: Identity of the stats extension producing the payload
"""

from __future__ import annotations

import codecs

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bundle_compressed import __version__

DEFAULT_LITERAL_MODULE_TYPES: frozenset[str] = frozenset({"CssModule", "css/mini-extract"})


class ExtractionConfig(BaseModel):
    """Settings controlling how a build graph is walked and decoded.

    Attributes:
        recursive: Walk child compilations (default True).
        encoding: Text encoding for string content (default "utf-8").
        literal_module_types: Declared module types or class names whose
            ``content`` field is forwarded as-is.
        legacy_template: Module template used to render legacy-shaped modules.

    Example:
        >>> config = ExtractionConfig(recursive=False)
        >>> config.encoding
        'utf-8'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    recursive: bool = Field(
        default=True,
        description="Recurse into child compilations",
    )
    encoding: str = Field(
        default="utf-8",
        min_length=1,
        description="Encoding used to turn string content into bytes",
    )
    literal_module_types: frozenset[str] = Field(
        default=DEFAULT_LITERAL_MODULE_TYPES,
        description="Module types carrying literal content",
    )
    legacy_template: str = Field(
        default="javascript",
        min_length=1,
        description="Key of the module template used for legacy rendering",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding is known to the codecs registry."""
        try:
            return codecs.lookup(v).name
        except LookupError as exc:
            msg = f"Unknown encoding: {v}"
            raise ValueError(msg) from exc


class ExtensionDescriptor(BaseModel):
    """Identity of the extension that produced the compressed stats.

    Example:
        >>> ExtensionDescriptor().name
        'bundle-compressed'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="bundle-compressed", min_length=1)
    version: str = Field(default=__version__, min_length=1)
    author: str | None = Field(default=None, description="Extension author")
    homepage: str | None = Field(default=None, description="Extension homepage URL")
