"""Structural types for the bundler build graph and the content sink.

The build graph is owned by the bundler. Its objects are described here with
``typing.Protocol`` so any object exposing the right attributes can be
walked; nothing in this package instantiates them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field


class Source(Protocol):
    """Generated or rendered source of a module."""

    def source(self) -> str | bytes: ...


class Chunk(Protocol):
    """Output chunk. ``runtime`` is truthy on the chunk owning the runtime."""

    runtime: Any


class ChunkGraph(Protocol):
    def get_module_chunks(self, module: Module) -> Iterable[Chunk]: ...


class CodeGenerationResults(Protocol):
    def get_source(self, module: Module, runtime: Any, source_type: str) -> Source | None: ...


class ModuleTemplate(Protocol):
    def render(
        self,
        module: Module,
        dependency_templates: Any,
        options: Mapping[str, Any],
    ) -> Source: ...


class Module(Protocol):
    """A source module of a compilation.

    Only ``readable_identifier`` is required of every module. The other
    members are read depending on the shape of the compilation:

    - ``modules``: sub-modules of a concatenated module
    - ``type`` / ``content``: literal-content modules
    - ``get_source_types()``: chunk-graph shape
    - ``id`` / ``get_chunks()``: legacy shape
    """

    def readable_identifier(self, request_shortener: Any) -> str: ...


class FileSystem(Protocol):
    def read_file(self, path: str) -> Any: ...


class Compiler(Protocol):
    output_path: str
    input_file_system: FileSystem | None


class Compilation(Protocol):
    """One build run: emitted assets, a module tree and child compilations."""

    hash: str | None
    assets: Mapping[str, Any]
    modules: Iterable[Module]
    children: Iterable[Compilation]
    compiler: Compiler


class ContentSink(Protocol):
    """External accumulator of compressed resource statistics."""

    def handle_resource(
        self,
        build_id: str | None,
        resource_name: str,
        content: bytes,
        compressor: Any,
    ) -> None: ...

    def get(self) -> Any: ...


class ModuleKind(str, Enum):
    """Content resolution strategy chosen once per module."""

    LITERAL = "literal"
    GRAPH_RESOLVABLE = "graph_resolvable"
    LEGACY_RENDERABLE = "legacy_renderable"
    UNSUPPORTED = "unsupported"


class ResourceRecord(BaseModel):
    """Resolved payload of one asset or module, handed straight to the sink.

    Attributes:
        build_id: Hash of the owning compilation.
        resource_name: Asset name or readable module identifier.
        content: Resolved bytes.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    build_id: str | None = Field(default=None, description="Compilation hash")
    resource_name: str = Field(..., description="Asset name or module identifier")
    content: bytes = Field(..., description="Resolved content")


class WalkSummary(BaseModel):
    """Counters describing one completed walk.

    Example:
        >>> summary = WalkSummary(compilations=2, assets_emitted=1)
        >>> summary.resources_emitted
        1
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    compilations: int = Field(default=0, ge=0)
    assets_emitted: int = Field(default=0, ge=0)
    assets_failed: int = Field(default=0, ge=0)
    modules_emitted: int = Field(default=0, ge=0)
    modules_skipped: int = Field(default=0, ge=0)

    @property
    def resources_emitted(self) -> int:
        """Total number of records forwarded to the sink."""
        return self.assets_emitted + self.modules_emitted


def to_bytes(content: str | bytes | bytearray | memoryview, encoding: str = "utf-8") -> bytes:
    """Return the byte representation of string or buffer content."""
    if isinstance(content, str):
        return content.encode(encoding)
    return bytes(content)
