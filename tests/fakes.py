"""In-memory build graph objects used by the unit tests.

They mirror the attributes the walker reads on real bundler objects and
record the calls made against them.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class FakeSource:
    def __init__(self, content: str | bytes) -> None:
        self.content = content

    def source(self) -> str | bytes:
        return self.content


class FakeChunk:
    def __init__(self, name: str, runtime: Any = None) -> None:
        self.name = name
        self.runtime = runtime


class FakeModule:
    """Module exposing every member read by the resolver."""

    def __init__(
        self,
        identifier: str,
        *,
        modules: Iterable[FakeModule] | None = None,
        type: str | None = None,  # noqa: A002
        content: Any = None,
        source_types: Iterable[str] = (),
        id: Any = None,  # noqa: A002
        chunks: Iterable[FakeChunk] = (),
    ) -> None:
        self.identifier = identifier
        self.modules = list(modules) if modules is not None else None
        self.type = type
        self.content = content
        self.source_types = list(source_types)
        self.id = id
        self.chunks = list(chunks)
        self.shorteners: list[Any] = []

    def readable_identifier(self, request_shortener: Any) -> str:
        self.shorteners.append(request_shortener)
        return self.identifier

    def get_source_types(self) -> list[str]:
        return list(self.source_types)

    def get_chunks(self) -> list[FakeChunk]:
        return list(self.chunks)

    def __repr__(self) -> str:
        return f"FakeModule({self.identifier!r})"


class CssModule(FakeModule):
    """Literal-content module recognized by its class name."""


class FakeChunkGraph:
    """Chunk graph returning a fixed chunk list, or successive lists per call."""

    def __init__(self, chunks: dict[str, list[FakeChunk] | list[list[FakeChunk]]]) -> None:
        self._chunks = chunks
        self.lookups: list[str] = []

    def get_module_chunks(self, module: FakeModule) -> list[FakeChunk]:
        self.lookups.append(module.identifier)
        chunks = self._chunks.get(module.identifier, [])
        if chunks and isinstance(chunks[0], list):
            return chunks[(self.lookups.count(module.identifier) - 1) % len(chunks)]  # type: ignore[return-value]
        return chunks  # type: ignore[return-value]


class FakeCodeGenerationResults:
    def __init__(self, sources: dict[tuple[str, Any, str], str | bytes]) -> None:
        self._sources = sources
        self.requests: list[tuple[str, Any, str]] = []

    def get_source(self, module: FakeModule, runtime: Any, source_type: str) -> FakeSource | None:
        key = (module.identifier, runtime, source_type)
        self.requests.append(key)
        content = self._sources.get(key)
        return FakeSource(content) if content is not None else None


class FakeModuleTemplate:
    def __init__(self, rendered: dict[str, str | bytes]) -> None:
        self._rendered = rendered
        self.renders: list[tuple[str, Any, dict[str, Any]]] = []

    def render(
        self, module: FakeModule, dependency_templates: Any, options: dict[str, Any]
    ) -> FakeSource:
        self.renders.append((module.identifier, dependency_templates, options))
        return FakeSource(self._rendered[module.identifier])


class AsyncFileSystem:
    def __init__(self, files: dict[str, Any]) -> None:
        self.files = files
        self.reads: list[str] = []

    async def read_file(self, path: str) -> Any:
        self.reads.append(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]


class SyncFileSystem:
    def __init__(self, files: dict[str, Any]) -> None:
        self.files = files
        self.reads: list[str] = []

    def read_file(self, path: str) -> Any:
        self.reads.append(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]


class FakeCompiler:
    def __init__(
        self,
        *,
        output_path: str = "/dist",
        input_file_system: Any = None,
        output_file_system: Any = None,
        request_shortener: Any = None,
    ) -> None:
        self.output_path = output_path
        self.input_file_system = input_file_system
        self.output_file_system = output_file_system
        self.request_shortener = request_shortener


class FakeCompilation:
    def __init__(
        self,
        hash: str | None,  # noqa: A002
        *,
        compiler: FakeCompiler | None = None,
        assets: dict[str, Any] | None = None,
        modules: Iterable[FakeModule] = (),
        children: Iterable[FakeCompilation] = (),
        chunk_graph: FakeChunkGraph | None = None,
        code_generation_results: FakeCodeGenerationResults | None = None,
        module_templates: dict[str, FakeModuleTemplate] | None = None,
        dependency_templates: Any = None,
    ) -> None:
        self.hash = hash
        self.compiler = compiler or FakeCompiler(input_file_system=AsyncFileSystem({}))
        self.assets = assets or {}
        self.modules = list(modules)
        self.children = list(children)
        self.chunk_graph = chunk_graph
        self.code_generation_results = code_generation_results
        self.module_templates = module_templates
        self.dependency_templates = dependency_templates


class RecordingSink:
    """Content sink recording every forwarded resource in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str | None, str, bytes, Any]] = []

    def handle_resource(
        self, build_id: str | None, resource_name: str, content: bytes, compressor: Any
    ) -> None:
        self.calls.append((build_id, resource_name, content, compressor))

    def get(self) -> dict[str, Any]:
        return {"resources": [name for _, name, _, _ in self.calls]}
