"""Module content resolution.

A module's bytes come from one of three strategies, picked once per module
by :func:`classify_module`:

- LITERAL: the module carries its content (CSS-like modules)
- GRAPH_RESOLVABLE: generated source per declared source type, looked up
  through the chunk graph and the runtime of the owning chunk
- LEGACY_RENDERABLE: the module is rendered through a module template
  against the compilation's dependency templates
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bundle_compressed.errors import (
    SourceUnavailableError,
    StructuralMismatchError,
    UnresolvableModuleError,
)
from bundle_compressed.models import ModuleKind, ResourceRecord, to_bytes
from bundle_compressed.observability import get_logger

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from bundle_compressed.config import ExtractionConfig
    from bundle_compressed.models import Chunk, Compilation, ContentSink, Module


def classify_module(
    module: Module,
    compilation: Compilation,
    config: ExtractionConfig,
) -> ModuleKind:
    """Pick the content resolution strategy for a module.

    Args:
        module: Module to classify.
        compilation: Compilation owning the module.
        config: Extraction settings (literal module types, legacy template).

    Returns:
        The single strategy used for this module.

    Example:
        >>> classify_module(css_module, compilation, ExtractionConfig())
        <ModuleKind.LITERAL: 'literal'>
    """
    declared_type = getattr(module, "type", None)
    if (
        declared_type in config.literal_module_types
        or type(module).__name__ in config.literal_module_types
    ) and isinstance(getattr(module, "content", None), (str, bytes, bytearray)):
        return ModuleKind.LITERAL

    if getattr(compilation, "chunk_graph", None) is not None:
        return ModuleKind.GRAPH_RESOLVABLE

    templates = getattr(compilation, "module_templates", None) or {}
    if (
        config.legacy_template in templates
        and getattr(compilation, "dependency_templates", None) is not None
    ):
        return ModuleKind.LEGACY_RENDERABLE

    return ModuleKind.UNSUPPORTED


class ModuleContentResolver:
    """Resolves module bytes and forwards them to the content sink.

    Example:
        >>> resolver = ModuleContentResolver(sink, compressor="gzip", config=ExtractionConfig())
        >>> resolver.handle(module, compilation)
        True
    """

    def __init__(
        self,
        sink: ContentSink,
        compressor: Any,
        config: ExtractionConfig,
        *,
        logger: BoundLogger | None = None,
    ) -> None:
        self.sink = sink
        self.compressor = compressor
        self.config = config
        self._logger = logger or get_logger()

    def handle(self, module: Module, compilation: Compilation) -> bool:
        """Resolve a module and forward it to the sink.

        Skipped modules (legacy module without id, unsupported compilation
        shape) are logged and produce no record.

        Args:
            module: Module to resolve.
            compilation: Compilation owning the module.

        Returns:
            True if a record was forwarded, False if the module was skipped.
        """
        try:
            record = self.resolve(module, compilation)
        except UnresolvableModuleError as exc:
            self._logger.debug("legacy_module_skipped", module=exc.module)
            return False
        except StructuralMismatchError as exc:
            self._logger.warning(
                "module_shape_unsupported",
                build_id=exc.build_id,
                module=exc.module,
                error=str(exc),
            )
            return False

        self.sink.handle_resource(
            record.build_id,
            record.resource_name,
            record.content,
            self.compressor,
        )
        return True

    def resolve(self, module: Module, compilation: Compilation) -> ResourceRecord:
        """Resolve the identifier and bytes of a module.

        Args:
            module: Module to resolve.
            compilation: Compilation owning the module.

        Returns:
            ResourceRecord with the module's readable identifier and content.

        Raises:
            UnresolvableModuleError: Legacy module has no id.
            StructuralMismatchError: Compilation exposes no way to get source.
        """
        request_shortener = getattr(compilation.compiler, "request_shortener", None)
        identifier = module.readable_identifier(request_shortener)
        kind = classify_module(module, compilation, self.config)

        if kind is ModuleKind.LITERAL:
            content = to_bytes(module.content, self.config.encoding)  # type: ignore[attr-defined]
        elif kind is ModuleKind.GRAPH_RESOLVABLE:
            content = self._resolve_from_chunk_graph(module, compilation, identifier)
        elif kind is ModuleKind.LEGACY_RENDERABLE:
            content = self._render_legacy(module, compilation, identifier)
        else:
            raise StructuralMismatchError(compilation.hash, module=identifier)

        return ResourceRecord(
            build_id=compilation.hash,
            resource_name=identifier,
            content=content,
        )

    def _resolve_from_chunk_graph(
        self,
        module: Module,
        compilation: Compilation,
        identifier: str,
    ) -> bytes:
        chunk_graph = compilation.chunk_graph  # type: ignore[attr-defined]
        results = compilation.code_generation_results  # type: ignore[attr-defined]
        concatenated = b""

        for source_type in module.get_source_types():  # type: ignore[attr-defined]
            runtime_chunk = _find_runtime_chunk(chunk_graph.get_module_chunks(module))
            if runtime_chunk is None:
                continue

            source = results.get_source(module, runtime_chunk.runtime, source_type)
            content = source.source() if source is not None else None
            if content is None:
                self._logger.debug(
                    "module_source_unavailable",
                    error=str(SourceUnavailableError(identifier, source_type)),
                )
                continue

            concatenated += to_bytes(content, self.config.encoding)

        return concatenated

    def _render_legacy(
        self,
        module: Module,
        compilation: Compilation,
        identifier: str,
    ) -> bytes:
        if getattr(module, "id", None) is None:
            raise UnresolvableModuleError(identifier)

        chunks = list(module.get_chunks())  # type: ignore[attr-defined]
        template = compilation.module_templates[self.config.legacy_template]  # type: ignore[attr-defined]
        source = template.render(
            module,
            compilation.dependency_templates,  # type: ignore[attr-defined]
            {"chunk": chunks[0] if chunks else None},
        )
        return to_bytes(source.source(), self.config.encoding)


def _find_runtime_chunk(chunks: Any) -> Chunk | None:
    for chunk in chunks:
        if getattr(chunk, "runtime", None):
            return chunk
    return None
