"""Depth-first traversal of a compilation tree and its module trees.

Both walks use an explicit list as a stack instead of recursion, so deeply
nested child compilations or concatenated modules cannot hit the
interpreter's recursion limit. Containment is a tree, so no visited set is
kept.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from bundle_compressed.assets import AssetExtractor
from bundle_compressed.config import ExtractionConfig
from bundle_compressed.models import WalkSummary
from bundle_compressed.modules import ModuleContentResolver
from bundle_compressed.observability import compilation_operation, get_logger

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from bundle_compressed.models import Compilation, ContentSink, Module


class GraphWalker:
    """Walks compilations and forwards every asset and module to a sink.

    Attributes:
        config: Extraction settings.
        assets: Extractor used once per compilation.
        modules: Resolver used once per module.

    Example:
        >>> walker = GraphWalker(sink, compressor="gzip")
        >>> summary = await walker.walk(compilation)
        >>> summary.compilations
        3
    """

    def __init__(
        self,
        sink: ContentSink,
        compressor: Any,
        config: ExtractionConfig | None = None,
        *,
        logger: BoundLogger | None = None,
    ) -> None:
        """Initialize GraphWalker.

        Args:
            sink: Content sink receiving resolved resources.
            compressor: Opaque compressor spec passed through to the sink.
            config: Extraction settings. Uses defaults if not provided.
            logger: Optional structlog logger. Uses default if not provided.
        """
        self.config = config or ExtractionConfig()
        self._logger = logger or get_logger()
        self.assets = AssetExtractor(sink, compressor, self.config, logger=self._logger)
        self.modules = ModuleContentResolver(sink, compressor, self.config, logger=self._logger)

    async def walk(
        self,
        compilation: Compilation,
        *,
        recursive: bool | None = None,
    ) -> WalkSummary:
        """Visit a compilation and, if recursive, all of its descendants.

        Children are pushed before their parent is processed and popped last
        in first out, so the visit order is fixed for a fixed graph.

        Args:
            compilation: Root compilation.
            recursive: Recurse into child compilations. Falls back to
                ``config.recursive`` when None.

        Returns:
            WalkSummary with per-walk counters.
        """
        if recursive is None:
            recursive = self.config.recursive

        counters = dict.fromkeys(WalkSummary.model_fields, 0)
        stack: list[tuple[Compilation, int]] = [(compilation, 0)]

        while stack:
            cursor, depth = stack.pop()
            if recursive:
                stack.extend((child, depth + 1) for child in self._children(cursor))

            with compilation_operation(cursor.hash, depth=depth):
                try:
                    emitted, failed = await self.assets.extract(cursor)
                except Exception as exc:
                    self._logger.warning(
                        "compilation_assets_failed",
                        build_id=cursor.hash,
                        error=str(exc),
                        exc_info=True,
                    )
                else:
                    counters["assets_emitted"] += emitted
                    counters["assets_failed"] += failed

                try:
                    for module in self._iter_modules(cursor):
                        if self._handle_module(module, cursor):
                            counters["modules_emitted"] += 1
                        else:
                            counters["modules_skipped"] += 1
                except Exception as exc:
                    self._logger.warning(
                        "compilation_modules_failed",
                        build_id=cursor.hash,
                        error=str(exc),
                        exc_info=True,
                    )

            counters["compilations"] += 1

        summary = WalkSummary(**counters)
        self._logger.info("walk_completed", **summary.model_dump())
        return summary

    def _children(self, compilation: Compilation) -> list[Compilation]:
        try:
            return list(compilation.children)
        except Exception as exc:
            self._logger.warning(
                "compilation_children_failed",
                build_id=compilation.hash,
                error=str(exc),
            )
            return []

    @staticmethod
    def _iter_modules(compilation: Compilation) -> Iterator[Module]:
        stack: list[Module] = list(compilation.modules)
        while stack:
            module = stack.pop()
            sub_modules = getattr(module, "modules", None)
            if sub_modules:
                stack.extend(sub_modules)
            yield module

    def _handle_module(self, module: Module, compilation: Compilation) -> bool:
        try:
            return self.modules.handle(module, compilation)
        except Exception as exc:
            self._logger.warning(
                "module_resolution_failed",
                build_id=compilation.hash,
                error=str(exc),
                exc_info=True,
            )
            return False
