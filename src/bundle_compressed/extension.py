"""Compressed-size stats extension entry point."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from bundle_compressed.config import ExtensionDescriptor, ExtractionConfig
from bundle_compressed.walker import GraphWalker

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from bundle_compressed.models import Compilation, ContentSink, WalkSummary


class CompressedExtension:
    """Feeds the resources of a build into a compressed-stats accumulator.

    The compressor is opaque here and handed unchanged to the sink with every
    resource. Use one instance per build; ``get()`` returns whatever the sink
    accumulated.

    The descriptor identifies this extension in the stats payload. It is
    not sent with each resource; use ``from_sink_factory`` to build the sink
    from it, the way an accumulator keyed by its producing extension needs.

    Attributes:
        descriptor: Identity of this extension.
        compressor: Compressor name, preset or options.
        sink: Accumulator receiving resources.

    Example:
        >>> extension = CompressedExtension("gzip", sink)
        >>> await extension.handle_compilation(compilation)
        >>> payload = extension.get()
    """

    def __init__(
        self,
        compressor: Any,
        sink: ContentSink,
        *,
        config: ExtractionConfig | None = None,
        descriptor: ExtensionDescriptor | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self.descriptor = descriptor or ExtensionDescriptor()
        self.compressor = compressor
        self.sink = sink
        self._walker = GraphWalker(sink, compressor, config, logger=logger)

    @classmethod
    def from_sink_factory(
        cls,
        compressor: Any,
        sink_factory: Callable[[ExtensionDescriptor], ContentSink],
        *,
        config: ExtractionConfig | None = None,
        descriptor: ExtensionDescriptor | None = None,
        logger: BoundLogger | None = None,
    ) -> CompressedExtension:
        """Create an extension whose sink is built from its descriptor.

        Args:
            compressor: Compressor name, preset or options.
            sink_factory: Callable receiving the descriptor and returning the sink.
            config: Extraction settings. Uses defaults if not provided.
            descriptor: Extension identity. Uses package metadata if not provided.
            logger: Optional structlog logger.

        Returns:
            CompressedExtension bound to the created sink.

        Example:
            >>> extension = CompressedExtension.from_sink_factory("gzip", StatsGenerator)
        """
        descriptor = descriptor or ExtensionDescriptor()
        return cls(
            compressor,
            sink_factory(descriptor),
            config=config,
            descriptor=descriptor,
            logger=logger,
        )

    @property
    def config(self) -> ExtractionConfig:
        """Extraction settings used by the walker."""
        return self._walker.config

    async def handle_compilation(
        self,
        compilation: Compilation,
        recursive: bool | None = None,
    ) -> WalkSummary:
        """Forward every asset and module of a compilation tree to the sink.

        Args:
            compilation: Root compilation.
            recursive: Recurse into child compilations. Defaults to
                ``config.recursive`` (True unless configured otherwise).

        Returns:
            WalkSummary for the walk.
        """
        return await self._walker.walk(compilation, recursive=recursive)

    def get(self) -> Any:
        """Return the payload accumulated by the sink."""
        return self.sink.get()
