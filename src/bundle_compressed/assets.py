"""Emitted asset extraction for a single compilation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from bundle_compressed.errors import AssetUnreadableError
from bundle_compressed.filesystem import resolve_read_file
from bundle_compressed.models import to_bytes
from bundle_compressed.observability import get_logger

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from bundle_compressed.config import ExtractionConfig
    from bundle_compressed.models import Compilation, ContentSink


class AssetExtractor:
    """Reads every declared asset of a compilation and forwards its bytes.

    Each asset is read back from the compiler's file system at
    ``output_path / name``. A failed or empty read is logged as a warning
    and the asset is skipped; later assets are still processed.

    Example:
        >>> extractor = AssetExtractor(sink, compressor="gzip", config=ExtractionConfig())
        >>> emitted, failed = await extractor.extract(compilation)
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

    async def extract(self, compilation: Compilation) -> tuple[int, int]:
        """Forward all readable assets of a compilation to the sink.

        Args:
            compilation: Compilation whose assets are read.

        Returns:
            Tuple of (emitted, failed) asset counts.
        """
        read_file = resolve_read_file(compilation.compiler)
        output_path = Path(compilation.compiler.output_path)
        emitted = failed = 0

        for name in list(compilation.assets):
            asset_path = str(output_path / name)
            try:
                content = await read_file(asset_path)
                if not content:
                    raise AssetUnreadableError(name, path=asset_path, cause="empty content")
                self.sink.handle_resource(
                    compilation.hash,
                    name,
                    to_bytes(content, self.config.encoding),
                    self.compressor,
                )
            except Exception as exc:
                error = (
                    exc
                    if isinstance(exc, AssetUnreadableError)
                    else AssetUnreadableError(name, path=asset_path, cause=str(exc) or None)
                )
                self._logger.warning(
                    "asset_unreadable",
                    asset=name,
                    path=asset_path,
                    error=str(error),
                )
                failed += 1
                continue
            emitted += 1

        return emitted, failed
