"""bundle-compressed: compressed-size stats extraction for bundler builds.

This package walks a bundler's build graph and hands the bytes of every
emitted asset and every source module to a compressed-stats accumulator:
- Legacy (template rendering) and chunk-graph build shapes
- Literal-content fast path for CSS-like modules
- Per-asset failure isolation with structured warnings via structlog
- OpenTelemetry span per visited compilation

Example:
    >>> from bundle_compressed import CompressedExtension
    >>> extension = CompressedExtension("gzip", sink)
    >>> await extension.handle_compilation(compilation)
    >>> payload = extension.get()
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    # Entry point
    "CompressedExtension",
    # Components
    "GraphWalker",
    "AssetExtractor",
    "ModuleContentResolver",
    "classify_module",
    "resolve_read_file",
    # Configuration models
    "ExtractionConfig",
    "ExtensionDescriptor",
    # Data models
    "ModuleKind",
    "ResourceRecord",
    "WalkSummary",
    # Exceptions
    "BundleExtractionError",
    "AssetUnreadableError",
    "FileSystemUnavailableError",
    "SourceUnavailableError",
    "UnresolvableModuleError",
    "StructuralMismatchError",
]

_LAZY_MODULES: dict[str, str] = {
    "CompressedExtension": "extension",
    "GraphWalker": "walker",
    "AssetExtractor": "assets",
    "ModuleContentResolver": "modules",
    "classify_module": "modules",
    "resolve_read_file": "filesystem",
    "ExtractionConfig": "config",
    "ExtensionDescriptor": "config",
    "ModuleKind": "models",
    "ResourceRecord": "models",
    "WalkSummary": "models",
    "BundleExtractionError": "errors",
    "AssetUnreadableError": "errors",
    "FileSystemUnavailableError": "errors",
    "SourceUnavailableError": "errors",
    "UnresolvableModuleError": "errors",
    "StructuralMismatchError": "errors",
}


def __getattr__(name: str) -> object:
    """Lazy import of public API members."""
    module_name = _LAZY_MODULES.get(name)
    if module_name is not None:
        import importlib

        module = importlib.import_module(f"{__name__}.{module_name}")
        return getattr(module, name)
    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
