"""Custom exceptions for bundle-compressed.

This module defines the exception hierarchy:
- BundleExtractionError (base)
- AssetUnreadableError
- FileSystemUnavailableError
- SourceUnavailableError
- UnresolvableModuleError
- StructuralMismatchError

None of these escape a walk. They are raised at the node where the problem
occurs and turned into a log event by the walker or extractor.
"""

from __future__ import annotations


class BundleExtractionError(Exception):
    """Base exception for all extraction failures.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     resolver.resolve(module, compilation)
        ... except BundleExtractionError as e:
        ...     print(f"Extraction error: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize BundleExtractionError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class AssetUnreadableError(BundleExtractionError):
    """An emitted asset could not be read back from the file system.

    Raised when:
    - The file system read function raised
    - The read returned empty or ``None`` content

    Example:
        >>> error = AssetUnreadableError("main.js", path="/dist/main.js")
        >>> str(error)
        "Can't read the asset main.js (path=/dist/main.js)"
    """

    def __init__(
        self,
        asset: str,
        *,
        path: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize AssetUnreadableError.

        Args:
            asset: Asset name as declared by the compilation.
            path: Absolute path the read was attempted at.
            cause: The underlying cause of the failure.
        """
        details: dict[str, str] = {}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = cause
        super().__init__(f"Can't read the asset {asset}", details=details)
        self.asset = asset
        self.path = path
        self.cause = cause


class FileSystemUnavailableError(BundleExtractionError):
    """The compiler exposes no readable file system backend."""

    def __init__(self, message: str = "Compiler exposes no readable file system") -> None:
        super().__init__(message)


class SourceUnavailableError(BundleExtractionError):
    """Code generation produced no source for a module's source type."""

    def __init__(self, module: str, source_type: str) -> None:
        """Initialize SourceUnavailableError.

        Args:
            module: Readable module identifier.
            source_type: The declared source type with no generated source.
        """
        super().__init__(
            f"No generated source for module: {module}",
            details={"source_type": source_type},
        )
        self.module = module
        self.source_type = source_type


class UnresolvableModuleError(BundleExtractionError):
    """A legacy-shaped module has no id and cannot be rendered."""

    def __init__(self, module: str, message: str | None = None) -> None:
        msg = message or f"Module has no id: {module}"
        super().__init__(msg, details={"module": module})
        self.module = module


class StructuralMismatchError(BundleExtractionError):
    """A compilation exposes neither a chunk graph nor legacy module templates.

    Example:
        >>> error = StructuralMismatchError("a1b2c3", module="./src/index.js")
        >>> error.build_id
        'a1b2c3'
    """

    def __init__(self, build_id: str | None, *, module: str | None = None) -> None:
        """Initialize StructuralMismatchError.

        Args:
            build_id: Hash of the compilation with the unsupported shape.
            module: Module whose content could not be resolved.
        """
        details: dict[str, str] = {}
        if build_id:
            details["build_id"] = build_id
        if module:
            details["module"] = module
        super().__init__(
            "Compilation has neither a chunk graph nor module templates",
            details=details,
        )
        self.build_id = build_id
        self.module = module
