"""Exceptions raised while building and rendering package graphs."""

from __future__ import annotations


class PackageGraphError(RuntimeError):
    """Base class for all spmgraph errors."""


class ManifestUnavailable(PackageGraphError):
    """The package description could not be obtained or parsed."""

    def __init__(self, path: object, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Package description unavailable for '{path}': {reason}")


class DanglingDependency(PackageGraphError):
    """A dependency names something that is not part of the graph."""

    def __init__(self, source: str, dependency: str):
        self.source = source
        self.dependency = dependency
        super().__init__(
            f"'{source}' depends on '{dependency}', which is neither a target "
            "nor a product of this package",
        )


class UnsupportedExtension(PackageGraphError):
    """The output file extension does not map to a known output format."""

    def __init__(self, path: object, supported: list[str]):
        self.path = path
        self.supported = supported
        super().__init__(
            f"Unsupported output extension for '{path}'. "
            f"Supported extensions: {', '.join(supported)}",
        )


class RendererNotFound(PackageGraphError):
    """The Graphviz executable is not installed."""

    def __init__(self, engine: str):
        self.engine = engine
        super().__init__(
            f"Graphviz '{engine}' executable not found. Please install Graphviz:\n"
            "  Ubuntu/Debian: sudo apt-get install graphviz\n"
            "  macOS: brew install graphviz\n"
            "  Windows: Download from https://graphviz.org/download/",
        )


class RendererFailed(PackageGraphError):
    """Graphviz ran but did not produce output."""

    def __init__(self, engine: str, diagnostics: str = ""):
        self.engine = engine
        self.diagnostics = diagnostics
        message = f"Graphviz '{engine}' failed to render the graph"
        if diagnostics:
            message = f"{message}:\n{diagnostics}"
        super().__init__(message)
