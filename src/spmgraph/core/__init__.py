"""Core spmgraph module."""

from .exceptions import (
    DanglingDependency,
    ManifestUnavailable,
    PackageGraphError,
    RendererFailed,
    RendererNotFound,
    UnsupportedExtension,
)
from .models import (
    DependencyGraph,
    Direction,
    EdgeKind,
    GraphConfig,
    GraphEdge,
    GraphNode,
    NodeKind,
    OutputFormat,
    PackageDescription,
    Product,
    Target,
    TargetKind,
)
from .spmgraph import SpmGraph

__all__ = [
    "DanglingDependency",
    "DependencyGraph",
    "Direction",
    "EdgeKind",
    "GraphConfig",
    "GraphEdge",
    "GraphNode",
    "ManifestUnavailable",
    "NodeKind",
    "OutputFormat",
    "PackageDescription",
    "PackageGraphError",
    "Product",
    "RendererFailed",
    "RendererNotFound",
    "SpmGraph",
    "Target",
    "TargetKind",
    "UnsupportedExtension",
]
