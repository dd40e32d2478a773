"""Data models and enums for spmgraph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import DanglingDependency, UnsupportedExtension


class TargetKind(str, Enum):
    """Target types reported by the Swift package description."""

    EXECUTABLE = "executable"
    LIBRARY = "library"
    MACRO = "macro"
    TEST = "test"
    PLUGIN = "plugin"
    SNIPPET = "snippet"
    SYSTEM = "system-target"
    BINARY = "binary"
    OTHER = "other"


class OutputFormat(str, Enum):
    """Supported output formats."""

    DOT = "dot"
    SVG = "svg"
    PNG = "png"
    PDF = "pdf"
    JPG = "jpg"

    @property
    def is_image(self) -> bool:
        """Whether this format needs Graphviz to produce it."""
        return self is not OutputFormat.DOT

    @classmethod
    def extensions(cls) -> dict[str, OutputFormat]:
        """Map of file extensions to output formats."""
        return {
            ".dot": cls.DOT,
            ".gv": cls.DOT,
            ".svg": cls.SVG,
            ".png": cls.PNG,
            ".pdf": cls.PDF,
            ".jpg": cls.JPG,
            ".jpeg": cls.JPG,
        }

    @classmethod
    def from_path(cls, path: str | Path) -> OutputFormat:
        """Pick the output format from a file extension.

        A path without an extension is written as DOT.

        Raises:
            UnsupportedExtension: If the extension is not recognised.
        """
        extensions = cls.extensions()
        suffix = Path(path).suffix.lower()
        if not suffix:
            return cls.DOT
        if suffix not in extensions:
            raise UnsupportedExtension(path, sorted(extensions))
        return extensions[suffix]


class Direction(str, Enum):
    """Graph layout direction."""

    TOP_TO_BOTTOM = "top-to-bottom"
    LEFT_TO_RIGHT = "left-to-right"


class NodeKind(str, Enum):
    """Kinds of graph nodes."""

    TARGET = "target"
    PRODUCT = "product"
    EXTERNAL_PRODUCT = "external-product"


class EdgeKind(str, Enum):
    """Kinds of graph edges."""

    TARGET_DEPENDENCY = "target-dependency"  # target -> target it depends on
    PRODUCT_MEMBERSHIP = "product-membership"  # target -> product it is part of
    PRODUCT_DEPENDENCY = "product-dependency"  # target -> product it depends on


# Package description, as emitted by `swift package describe --type json`


class Target(BaseModel):
    """A target declared in the package manifest."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    kind: TargetKind = Field(default=TargetKind.OTHER, alias="type")
    target_dependencies: list[str] = Field(default_factory=list)
    product_dependencies: list[str] = Field(default_factory=list)
    product_memberships: list[str] = Field(default_factory=list)

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_unknown_kind(cls, value: Any) -> Any:
        if isinstance(value, TargetKind):
            return value
        if isinstance(value, str) and value not in {k.value for k in TargetKind}:
            return TargetKind.OTHER
        return value

    @field_validator(
        "target_dependencies",
        "product_dependencies",
        "product_memberships",
        mode="before",
    )
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_test(self) -> bool:
        return self.kind is TargetKind.TEST


class Product(BaseModel):
    """A product declared in the package manifest."""

    model_config = ConfigDict(frozen=True)

    name: str
    targets: list[str] = Field(default_factory=list)


class PackageDescription(BaseModel):
    """Targets and products of a Swift package."""

    model_config = ConfigDict(frozen=True)

    name: str
    targets: list[Target] = Field(default_factory=list)
    products: list[Product] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_names(self) -> PackageDescription:
        for label, names in (
            ("target", [t.name for t in self.targets]),
            ("product", [p.name for p in self.products]),
        ):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise ValueError(f"duplicate {label} names: {', '.join(duplicates)}")
        return self

    def get_target(self, name: str) -> Target | None:
        for target in self.targets:
            if target.name == name:
                return target
        return None

    def get_product(self, name: str) -> Product | None:
        for product in self.products:
            if product.name == name:
                return product
        return None


# Dependency graph


@dataclass(frozen=True)
class GraphNode:
    """Graph node representation."""

    id: str
    name: str
    kind: NodeKind

    @classmethod
    def for_name(cls, kind: NodeKind, name: str) -> GraphNode:
        return cls(id=node_id(kind, name), name=name, kind=kind)


@dataclass(frozen=True)
class GraphEdge:
    """Graph edge representation."""

    source: str
    target: str
    kind: EdgeKind = EdgeKind.TARGET_DEPENDENCY


def node_id(kind: NodeKind, name: str) -> str:
    """Kind-prefixed node identifier, so targets and products never collide."""
    return f"{kind.value}:{name}"


_NODE_KIND_ORDER = {kind: index for index, kind in enumerate(NodeKind)}
_EDGE_KIND_ORDER = {kind: index for index, kind in enumerate(EdgeKind)}


@dataclass(frozen=True)
class DependencyGraph:
    """Immutable graph of package targets, products and their dependencies.

    Nodes and edges are kept sorted so every traversal is reproducible:
    nodes by name then kind, edges by source, target, then kind.
    """

    name: str
    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()

    def __post_init__(self) -> None:
        nodes = tuple(
            sorted(set(self.nodes), key=lambda n: (n.name, _NODE_KIND_ORDER[n.kind])),
        )
        edges = tuple(
            sorted(
                set(self.edges),
                key=lambda e: (e.source, e.target, _EDGE_KIND_ORDER[e.kind]),
            ),
        )

        ids = [node.id for node in nodes]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate node ids in graph '{self.name}'")

        known = set(ids)
        for edge in edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in known:
                    raise DanglingDependency(edge.source, endpoint)

        object.__setattr__(self, "nodes", nodes)
        object.__setattr__(self, "edges", edges)

    def get_node(self, identifier: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == identifier:
                return node
        return None

    def nodes_of_kind(self, kind: NodeKind) -> list[GraphNode]:
        return [node for node in self.nodes if node.kind == kind]

    def edges_of_kind(self, kind: EdgeKind) -> list[GraphEdge]:
        return [edge for edge in self.edges if edge.kind == kind]

    def to_networkx(self) -> nx.DiGraph:
        """Return a frozen NetworkX view of the graph."""
        graph = nx.DiGraph(name=self.name)
        for node in self.nodes:
            graph.add_node(node.id, name=node.name, kind=node.kind.value)
        for edge in self.edges:
            # DiGraph keeps one edge per pair; the first kind in sort order wins
            if not graph.has_edge(edge.source, edge.target):
                graph.add_edge(edge.source, edge.target, kind=edge.kind.value)
        return nx.freeze(graph)


class GraphConfig(BaseModel):
    """Configuration for graph generation."""

    skip_test_targets: bool = False
    skip_product_dependencies: bool = False
    direction: Direction = Direction.TOP_TO_BOTTOM
