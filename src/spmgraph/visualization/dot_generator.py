"""DOT language generation for Graphviz rendering."""

import logging
from typing import Dict, List

from ..core.models import (
    DependencyGraph,
    Direction,
    EdgeKind,
    GraphConfig,
    GraphEdge,
    GraphNode,
    NodeKind,
)

logger = logging.getLogger(__name__)


def quote(value: str) -> str:
    """Quote a DOT identifier or attribute value."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class DOTGenerator:
    """Generates DOT language text from dependency graphs."""

    NODE_STYLES: Dict[NodeKind, Dict[str, str]] = {
        NodeKind.TARGET: {"color": "black", "shape": "box"},
        NodeKind.PRODUCT: {"color": "blue", "shape": "box", "style": "rounded"},
        NodeKind.EXTERNAL_PRODUCT: {"color": "blue", "shape": "box", "style": "dashed"},
    }

    EDGE_STYLES: Dict[EdgeKind, Dict[str, str]] = {
        EdgeKind.TARGET_DEPENDENCY: {},
        EdgeKind.PRODUCT_MEMBERSHIP: {"color": "blue", "style": "dashed"},
        EdgeKind.PRODUCT_DEPENDENCY: {"color": "blue"},
    }

    RANKDIR = {
        Direction.TOP_TO_BOTTOM: "TB",
        Direction.LEFT_TO_RIGHT: "LR",
    }

    def __init__(self, config: GraphConfig):
        """Initialize DOT generator with configuration.

        Args:
            config: Graph configuration.
        """
        self.config = config

    def generate_dot(self, graph: DependencyGraph) -> str:
        """Generate DOT language string from a dependency graph.

        Node statements come before edge statements, both in the graph's
        sorted order, so identical graphs always produce identical text.

        Args:
            graph: Dependency graph.

        Returns:
            DOT language string.
        """
        logger.info("Generating DOT language from graph")

        lines = [
            f"digraph {quote(graph.name)} {{",
            "    // Graph attributes",
            f'    rankdir="{self.RANKDIR[self.config.direction]}";',
            "",
            "    // Default node attributes",
            '    node [shape=box, fontname="Helvetica"];',
        ]

        if graph.nodes:
            lines.extend(["", "    // Nodes"])
            lines.extend(f"    {self._format_node(node)}" for node in graph.nodes)

        if graph.edges:
            lines.extend(["", "    // Edges"])
            lines.extend(f"    {self._format_edge(edge)}" for edge in graph.edges)

        lines.append("}")

        logger.info("DOT language generation completed")
        return "\n".join(lines) + "\n"

    def _format_attributes(self, attributes: Dict[str, str]) -> str:
        if not attributes:
            return ""
        pairs: List[str] = [f"{key}={quote(value)}" for key, value in attributes.items()]
        return " [" + ", ".join(pairs) + "]"

    def _format_node(self, node: GraphNode) -> str:
        """Format a single node definition."""
        attributes = {"label": node.name, **self.NODE_STYLES[node.kind]}
        return f"{quote(node.id)}{self._format_attributes(attributes)};"

    def _format_edge(self, edge: GraphEdge) -> str:
        """Format a single edge definition."""
        attributes = self._format_attributes(self.EDGE_STYLES[edge.kind])
        return f"{quote(edge.source)} -> {quote(edge.target)}{attributes};"
