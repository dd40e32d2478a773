"""Dependency graph construction from package descriptions."""

import logging
from typing import Dict, List, Set

import networkx as nx

from ..core.exceptions import DanglingDependency
from ..core.models import (
    DependencyGraph,
    EdgeKind,
    GraphConfig,
    GraphEdge,
    GraphNode,
    NodeKind,
    PackageDescription,
    Product,
    Target,
    node_id,
)

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Builds dependency graphs from Swift package descriptions."""

    def __init__(self, config: GraphConfig):
        """Initialize graph builder with configuration.

        Args:
            config: Graph configuration.
        """
        self.config = config
        self.nodes: Dict[str, GraphNode] = {}
        self.edges: Set[GraphEdge] = set()

    def build_graph(self, package: PackageDescription) -> DependencyGraph:
        """Build the dependency graph for a package.

        Args:
            package: Parsed package description.

        Returns:
            Immutable dependency graph.

        Raises:
            DanglingDependency: If a target or product refers to a name the
                package does not declare.
        """
        logger.info(f"Building dependency graph for package '{package.name}'")

        # Reset graph state
        self.nodes.clear()
        self.edges.clear()

        targets = {target.name: target for target in package.targets}
        products = {product.name: product for product in package.products}
        included = self._filter_targets(package.targets)

        self._create_target_nodes(included)
        self._create_target_edges(included, targets, products)

        if not self.config.skip_product_dependencies:
            self._create_product_nodes(package.products, targets, included)
            self._create_product_dependency_edges(included, products)

        graph = DependencyGraph(
            name=package.name,
            nodes=tuple(self.nodes.values()),
            edges=tuple(self.edges),
        )

        self._check_cycles(graph)
        logger.info(
            f"Built graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges",
        )
        return graph

    def _filter_targets(self, targets: List[Target]) -> Dict[str, Target]:
        """Drop test targets when configured to.

        Args:
            targets: All targets of the package.

        Returns:
            Included targets keyed by name.
        """
        if self.config.skip_test_targets:
            included = {t.name: t for t in targets if not t.is_test}
        else:
            included = {t.name: t for t in targets}

        logger.info(
            f"Filtered {len(targets)} targets to {len(included)} after filtering",
        )
        return included

    def _add_node(self, kind: NodeKind, name: str) -> str:
        node = GraphNode.for_name(kind, name)
        self.nodes.setdefault(node.id, node)
        return node.id

    def _add_edge(self, source: str, target: str, kind: EdgeKind) -> None:
        self.edges.add(GraphEdge(source=source, target=target, kind=kind))

    def _create_target_nodes(self, included: Dict[str, Target]) -> None:
        for name in included:
            self._add_node(NodeKind.TARGET, name)

    def _create_target_edges(
        self,
        included: Dict[str, Target],
        targets: Dict[str, Target],
        products: Dict[str, Product],
    ) -> None:
        """Create edges for declared target dependencies.

        A name matching both a target and a product resolves to the target.
        Dependencies on excluded targets are dropped.
        """
        for target in included.values():
            source = node_id(NodeKind.TARGET, target.name)

            for dependency in target.target_dependencies:
                if dependency in targets:
                    if dependency in included:
                        self._add_edge(
                            source,
                            node_id(NodeKind.TARGET, dependency),
                            EdgeKind.TARGET_DEPENDENCY,
                        )
                    else:
                        logger.debug(
                            f"Dropped edge {target.name} -> {dependency} (excluded target)",
                        )
                elif dependency in products and not self.config.skip_product_dependencies:
                    product_id = self._add_node(NodeKind.PRODUCT, dependency)
                    self._add_edge(source, product_id, EdgeKind.PRODUCT_DEPENDENCY)
                else:
                    # Skipped products do not count as known names
                    raise DanglingDependency(target.name, dependency)

    def _create_product_nodes(
        self,
        products: List[Product],
        targets: Dict[str, Target],
        included: Dict[str, Target],
    ) -> None:
        """Create product nodes and target-to-product membership edges."""
        for product in products:
            product_id = self._add_node(NodeKind.PRODUCT, product.name)

            for member in product.targets:
                if member not in targets:
                    raise DanglingDependency(product.name, member)
                if member in included:
                    self._add_edge(
                        node_id(NodeKind.TARGET, member),
                        product_id,
                        EdgeKind.PRODUCT_MEMBERSHIP,
                    )

    def _create_product_dependency_edges(
        self,
        included: Dict[str, Target],
        products: Dict[str, Product],
    ) -> None:
        """Create edges for product dependencies.

        Products declared by this package reuse their product node; anything
        else is a product from another package.
        """
        for target in included.values():
            source = node_id(NodeKind.TARGET, target.name)

            for dependency in target.product_dependencies:
                kind = NodeKind.PRODUCT if dependency in products else NodeKind.EXTERNAL_PRODUCT
                product_id = self._add_node(kind, dependency)
                self._add_edge(source, product_id, EdgeKind.PRODUCT_DEPENDENCY)

    def _check_cycles(self, graph: DependencyGraph) -> None:
        digraph = graph.to_networkx()
        if not nx.is_directed_acyclic_graph(digraph):
            cycle = nx.find_cycle(digraph)
            path = " -> ".join(digraph.nodes[source]["name"] for source, _ in cycle)
            logger.warning(f"Dependency cycle detected: {path}")
