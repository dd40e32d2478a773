"""Main SpmGraph class for generating Swift package dependency diagrams."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..manifest import ManifestReader
from ..visualization import DOTGenerator, GraphBuilder, GraphRenderer
from .models import DependencyGraph, Direction, GraphConfig, OutputFormat, PackageDescription

logger = logging.getLogger(__name__)


class SpmGraph:
    """Main class for Swift package dependency visualization."""

    def __init__(
        self,
        reader: Optional[ManifestReader] = None,
        renderer: Optional[GraphRenderer] = None,
    ):
        """Initialize SpmGraph instance.

        Args:
            reader: Package description reader. If None, uses the ``swift`` on PATH.
            renderer: Graph renderer. If None, uses Graphviz ``dot`` on PATH.
        """
        self.reader = reader or ManifestReader()
        self.renderer = renderer or GraphRenderer()

    def export_graph(
        self,
        input_path: Optional[Union[str, Path]] = None,
        output_file: Optional[Union[str, Path]] = None,
        skip_test_targets: bool = False,
        skip_product_dependencies: bool = False,
        direction: Direction = Direction.TOP_TO_BOTTOM,
    ) -> Path:
        """Export a package dependency diagram.

        Args:
            input_path: Package directory or captured description JSON.
                Defaults to the current directory.
            output_file: Output file path; its extension selects the format.
                Defaults to ``<package name>.dot``.
            skip_test_targets: Leave test targets out of the graph.
            skip_product_dependencies: Leave products and product edges out.
            direction: Graph layout direction.

        Returns:
            Path to the generated file.
        """
        config = GraphConfig(
            skip_test_targets=skip_test_targets,
            skip_product_dependencies=skip_product_dependencies,
            direction=direction,
        )

        # Fail on a bad extension before doing any work
        if output_file is not None:
            OutputFormat.from_path(output_file)

        package = self.describe_package(input_path)
        graph = self.build_graph(package, config)
        dot_content = DOTGenerator(config).generate_dot(graph)

        if output_file is None:
            output_file = Path(f"{package.name}.dot")
            logger.info(f"No output file given, using {output_file}")

        output_path = self.renderer.render(dot_content, output_file)
        logger.info(f"Diagram exported successfully: {output_path}")
        return output_path

    def describe_package(self, input_path: Optional[Union[str, Path]] = None) -> PackageDescription:
        """Read the package description without generating a diagram."""
        return self.reader.read(Path(input_path) if input_path is not None else Path.cwd())

    def build_graph(self, package: PackageDescription, config: Optional[GraphConfig] = None) -> DependencyGraph:
        return GraphBuilder(config or GraphConfig()).build_graph(package)

    def validate_prerequisites(self) -> Dict[str, bool]:
        """Validate the external tools used for diagram generation.

        Returns:
            Dictionary with validation results.
        """
        return {
            "swift": self.renderer.which(self.reader.swift_executable) is not None,
            "graphviz": self.renderer.is_available(),
        }

    def get_supported_formats(self) -> List[str]:
        """Get list of supported output formats.

        Returns:
            List of format names.
        """
        return [fmt.value for fmt in OutputFormat]
