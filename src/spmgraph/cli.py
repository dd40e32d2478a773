"""Command-line interface for spmgraph."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .core import Direction, OutputFormat, SpmGraph
from .manifest import ManifestReader
from .visualization import GraphRenderer
from .visualization.renderer import ENGINES

# Setup rich consoles
console = Console()
err_console = Console(stderr=True)


# Configure logging
def setup_logging(verbose: bool = False) -> None:
    """Setup logging with rich handler."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


def print_prerequisites(spmgraph: SpmGraph) -> bool:
    """Print the external tool check and supported formats.

    Returns:
        True if every prerequisite is available.
    """
    prereqs = spmgraph.validate_prerequisites()

    table = Table(title="Prerequisites Validation")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Description", style="green")

    descriptions = {
        "swift": "Swift toolchain for 'swift package describe'",
        "graphviz": "Graphviz installation for image output",
    }

    for component, status in prereqs.items():
        table.add_row(
            component,
            "✅ OK" if status else "❌ MISSING",
            descriptions.get(component, ""),
        )

    console.print(table)

    formats_table = Table(title="Supported Output Formats")
    formats_table.add_column("Extension", style="cyan")
    formats_table.add_column("Format", style="green")
    for extension, fmt in OutputFormat.extensions().items():
        formats_table.add_row(extension, fmt.value)
    console.print(formats_table)

    return all(prereqs.values())


@click.command()
@click.argument("input_path", metavar="[INPUT]", required=False, type=click.Path(path_type=Path))
@click.argument("output", metavar="[OUTPUT]", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--skip-test-targets", is_flag=True, help="Skip unit test targets")
@click.option("--skip-product-dependencies", is_flag=True, help="Skip product dependencies")
@click.option(
    "--direction",
    type=click.Choice([d.value for d in Direction]),
    default=Direction.TOP_TO_BOTTOM.value,
    help="Graph layout direction (default: top-to-bottom)",
)
@click.option(
    "--engine",
    type=click.Choice(ENGINES),
    default="dot",
    help="Graphviz layout engine for image output (default: dot)",
)
@click.option(
    "--swift",
    "swift_executable",
    default="swift",
    help="Swift toolchain executable (default: swift)",
)
@click.option("--check", is_flag=True, help="Check for Swift and Graphviz, then exit")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(__version__, prog_name="spmgraph")
def cli(
    input_path: Path | None,
    output: Path | None,
    skip_test_targets: bool,
    skip_product_dependencies: bool,
    direction: str,
    engine: str,
    swift_executable: str,
    check: bool,
    verbose: bool,
) -> None:
    """spmgraph - Swift package dependency visualization tool.

    Draws the targets and products of the Swift package at INPUT and the
    dependencies between them. INPUT is a package directory (default: the
    current directory) or a JSON file captured from
    'swift package describe --type json'.

    The OUTPUT extension picks the format: .dot writes Graphviz source,
    .svg, .png, .pdf and .jpg are rendered with Graphviz. OUTPUT defaults to
    the package name with a .dot extension.

    \b
    Examples:
      spmgraph                                   # ./<Package>.dot
      spmgraph . deps.svg --skip-test-targets
      spmgraph path/to/pkg deps.png --skip-product-dependencies
      spmgraph describe.json deps.dot
    """
    setup_logging(verbose)

    try:
        spmgraph = SpmGraph(
            reader=ManifestReader(swift_executable=swift_executable),
            renderer=GraphRenderer(engine=engine),
        )

        if check:
            if not print_prerequisites(spmgraph):
                sys.exit(1)
            return

        if verbose:
            console.print("🔄 Reading package description...", style="blue")

        output_path = spmgraph.export_graph(
            input_path=input_path,
            output_file=output,
            skip_test_targets=skip_test_targets,
            skip_product_dependencies=skip_product_dependencies,
            direction=Direction(direction),
        )

        console.print(f"{output_path}", style="green", markup=False, soft_wrap=True)

    except Exception as e:
        err_console.print(f"❌ Error: {e}", style="red", markup=False, soft_wrap=True)
        if verbose:
            err_console.print_exception()
        sys.exit(1)


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
