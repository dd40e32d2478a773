#!/usr/bin/env python3
"""Basic usage examples for spmgraph."""

from spmgraph import Direction, SpmGraph


def main():
    """Demonstrate basic spmgraph usage."""

    # Uses `swift` and Graphviz `dot` from PATH
    viz = SpmGraph()

    # Example 1: DOT file for the package in the current directory
    print("Generating DOT file for the current package...")
    viz.export_graph()

    # Example 2: SVG without test targets
    print("Generating SVG without test targets...")
    viz.export_graph(
        input_path="path/to/MyPackage",
        output_file="my-package.svg",
        skip_test_targets=True,
    )

    # Example 3: targets only, laid out left to right
    print("Generating targets-only PNG...")
    viz.export_graph(
        input_path="path/to/MyPackage",
        output_file="my-package-targets.png",
        skip_test_targets=True,
        skip_product_dependencies=True,
        direction=Direction.LEFT_TO_RIGHT,
    )

    # Example 4: inspect the package before drawing it
    package = viz.describe_package("path/to/MyPackage")
    print(f"{package.name} has {len(package.targets)} targets:")
    for target in package.targets:
        print(f"  - {target.name} ({target.kind.value})")

    print("All examples completed!")


if __name__ == "__main__":
    main()
