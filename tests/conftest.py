"""Shared fixtures for spmgraph tests."""

from pathlib import Path

import pytest

from spmgraph.core.models import PackageDescription, Product, Target, TargetKind

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def describe_json() -> Path:
    """Captured `swift package describe --type json` output."""
    return FIXTURES / "describe.json"


@pytest.fixture
def scenario_package() -> PackageDescription:
    """A depends on B, BTests depends on A and B, product P is made of A."""
    return PackageDescription(
        name="Scenario",
        targets=[
            Target(name="A", kind=TargetKind.LIBRARY, target_dependencies=["B"]),
            Target(name="B", kind=TargetKind.LIBRARY),
            Target(name="BTests", kind=TargetKind.TEST, target_dependencies=["A", "B"]),
        ],
        products=[Product(name="P", targets=["A"])],
    )


@pytest.fixture
def package_without_tests() -> PackageDescription:
    return PackageDescription(
        name="NoTests",
        targets=[
            Target(name="Core", kind=TargetKind.LIBRARY),
            Target(
                name="Tool",
                kind=TargetKind.EXECUTABLE,
                target_dependencies=["Core"],
                product_dependencies=["ArgumentParser"],
            ),
        ],
        products=[
            Product(name="tool", targets=["Tool"]),
            Product(name="CoreKit", targets=["Core"]),
        ],
    )
