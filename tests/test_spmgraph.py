"""Tests for the SpmGraph pipeline."""

from unittest.mock import Mock

import pytest

from spmgraph import SpmGraph
from spmgraph.core.exceptions import (
    DanglingDependency,
    ManifestUnavailable,
    RendererNotFound,
    UnsupportedExtension,
)
from spmgraph.core.models import Direction
from spmgraph.manifest import ManifestReader
from spmgraph.visualization import GraphRenderer


def make_spmgraph(pipe=None, which=None):
    renderer = GraphRenderer(
        pipe=pipe or Mock(return_value=b"image"),
        which=which or (lambda name: f"/usr/bin/{name}"),
    )
    return SpmGraph(reader=ManifestReader(runner=Mock()), renderer=renderer)


def test_export_dot(tmp_path, describe_json):
    output = make_spmgraph().export_graph(describe_json, tmp_path / "deps.dot")

    dot = output.read_text(encoding="utf-8")
    assert dot.startswith('digraph "Sample" {')
    assert '"target:SampleKitTests" -> "target:SampleKit";' in dot
    assert '"external-product:ArgumentParser"' in dot


def test_export_with_filters(tmp_path, describe_json):
    output = make_spmgraph().export_graph(
        describe_json,
        tmp_path / "deps.dot",
        skip_test_targets=True,
        skip_product_dependencies=True,
        direction=Direction.LEFT_TO_RIGHT,
    )

    dot = output.read_text(encoding="utf-8")
    assert "SampleKitTests" not in dot
    assert "product:" not in dot
    assert 'rankdir="LR";' in dot
    assert '"target:SampleCLI" -> "target:SampleKit";' in dot


def test_export_image(tmp_path, describe_json):
    pipe = Mock(return_value=b"<svg/>")

    output = make_spmgraph(pipe=pipe).export_graph(describe_json, tmp_path / "deps.svg")

    assert output.read_bytes() == b"<svg/>"
    dot_content, output_format, engine = pipe.call_args.args
    assert dot_content.startswith('digraph "Sample"')
    assert (output_format, engine) == ("svg", "dot")


def test_default_output_uses_package_name(tmp_path, describe_json, monkeypatch):
    monkeypatch.chdir(tmp_path)

    output = make_spmgraph().export_graph(describe_json)

    assert output.name == "Sample.dot"
    assert (tmp_path / "Sample.dot").exists()


def test_default_input_is_current_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ManifestUnavailable) as excinfo:
        make_spmgraph().export_graph()

    assert "Package.swift" in str(excinfo.value)


def test_unsupported_extension_fails_before_reading(tmp_path):
    reader = Mock()
    spmgraph = SpmGraph(reader=reader, renderer=GraphRenderer(pipe=Mock(), which=Mock()))

    with pytest.raises(UnsupportedExtension):
        spmgraph.export_graph(tmp_path, tmp_path / "out.xyz")

    reader.read.assert_not_called()
    assert not (tmp_path / "out.xyz").exists()


def test_missing_renderer_writes_nothing(tmp_path, describe_json):
    spmgraph = make_spmgraph(which=lambda name: None)

    with pytest.raises(RendererNotFound):
        spmgraph.export_graph(describe_json, tmp_path / "out.svg")

    assert list(tmp_path.iterdir()) == []


def test_dangling_dependency_writes_nothing(tmp_path):
    manifest = tmp_path / "describe.json"
    manifest.write_text(
        '{"name": "Pkg", "targets": [{"name": "A", "type": "library", "target_dependencies": ["Nope"]}]}',
        encoding="utf-8",
    )

    with pytest.raises(DanglingDependency):
        make_spmgraph().export_graph(manifest, tmp_path / "out.dot")

    assert not (tmp_path / "out.dot").exists()


def test_validate_prerequisites():
    spmgraph = make_spmgraph(which=lambda name: "/usr/bin/dot" if name == "dot" else None)

    assert spmgraph.validate_prerequisites() == {"swift": False, "graphviz": True}


def test_supported_formats():
    assert make_spmgraph().get_supported_formats() == ["dot", "svg", "png", "pdf", "jpg"]
