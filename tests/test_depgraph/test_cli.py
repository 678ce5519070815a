"""Tests for the main.py entry point."""

import json

from main import main, summarize
from src.depgraph.models import Graph


def test_summary_output(sample_path, capsys):
    assert main(["b1", str(sample_path)]) == 0

    out = capsys.readouterr().out
    assert "build:  b1" in out
    assert "nodes:  4" in out
    assert "  file: 2" in out
    assert "edges:  2 groups, 3 targets" in out
    assert "  imports: 2 targets" in out


def test_json_output(sample_path, capsys):
    assert main(["b1", str(sample_path), "--json"]) == 0

    doc = json.loads(capsys.readouterr().out)
    assert doc["id"] == "b1"
    assert [n["id"] for n in doc["nodes"]] == ["main.go", "util.go", "libfmt", "util.Helper"]


def test_missing_source(tmp_path, capsys):
    missing = str(tmp_path / "missing.json")

    assert main(["b1", missing, "--log-level", "DEBUG"]) == 1
    assert f"could not find file {missing}" in capsys.readouterr().err


def test_summarize_untyped_nodes():
    graph = Graph.from_json('{"nodes":[{"id":"x"}],"edges":[]}')

    text = summarize(graph)

    assert "build:  -" in text
    assert "  (untyped): 1" in text
