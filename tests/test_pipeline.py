"""Integration tests for catalog loading, the pipeline and the CLI."""

import json
import os

import numpy as np
import pytest

from trackmatch.io.load_catalog import catalog_pairs, load_catalog, load_drawing, parse_catalog
from trackmatch.models import CatalogError, InvalidGeometryError, MatchAlgorithm, MatchReport


def _write_json(path, data):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return path


class TestLoadCatalog:
    """Tests for catalog and drawing files."""

    def test_load_catalog(self, catalog_file):
        circuits = load_catalog(catalog_file)

        assert [c.id for c in circuits] == ["oval", "square", "dragstrip"]
        assert circuits[1].name == "Square Ring"
        assert len(circuits[0].layout) == 64

    def test_catalog_pairs_keep_order(self, catalog_file):
        pairs = catalog_pairs(load_catalog(catalog_file))

        assert [cid for cid, _ in pairs] == ["oval", "square", "dragstrip"]
        assert pairs[1][1] == [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]]

    def test_missing_catalog(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_catalog(os.path.join(temp_dir, "nope.json"))

    def test_duplicate_ids(self):
        entry = {"id": "a", "layout": [{"x": 0, "y": 0}, {"x": 1, "y": 0}]}

        with pytest.raises(CatalogError, match="Duplicate"):
            parse_catalog([entry, dict(entry)])

    def test_empty_layout(self):
        with pytest.raises(CatalogError, match="empty layout"):
            parse_catalog([{"id": "a", "layout": []}])

    def test_non_finite_layout(self):
        with pytest.raises(CatalogError):
            parse_catalog([{"id": "a", "layout": [{"x": float("nan"), "y": 0}]}])

    def test_not_a_list(self, temp_dir):
        path = _write_json(os.path.join(temp_dir, "bad.json"), {"id": "a"})

        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_drawing_formats(self, temp_dir):
        pairs = _write_json(os.path.join(temp_dir, "pairs.json"), [[0, 0], [1, 2]])
        wrapped = _write_json(os.path.join(temp_dir, "wrapped.json"), {"points": [{"x": 0, "y": 0}, {"x": 1, "y": 2}]})

        assert np.array_equal(load_drawing(pairs), [[0, 0], [1, 2]])
        assert np.array_equal(load_drawing(wrapped), [[0, 0], [1, 2]])

    def test_drawing_without_points(self, temp_dir):
        path = _write_json(os.path.join(temp_dir, "bad.json"), {"strokes": []})

        with pytest.raises(InvalidGeometryError):
            load_drawing(path)


class TestRunMatching:
    """Tests for the file-level pipeline."""

    def test_writes_results(self, drawing_file, catalog_file, temp_dir):
        from trackmatch.pipeline import run_matching

        out_dir = os.path.join(temp_dir, "output")

        report = run_matching(drawing_file, catalog_file, out_dir=out_dir, algorithm="frechet")

        assert report.algorithm is MatchAlgorithm.FRECHET
        assert report.best.circuit_id == "square"
        assert report.candidate_count == 3

        results_path = os.path.join(out_dir, "results.json")
        assert os.path.exists(results_path)

        with open(results_path, "r", encoding="utf-8") as f:
            saved = MatchReport.model_validate(json.load(f))
        assert saved == report

    def test_top_k_and_overlays(self, drawing_file, catalog_file, temp_dir, default_config):
        from trackmatch.pipeline import run_matching

        out_dir = os.path.join(temp_dir, "output")
        default_config.output.top_k = 2
        default_config.output.overlay = True

        report = run_matching(drawing_file, catalog_file, out_dir=out_dir,
                              algorithm="hausdorff", config=default_config)

        assert len(report.results) == 2
        overlays = sorted(os.listdir(os.path.join(out_dir, "overlays")))
        assert len(overlays) == 2
        assert overlays[0] == "01_square.svg"

        with open(os.path.join(out_dir, "overlays", overlays[0]), "r", encoding="utf-8") as f:
            svg = f.read()
        assert "<polygon" in svg
        assert "<polyline" in svg

    def test_algorithm_from_config(self, drawing_file, catalog_file, default_config):
        from trackmatch.pipeline import run_matching

        default_config.matching.algorithm = "turning-angle"

        report = run_matching(drawing_file, catalog_file, config=default_config)

        assert report.algorithm is MatchAlgorithm.TURNING_ANGLE

    def test_invalid_inputs(self, temp_dir, catalog_file):
        from trackmatch.pipeline import run_matching

        with pytest.raises(ValueError, match="Input validation failed"):
            run_matching(os.path.join(temp_dir, "missing.json"), catalog_file)


class TestCli:
    """Tests for the command-line interface."""

    def test_match_command(self, drawing_file, catalog_file, temp_dir, capsys):
        from trackmatch.cli import main

        out_dir = os.path.join(temp_dir, "cli_out")

        code = main([
            "match", "--drawing", drawing_file, "--catalog", catalog_file,
            "--algorithm", "hausdorff", "--top", "1", "--out", out_dir,
        ])

        assert code == 0
        captured = capsys.readouterr()
        ranked = [
            line.split()[1] for line in captured.out.splitlines()
            if line.strip().startswith(("1.", "2.", "3."))
        ]
        assert ranked == ["square"]
        assert os.path.exists(os.path.join(out_dir, "results.json"))

    def test_compare_command(self, drawing_file, capsys):
        from trackmatch.cli import main

        code = main(["compare", "--drawing", drawing_file, "--candidate", drawing_file])

        assert code == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 3
        assert all(line.split()[-1] == "100.00" for line in lines)

    def test_failure_exit_code(self, temp_dir, catalog_file, capsys):
        from trackmatch.cli import main

        code = main(["match", "--drawing", os.path.join(temp_dir, "missing.json"), "--catalog", catalog_file])

        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_init_config(self, temp_dir):
        from trackmatch.cli import main
        from trackmatch.config import MatchConfig, load_config

        path = os.path.join(temp_dir, "config.yaml")

        assert main(["init-config", "--out", path]) == 0
        assert load_config(path) == MatchConfig()
