import importlib.util
from pathlib import Path

import pytest
from click.testing import CliRunner

SCRIPTS_DIR = Path(__file__).resolve().parents[1] / "src" / "scripts"


def _load_script(name):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def runner():
    return CliRunner()


def test_build_similarity_graph_script(runner, features_csv, tmp_path):
    script = _load_script("S03_build_similarity_graph")
    out = tmp_path / "out"
    result = runner.invoke(script.main, [
        "--input_csv", str(features_csv),
        "--output_dir", str(out),
        "--features", "1,2",
        "--threshold", "0.99",
    ])
    assert result.exit_code == 0, result.output
    assert "[SUCCESS]" in result.output
    assert (out / "graph_edge_list.csv").read_text().splitlines()[0] == "Source,Target,Weight"


def test_build_similarity_graph_script_by_name(runner, features_csv, tmp_path):
    script = _load_script("S03_build_similarity_graph")
    result = runner.invoke(script.main, [
        "--input_csv", str(features_csv),
        "--output_dir", str(tmp_path / "out"),
        "--features", "f1, f2",
        "--label_column", "Country",
    ])
    assert result.exit_code == 0, result.output


def test_build_similarity_graph_script_reports_errors(runner, write_csv, tmp_path):
    script = _load_script("S03_build_similarity_graph")
    result = runner.invoke(script.main, [
        "--input_csv", str(write_csv("Country,f1\n")),
        "--output_dir", str(tmp_path / "out"),
        "--features", "1",
    ])
    assert result.exit_code == 1
    assert "no data rows" in result.output


def test_parse_columns():
    script = _load_script("S03_build_similarity_graph")
    assert script._parse_columns("3,16,17") == [3, 16, 17]
    assert script._parse_columns("GDP, 4") == ["GDP", 4]


def test_clean_dataset_script(runner, life_csv, tmp_path):
    script = _load_script("S01_clean_dataset")
    out = tmp_path / "cleaned.csv"
    result = runner.invoke(script.main, ["--input_csv", str(life_csv), "--output_csv", str(out)])
    assert result.exit_code == 0, result.output
    assert out.exists()


def test_describe_dataset_script(runner, life_csv, tmp_path):
    script = _load_script("S02_describe_dataset")
    result = runner.invoke(script.main, ["--input_csv", str(life_csv), "--output_dir", str(tmp_path / "eda")])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "eda" / "descriptive_summary.json").exists()


def test_clean_dataset_script_defaults_to_config_paths(runner, life_csv, tmp_path, monkeypatch):
    from p01_country_similarity import config

    out = tmp_path / "output" / "clean.csv"
    monkeypatch.setattr(config, "PATH_DATA_LIFE_EXPECTANCY", str(life_csv))
    monkeypatch.setattr(config, "PATH_DATA_LIFE_EXPECTANCY_CLEAN", str(out))
    # option defaults are read from config when the script module is loaded
    script = _load_script("S01_clean_dataset")
    result = runner.invoke(script.main, [])
    assert result.exit_code == 0, result.output
    assert out.exists()
