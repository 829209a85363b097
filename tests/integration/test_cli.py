"""End-to-end tests of the ``run.py`` front-end on the bundled example."""

import logging

import pytest

import run


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("XMLCONFIG_LOG_DIR", str(tmp_path / "logs"))
    package_logger = logging.getLogger("xmlconfig_toolkit")
    saved = (package_logger.level, list(package_logger.handlers), package_logger.propagate)
    yield
    package_logger.setLevel(saved[0])
    package_logger.handlers[:] = saved[1]
    package_logger.propagate = saved[2]


@pytest.fixture
def example_path(repo_root):
    return str(repo_root / "examples" / "example.xml")


@pytest.mark.integration
def test_dump(example_path, capsys):
    assert run.main(["dump", example_path]) == 0
    out = capsys.readouterr().out
    assert "[Level0:attr1] = 42\n" in out
    assert "[Level0.Item[2]] = c\n" in out


@pytest.mark.integration
def test_get_typed(example_path, capsys):
    assert run.main(["get", example_path, "Level0:attr3", "--type", "bool"]) == 0
    assert capsys.readouterr().out.strip() == "True"


@pytest.mark.integration
def test_get_vector(example_path, capsys):
    assert run.main(["get", example_path, "Level0.Bins", "--type", "int", "--vector"]) == 0
    assert capsys.readouterr().out.strip() == "50, 0, 1"


@pytest.mark.integration
def test_children(example_path, capsys):
    assert run.main(["children", example_path, "Histograms"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "Histograms.Histogram",
        "Histograms.Histogram[1]",
        "Histograms.Histogram[2]",
    ]


@pytest.mark.integration
def test_histograms(example_path, capsys):
    assert run.main(["histograms", example_path]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 3
    assert out[0].startswith("Created histogram: hPt,")
    assert "bins=(60, -3.0, 3.0)" in out[1]


@pytest.mark.integration
def test_unparsable_document(tmp_path, capsys):
    bad = tmp_path / "bad.xml"
    bad.write_text("<config><unclosed></config>", encoding="utf-8")
    assert run.main(["dump", str(bad)]) == 1
    assert "Error" in capsys.readouterr().err
