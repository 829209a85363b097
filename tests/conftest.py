"""Shared fixtures for the XML configuration toolkit tests.

Every test runs with a private user-config directory so that no file is
written to the real home directory and no user override leaks in.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path so the run.py front-end is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from xmlconfig_toolkit.config import ConfigManager

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


EXAMPLE_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<config>
    <Level0 attr1="42" attr2="3.14" attr3="true" attr4="false">
        <Level1>
            <Level2 name="deep-node">payload</Level2>
        </Level1>
        <Bins>50, 0, 1</Bins>
    </Level0>
    <Histograms description="demo">
        <Histogram name="hPt" title="pt" bins-x="100, 0, 10" />
        <Histogram name="hEta" title="eta" bins-x="60, -3, 3" />
        <Histogram name="hPhi" title="phi" bins-x="64, -3.2, 3.2" />
    </Histograms>
</config>'''


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Point the user-config directory at a temp folder and reset the singleton."""
    home = tmp_path / "user_config"
    monkeypatch.setenv("XMLCONFIG_TOOLKIT_HOME", str(home))
    ConfigManager.reset()
    yield home
    ConfigManager.reset()


@pytest.fixture
def example_xml():
    return EXAMPLE_XML


@pytest.fixture
def example_file(tmp_path, example_xml) -> Path:
    path = tmp_path / "example.xml"
    path.write_text(example_xml, encoding="utf-8")
    return path


@pytest.fixture
def repo_root() -> Path:
    return Path(__file__).parent.parent
