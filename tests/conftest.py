"""Test configuration and shared fixtures for grayscale-svg.

Provides sample SVG documents and helpers used across the core, service and
integration tests. All test files should use the fixtures defined here for
consistency.
"""

import logging
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from grayscale_svg.config import ConfigManager

SAMPLE_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="100" height="100" viewBox="0 0 100 100">
  <!-- palette test -->
  <defs>
    <linearGradient id="grad" x1="0" y1="0" x2="1" y2="1">
      <stop offset="0" stop-color="#ff0000"/>
      <stop offset="1" style="stop-color:#0000ff;stop-opacity:0.5"/>
    </linearGradient>
  </defs>
  <g id="layer" transform="translate(10 10)" stroke="#00ff00">
    <rect id="r1" x="0" y="0" width="10" height="10" fill="#ff0000"/>
    <rect id="r2" x="10" y="0" width="10" height="10" fill="url(#grad)" stroke="none"/>
    <circle id="c1" cx="5" cy="5" r="4" style="fill:#ffff00;stroke-width:2;opacity:0.8"/>
    <path id="p1" d="M0 0 L10 10" fill="none" stroke="rgba(255, 0, 0, 0.5)"/>
    <text id="t1" x="1" y="1" color="blue" fill="currentColor">Label</text>
    <rect id="r3" x="20" y="0" width="10" height="10" fill="#ff0000"/>
  </g>
</svg>
"""

STYLE_ELEMENT_SVG = """<svg xmlns="http://www.w3.org/2000/svg">
  <style>.a { fill: red; }</style>
  <rect class="a" width="1" height="1"/>
  <g><style>.b { stroke: blue; }</style></g>
</svg>"""

MALFORMED_SVG = """<svg xmlns="http://www.w3.org/2000/svg"><rect fill="#ff0000"></svg>"""


@pytest.fixture
def sample_svg():
    return SAMPLE_SVG


@pytest.fixture
def style_element_svg():
    return STYLE_ELEMENT_SVG


@pytest.fixture
def malformed_svg():
    return MALFORMED_SVG


@pytest.fixture
def temp_dir():
    """Creates a temporary directory for test operations."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, temp_dir):
    """Point user config and log files at a temp dir and reset singletons."""
    monkeypatch.setenv("GRAYSCALE_SVG_CONFIG_DIR", str(temp_dir / "user_config"))
    monkeypatch.setenv("GRAYSCALE_SVG_LOG_DIR", str(temp_dir / "logs"))
    monkeypatch.delenv("GRAYSCALE_SVG_DEBUG_MODULES", raising=False)
    ConfigManager.reset()

    # setup_logging() reconfigures these; put them back after each test
    loggers = [logging.getLogger("grayscale_svg"), logging.getLogger()]
    saved = [(lg, lg.level, lg.propagate, list(lg.handlers)) for lg in loggers]
    yield
    for lg, level, propagate, handlers in saved:
        for handler in lg.handlers:
            if handler not in handlers:
                handler.close()
        lg.setLevel(level)
        lg.propagate = propagate
        lg.handlers[:] = handlers
    ConfigManager.reset()
