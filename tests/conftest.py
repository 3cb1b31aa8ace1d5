"""Shared pytest fixtures for all tests."""

import logging
import logging.handlers
import os
import sys

import pytest

# Modules live at the repository root
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


@pytest.fixture
def sim_params():
    """Simulation parameters as they appear in config.json."""
    return {"seed": 42, "star_count": 30}


@pytest.fixture
def config(tmp_path):
    """Full configuration with the log file redirected into tmp_path."""
    return {
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "log_file": str(tmp_path / "logs" / "sky.log"),
        },
        "simulation_parameters": {"seed": 42, "star_count": 30},
        "run_control": {"max_steps": 10, "log_throttle_steps": 5, "profile": False},
        "visualization": {"fps": 60},
    }


@pytest.fixture
def restore_root_logger():
    """Remove the handlers setup_logging attached to the root logger."""
    root = logging.getLogger()
    saved_level = root.level
    yield root
    # Only the plain handlers setup_logging installs; pytest's capture
    # handlers are subclasses and manage themselves.
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
