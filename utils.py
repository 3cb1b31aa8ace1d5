# utils.py
"""
Utility functions for the sky simulation.

This module provides helper functions, such as logging setup, config
loading and guarded numeric remapping, that are used across different parts
of the application but do not belong to a specific domain like the sun,
the clouds or rendering.
"""
import logging
import logging.handlers
import json
import math
import os
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#   - Invariants: After this function runs, the logging system is
#     initialized and ready for use throughout the application.
#
# clamp(value: float, low: float, high: float) -> float:
#   - Invariants: The result always lies in [low, high]. NaN maps to low.
#
# map_range(value, in_min, in_max, out_min, out_max) -> float:
#   - Invariants: Never divides by zero. A zero-width input domain
#     returns out_min. The result is NOT clamped.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/sky.log')

    # Ensure the log directory exists
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    # Get the root logger
    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")

def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

def clamp(value: float, low: float, high: float) -> float:
    """Clamps value into [low, high]. NaN collapses to the lower bound."""
    if math.isnan(value):
        return low
    return max(low, min(high, value))

def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Linearly remaps value from [in_min, in_max] onto [out_min, out_max]."""
    span = in_max - in_min
    if span == 0:
        return out_min
    return out_min + (value - in_min) / span * (out_max - out_min)

def log_ease(fraction: float) -> float:
    """
    Eases a linear fraction with 1 - |log10(f)|.

    The input is clamped to [0, 1] first and the result clamped again, in
    that order. A fraction of zero has no logarithm and yields 0.
    """
    fraction = clamp(fraction, 0.0, 1.0)
    if fraction <= 0.0:
        return 0.0
    return clamp(1.0 - abs(math.log10(fraction)), 0.0, 1.0)
