from __future__ import annotations

import os
from pathlib import Path
from typing import Dict

import yaml

DEFAULT_CONFIG: Dict[str, object] = {
    "storage": "json",
    "storage_modules": {
        "json": "expense_tracker.storage.json_storage.JSONFileStorage",
        "memory": "expense_tracker.storage.memory.MemoryStorage",
    },
    "output_modules": {
        "csv": "expense_tracker.outputs.csv_output.CSVOutput",
        "html": "expense_tracker.outputs.html_output.HTMLOutput",
        "excel": "expense_tracker.outputs.excel_output.ExcelOutput",
    },
    "data_file": "expense_tracker.json",
    "storage_key": "expenseTracker.transactions",
    "currency": "INR",
    "output_dir": "data",
    "seed_sample_data": False,
    "log_level": "INFO",
}

ENV_OVERRIDES = {
    "EXPENSE_TRACKER_DATA_FILE": "data_file",
    "EXPENSE_TRACKER_LOG_LEVEL": "log_level",
}


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = value
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: str | Path | None = None) -> Dict[str, object]:
    """Read a YAML config file and fill in defaults.

    A missing file is not an error; the defaults are used. Environment
    variables listed in ``ENV_OVERRIDES`` win over the file.
    """
    config: Dict[str, object] = {}
    if path is not None and Path(path).exists():
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        config = data

    config = _merge_defaults(config, DEFAULT_CONFIG)
    for env_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            config[key] = value
    return config

