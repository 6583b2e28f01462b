"""Configuration management for the N-Queens enumeration suite.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize experiment settings, timeouts, parallelism and output naming.

File format (high-level)
------------------------
- experiment_settings: board sizes, repeated runs per size, output directory.
- timeout_settings: per-enumeration time limit and global experiment timeout.
- parallel_settings: number of worker processes.
- output_settings: datestamp and run-tag policy for output filenames.

All methods return Python native types; semantic checks are left to
``nqueens_enum.analysis.cli.apply_configuration``.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist the experiment configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file."""
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Return board sizes, run counts and output directory."""
        return self.config.get("experiment_settings", {})

    def get_timeout_settings(self):
        """Return the enumeration and experiment time limits."""
        return self.config.get("timeout_settings", {})

    def get_parallel_settings(self):
        return self.config.get("parallel_settings", {})

    def get_output_settings(self):
        return self.config.get("output_settings", {})

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
