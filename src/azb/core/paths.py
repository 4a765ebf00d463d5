"""
azb directory structure management.

Runtime files live under ``~/.azb`` unless AZB_DATA_DIR points elsewhere.
"""

import os
from pathlib import Path


class AzbPaths:
    """Manage the azb runtime directory structure."""

    @staticmethod
    def get_base_dir() -> Path:
        """Get base azb directory."""
        base = os.getenv("AZB_DATA_DIR")
        if base:
            return Path(base)
        return Path.home() / ".azb"

    @staticmethod
    def get_logs_dir() -> Path:
        """Get directory for command logs."""
        return AzbPaths.get_base_dir() / "logs"

    @staticmethod
    def get_log_file() -> Path:
        return AzbPaths.get_logs_dir() / "azb.log"

    @staticmethod
    def ensure_directories() -> None:
        """
        Ensure all required directories exist with proper permissions.

        Creates directories with 0700 permissions.
        """
        AzbPaths.get_logs_dir().mkdir(parents=True, exist_ok=True, mode=0o700)
