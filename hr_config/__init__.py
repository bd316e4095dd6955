"""
hr_config -- single public entrypoint for HR configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component reads configuration
    files or environment variables directly.

Architecture position:
    Configuration -- sits above ``hr_kernel`` / ``hr_engines`` and below
    ``hr_modules``.  The kernel and engines never import from here;
    module services receive an ``HRConfig`` and pass its policies down.

Failure modes:
    - ``FileNotFoundError`` -- the requested configuration file is missing.
    - ``ValueError`` -- unknown keys or invalid values.

Every successful call emits an ``HR_CONFIG_TRACE`` log record with the
config id, version, source path and checksum.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path

from hr_config.loader import compute_checksum, load_yaml_file, parse_config
from hr_config.schema import DatabaseConfig, HRConfig, TenurePolicy

_logger = logging.getLogger("hr_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"

DATABASE_URL_ENV = "HR_DATABASE_URL"

__all__ = [
    "DATABASE_URL_ENV",
    "DatabaseConfig",
    "HRConfig",
    "TenurePolicy",
    "get_active_config",
]


def get_active_config(config_path: Path | str | None = None) -> HRConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: YAML file to load.  Defaults to
            ``hr_config/sets/default.yaml``.

    The ``HR_DATABASE_URL`` environment variable, when set, overrides the
    database URL of the loaded file.

    Raises:
        FileNotFoundError: The configuration file does not exist.
        ValueError: The configuration is invalid.
    """
    path = Path(config_path) if config_path is not None else _DEFAULT_CONFIG_PATH
    data = load_yaml_file(path)
    config = parse_config(data)

    override = os.environ.get(DATABASE_URL_ENV)
    if override:
        config = dataclasses.replace(
            config,
            database=dataclasses.replace(config.database, url=override),
        )

    _logger.info(
        "HR_CONFIG_TRACE",
        extra={
            "trace_type": "HR_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "config_path": str(path),
            "checksum": compute_checksum(data),
            "database_url_overridden": bool(override),
            "tenure_method": config.tenure.method.value,
        },
    )
    return config
