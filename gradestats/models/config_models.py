from __future__ import annotations

from dataclasses import dataclass

"""Configuration dataclass for the batch tool.

Loaded from YAML by ``gradestats.config.loader``; the parsing core itself takes
no configuration.
"""


@dataclass(frozen=True)
class ParseConfig:
    """Root configuration object for a batch run."""
    source_directory: str  # directory scanned for exports
    output_directory: str | None = None  # where <stem>.json is written; None = no output
    file_pattern: str = "*.csv"  # glob, non-recursive
    encoding: str = "utf-8"  # byte decoding of input files
    timezone: str = "UTC"  # used for the default generation date
    logs_directory: str = "./logs"  # JSON Lines error log location
