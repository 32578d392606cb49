# gridnode/app/config.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class GridNodeCliConfig:
    metadata_dir: Optional[Path] = None   # None = built-in browser catalog
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
