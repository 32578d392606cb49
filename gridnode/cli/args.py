# gridnode/cli/args.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Tuple

from gridnode.app.config import GridNodeCliConfig


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gridnode")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, type=str.upper)
    parser.add_argument("--log-file", type=Path, default=None, help="Also append log records to this file.")
    parser.add_argument(
        "--metadata-dir",
        type=Path,
        default=None,
        help="Directory holding browsers.yml (default: built-in catalog).",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    # shared by commands that read a node config
    layout = argparse.ArgumentParser(add_help=False)
    layout.add_argument(
        "--modern",
        action="store_true",
        help="Config uses the modern layout (fields at top level, not under 'configuration').",
    )

    p_show = sub.add_parser("show", parents=[layout], help="Print a node config summary.")
    p_show.add_argument("file", type=Path)

    sub.add_parser("capabilities", help="List browsers known to the capability catalog.")

    p_convert = sub.add_parser("convert", parents=[layout], help="Rewrite a node config in the other layout.")
    p_convert.add_argument("src", type=Path)
    p_convert.add_argument("dst", type=Path)
    p_convert.add_argument("--to", required=True, choices=("legacy", "modern"))

    p_norm = sub.add_parser(
        "normalize",
        parents=[layout],
        help="Load and write back a node config with all defaults filled in.",
    )
    p_norm.add_argument("src", type=Path)
    p_norm.add_argument("dst", type=Path, nargs="?", default=None, help="Output file (default: overwrite src).")

    return parser


def parse_args(argv: Optional[list[str]] = None) -> Tuple[argparse.Namespace, GridNodeCliConfig]:
    """
    Returns: (args, cfg)

    - cfg holds the app-level settings shared by every command
    """
    args = build_parser().parse_args(argv)
    cfg = GridNodeCliConfig(
        metadata_dir=args.metadata_dir,
        log_level=args.log_level,
        log_file=args.log_file,
    )
    return args, cfg
