# gridnode/cli/main.py
from __future__ import annotations

from typing import Optional

from gridnode.core.errors import GridNodeError

from gridnode.cli.args import parse_args
from gridnode.cli.commands import (
    cmd_capabilities,
    cmd_convert,
    cmd_normalize,
    cmd_show,
    configure_logging,
)


def main(argv: Optional[list[str]] = None) -> int:
    try:
        args, cfg = parse_args(argv)
        configure_logging(cfg)

        if args.cmd == "show":
            return cmd_show(args, cfg)
        if args.cmd == "capabilities":
            return cmd_capabilities(cfg)
        if args.cmd == "convert":
            return cmd_convert(args, cfg)
        if args.cmd == "normalize":
            return cmd_normalize(args, cfg)

        return 2
    except GridNodeError as e:
        print(f"ERROR: {e.message}")
        if e.hint:
            print(f"Hint: {e.hint}")
        return 1
