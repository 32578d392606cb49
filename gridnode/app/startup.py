from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import Callable, NoReturn, Optional

from gridnode.core.errors import GridNodeError
from gridnode.io.loader import NodeConfigLoader
from gridnode.model.node_config import NodeConfig


ExitFn = Callable[[int], NoReturn]

FATAL_EXIT_CODE = 1


def _stack_trace(e: BaseException) -> str:
    return "".join(traceback.format_exception(type(e), e, e.__traceback__))


def _fatal(message: str, *, logger: logging.Logger, exit_fn: ExitFn) -> NoReturn:
    print(message)
    logger.critical(message)
    exit_fn(FATAL_EXIT_CODE)
    raise SystemExit(FATAL_EXIT_CODE)  # exit_fn returned (test hook)


def load_or_exit(
    file_path: str | Path,
    *,
    modern: bool,
    loader: Optional[NodeConfigLoader] = None,
    exit_fn: ExitFn = sys.exit,
    logger: Optional[logging.Logger] = None,
) -> NodeConfig:
    """
    Load a node config at process startup; any failure ends the process.

    A misconfigured node must not keep running on defaults, so there is no
    recoverable path here. `exit_fn` is injectable for tests.
    """
    log = logger or logging.getLogger(__name__)
    try:
        return (loader or NodeConfigLoader(logger=log)).load(file_path, modern)
    except GridNodeError as e:
        _fatal(
            f"Error loading config from {file_path}, {e.message}, Will have to exit. \n{_stack_trace(e)}",
            logger=log,
            exit_fn=exit_fn,
        )


def write_or_exit(
    config: NodeConfig,
    file_path: str | Path,
    *,
    loader: Optional[NodeConfigLoader] = None,
    exit_fn: ExitFn = sys.exit,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Write a node config; any failure ends the process.

    A partially written file is left in place.
    """
    log = logger or logging.getLogger(__name__)
    try:
        (loader or NodeConfigLoader(logger=log)).write(config, file_path)
    except GridNodeError as e:
        _fatal(
            f"Could not write node config for '{file_path}' with following error\n{e.message}\n{_stack_trace(e)}",
            logger=log,
            exit_fn=exit_fn,
        )
