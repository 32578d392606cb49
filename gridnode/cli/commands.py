# gridnode/cli/commands.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from gridnode.app.config import GridNodeCliConfig
from gridnode.app.startup import load_or_exit, write_or_exit
from gridnode.capabilities.factory import CapabilityFactory
from gridnode.io.loader import NodeConfigLoader, is_appium_node
from gridnode.model.node_config import NodeConfig, SchemaVariant


_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# ---------------- Logging ----------------

def configure_logging(cfg: GridNodeCliConfig) -> None:
    """
    Console handler on the root logger (idempotent), plus an optional file handler.
    Kept in CLI (presentation-layer concern).
    """
    root = logging.getLogger()
    level = getattr(logging, cfg.log_level, logging.WARNING)

    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        sh = logging.StreamHandler()
        sh.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(sh)
    root.setLevel(level)

    if cfg.log_file is not None:
        configure_file_logging(cfg.log_file, level=level)


def configure_file_logging(app_log_path: Path, *, level: int = logging.INFO) -> None:
    """
    Add a file handler to the root logger (idempotent).
    """
    root = logging.getLogger()
    app_log_path.parent.mkdir(parents=True, exist_ok=True)
    target = str(app_log_path.resolve())

    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == target:
            return

    fh = logging.FileHandler(app_log_path, encoding="utf-8", delay=True)
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(fh)


def make_loader(cfg: GridNodeCliConfig) -> NodeConfigLoader:
    return NodeConfigLoader(CapabilityFactory.default(cfg.metadata_dir))

# ---------------- Printing ----------------

def print_node(node: NodeConfig) -> None:
    print(f"File:      {node.source_file}")
    print(f"Layout:    {node.variant.value}")
    print(f"Hub:       {node.hub_host or '-'}:{node.hub_port}")
    print(f"Node:      host={node.host or '-'} port={node.port} url={node.url or '-'}")
    print(f"Proxy:     {node.proxy}")
    print(
        f"Limits:    max_session={node.max_session} register={node.register} "
        f"register_cycle_ms={node.register_cycle if node.register_cycle is not None else '-'}"
    )
    print(
        f"Health:    status_timeout_ms={node.node_status_check_timeout} "
        f"unregister_after_ms={node.unregister_if_still_down_after} "
        f"down_polling_limit={node.down_polling_limit}"
    )
    appium = "yes" if is_appium_node(node) else "no"
    print(f"Appium:    {appium}" + (f" ({node.appium_start_command})" if node.appium_start_command else ""))

    if not node.capabilities:
        print("Capabilities: (none)")
        return

    print("Capabilities:")
    for cap in node.capabilities:
        extra = {k: v for k, v in cap.items() if k != "browserName"}
        print(f"  - {cap.browser_name} [{cap.lower_case_name}] {extra}")

# ---------------- Commands ----------------

def cmd_show(args: argparse.Namespace, cfg: GridNodeCliConfig) -> int:
    node = load_or_exit(args.file, modern=args.modern, loader=make_loader(cfg))
    print_node(node)
    return 0


def cmd_capabilities(cfg: GridNodeCliConfig) -> int:
    factory = CapabilityFactory.default(cfg.metadata_dir)
    browsers = sorted(factory.supported_browsers(), key=lambda b: b.key)
    if not browsers:
        print("(no browsers in catalog)")
        return 0

    for b in browsers:
        print(f"{b.name:<20} label={b.label} driver={b.driver} defaults={b.defaults}")
    return 0


def cmd_convert(args: argparse.Namespace, cfg: GridNodeCliConfig) -> int:
    loader = make_loader(cfg)
    node = load_or_exit(args.src, modern=args.modern, loader=loader)

    target = SchemaVariant(args.to)
    converted = node.convert_to(target)

    write_or_exit(converted, args.dst, loader=loader)
    print(f"Wrote {target.value} config: {args.dst}")
    return 0


def cmd_normalize(args: argparse.Namespace, cfg: GridNodeCliConfig) -> int:
    loader = make_loader(cfg)
    node = load_or_exit(args.src, modern=args.modern, loader=loader)

    dst = args.dst or args.src
    write_or_exit(node, dst, loader=loader)
    print(f"Wrote {node.variant.value} config: {dst}")
    return 0
