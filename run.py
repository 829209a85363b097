# -*- coding: utf-8 -*-

"""
Command-line entry point for inspecting XML configuration files.

    python run.py dump examples/example.xml
    python run.py get examples/example.xml "Level0:attr1" --type int
    python run.py children examples/example.xml Histograms
    python run.py histograms examples/example.xml
"""

import argparse
import logging
import sys
from typing import List, Optional

from xmlconfig_toolkit import HistogramSpec, XmlConfig
from xmlconfig_toolkit.core import register_histogram_converter
from xmlconfig_toolkit.logging_config import setup_logging

_TYPES = {"str": str, "int": int, "float": float, "bool": bool}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query a flattened XML configuration.")
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    parser.add_argument("--strict", action="store_true", help="fail on malformed values")
    sub = parser.add_subparsers(dest="command", required=True)

    dump = sub.add_parser("dump", help="print every [path] = value entry")
    dump.add_argument("source")

    get = sub.add_parser("get", help="print the value at a path")
    get.add_argument("source")
    get.add_argument("path")
    get.add_argument("--type", choices=sorted(_TYPES), default="str")
    get.add_argument("--default", default=None)
    get.add_argument("--vector", action="store_true", help="read a comma separated list")

    children = sub.add_parser("children", help="list the node paths below a path")
    children.add_argument("source")
    children.add_argument("path")

    hists = sub.add_parser("histograms", help="build histogram specs from the Histograms node")
    hists.add_argument("source")
    hists.add_argument("--path", default="Histograms")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Configure logging, load the document and run the requested command.
    """
    args = _build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else None)

    cfg = XmlConfig(args.source, strict=args.strict)
    if cfg.error_parsing:
        print(f"Error: {cfg.last_error}", file=sys.stderr)
        return 1

    if args.command == "dump":
        sys.stdout.write(cfg.dump())
    elif args.command == "get":
        target = _TYPES[args.type]
        if args.vector:
            values = cfg.get_vector(args.path, [], target)
            print(", ".join(str(v) for v in values))
        else:
            print(cfg.get(args.path, args.default, target))
    elif args.command == "children":
        for path in cfg.children_of(args.path):
            print(path)
    elif args.command == "histograms":
        register_histogram_converter(cfg.registry)
        for path in cfg.children_of(args.path):
            spec = cfg.get(path, None, HistogramSpec)
            if spec is None:
                continue
            print(f"Created histogram: {spec.name}, title={spec.title}, "
                  f"bins=({spec.nbins}, {spec.low}, {spec.high})")
    return 0


if __name__ == '__main__':
    sys.exit(main())
