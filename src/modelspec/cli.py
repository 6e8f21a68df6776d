#!/usr/bin/env python3
"""
Module: cli.py
Purpose: Command-line interface for inspecting model specifications.

Commands
--------
show_engines : List the engines loaded for a model type
    Options: <model>
check : Check whether a model/engine/mode combination is available
    Options: <model> <engine> <mode>
show_call : Print the engine call for a named YAML specification
    Options: <name>, --specs
registry : Print the static model registry
    Options: --model

Usage
-----
    modelspec show_engines linear_reg
    modelspec check proportional_hazards glmnet "censored regression"
    modelspec show_call lasso --specs model_specs.yml
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import setup_logging
from .errors import ModelSpecError


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(
        prog='modelspec',
        description='Model specification tools',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    p.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: WARNING)'
    )
    sub = p.add_subparsers(dest='cmd', required=True)

    p_engines = sub.add_parser('show_engines', help='List loaded engines for a model')
    p_engines.add_argument('model', help='Model type (e.g., linear_reg)')

    p_check = sub.add_parser('check', help='Check a model/engine/mode combination')
    p_check.add_argument('model', help='Model type')
    p_check.add_argument('engine', help='Engine name')
    p_check.add_argument('mode', help='Model mode')

    p_call = sub.add_parser('show_call', help='Print the engine call for a specification')
    p_call.add_argument('name', help='Specification name')
    p_call.add_argument(
        '--specs', '-s',
        type=Path,
        default=None,
        help='Specifications YAML file (default: model_specs.yml)'
    )

    p_reg = sub.add_parser('registry', help='Print the static model registry')
    p_reg.add_argument(
        '--model', '-m',
        default=None,
        help='Only show rows for this model type'
    )

    return p.parse_args(argv)


def cmd_show_engines(model: str) -> int:
    from .resolver import show_engines

    print(show_engines(model).to_string(index=False))
    return 0


def cmd_check(model: str, engine: str, mode: str) -> int:
    from .resolver import describe_missing, has_loaded_implementation
    from .spec import Mode

    mode = Mode.parse(mode).value
    if has_loaded_implementation(model, engine, mode):
        print(f"`{model}` with the `{engine}` engine is available for mode '{mode}'.")
        return 0

    print(describe_missing(model, engine, mode))
    return 1


def cmd_show_call(name: str, specs: Optional[Path] = None) -> int:
    from .specifications import get_model_spec
    from .translate import translate

    spec = get_model_spec(name, specs)
    print(spec)
    print(translate(spec).render())
    return 0


def cmd_registry(model: Optional[str] = None) -> int:
    from .registry import get_model_registry

    registry = get_model_registry()
    frame = registry.to_frame()
    if model is not None:
        frame = frame[frame['model'] == model]
    print(frame.to_string(index=False))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.cmd == 'show_engines':
            return cmd_show_engines(args.model)

        elif args.cmd == 'check':
            return cmd_check(args.model, args.engine, args.mode)

        elif args.cmd == 'show_call':
            return cmd_show_call(args.name, args.specs)

        elif args.cmd == 'registry':
            return cmd_registry(args.model)

    except (ModelSpecError, FileNotFoundError, KeyError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 2


if __name__ == '__main__':
    sys.exit(main())
