"""Simplify command implementation."""

import json
import logging
import sys
from argparse import Namespace as Arguments
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from bashsimp.exceptions import ScriptValidationError
from bashsimp.loader import ScriptLoader, dump_script
from bashsimp.script.render import render_script
from bashsimp.variables.namespace import Namespace
from bashsimp.workflow.walker import simplify


logger = logging.getLogger(__name__)


def parse_variables(args: Arguments) -> Dict[str, List[str]]:
    """Parse initial variable bindings from command line arguments."""
    variables: Dict[str, List[str]] = {}

    # JSON file first so --var can override it
    if args.vars_file:
        vars_file = Path(args.vars_file)
        if not vars_file.exists():
            raise FileNotFoundError(f"Variables file not found: {vars_file}")

        with open(vars_file, 'r') as f:
            file_vars = json.load(f)
            if not isinstance(file_vars, dict):
                raise ValueError(f"Variables file must contain a JSON object, got {type(file_vars).__name__}")

            for name, value in file_vars.items():
                if isinstance(value, list):
                    variables[str(name)] = [str(segment) for segment in value]
                else:
                    variables[str(name)] = [str(value)]

    if args.var:
        for item in args.var:
            if '=' not in item:
                raise ValueError(f"Invalid variable format: {item}. Expected NAME=VALUE")
            name, value = item.split('=', 1)
            if not name:
                raise ValueError(f"Invalid variable name in: {item}")
            variables[name] = [value]

    return variables


def write_output(text: str, destination: Optional[str] = None) -> None:
    if destination:
        Path(destination).write_text(text)
        logger.info(f"Wrote simplified script to {destination}")
    else:
        sys.stdout.write(text)


def simplify_command(args: Arguments) -> int:
    """
    Load a script document, simplify it and write the result.

    Returns:
        0 on success, 1 on I/O or argument errors, 2 on validation errors
    """
    log_level = getattr(logging, args.log_level.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR
    elif args.verbose:
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    script_path = Path(args.script).resolve()
    if not script_path.exists():
        logger.error(f"Script file not found: {script_path}")
        return 1

    logger.info(f"Loading script: {script_path}")
    loader = ScriptLoader()
    try:
        script = loader.load(script_path)
    except ScriptValidationError as e:
        for error in e.errors:
            if error.path:
                logger.error(f"Validation error at {error.path}: {error.message}")
            else:
                logger.error(f"Validation error: {error.message}")
        return e.exit_code

    if args.dry_run:
        logger.info("[DRY RUN] Script validation successful")
        return 0

    try:
        namespace = Namespace(parse_variables(args))
    except (ValueError, FileNotFoundError, json.JSONDecodeError) as e:
        logger.error(str(e))
        return 1

    logger.debug(f"Initial namespace: {namespace.to_dict()}")
    simplified, final_namespace = simplify(namespace, script)
    logger.info(f"Simplified {len(script)} fields into {len(simplified)}")

    if args.format == 'yaml':
        text = yaml.safe_dump(dump_script(simplified), sort_keys=False)
    else:
        text = render_script(simplified)

    try:
        write_output(text, args.output)
        if args.namespace_out:
            with open(args.namespace_out, 'w') as f:
                json.dump(final_namespace.to_dict(), f, indent=2)
            logger.info(f"Wrote namespace to {args.namespace_out}")
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        return 1

    return 0
