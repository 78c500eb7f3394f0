"""Helpers shared by CLI commands."""

import logging
from argparse import Namespace
from pathlib import Path
from typing import Dict, List, Optional

from notevars.loader import VariableLoader
from notevars.state import VariableStore


logger = logging.getLogger(__name__)


def configure_logging(args: Namespace) -> None:
    """Set up logging from --log-level/--debug/--quiet/--verbose."""
    level_name = getattr(args, 'log_level', 'info')
    if level_name == 'warn':
        level_name = 'warning'
    log_level = getattr(logging, level_name.upper())

    if getattr(args, 'debug', False):
        log_level = logging.DEBUG
    elif getattr(args, 'quiet', False):
        log_level = logging.ERROR
    elif getattr(args, 'verbose', False):
        log_level = logging.DEBUG

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_var_pairs(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parse KEY=VALUE arguments; later keys win."""
    values: Dict[str, str] = {}
    for item in pairs or []:
        if '=' not in item:
            raise ValueError(f"Invalid variable format: {item}. Expected KEY=VALUE")
        key, value = item.split('=', 1)
        if not key:
            raise ValueError(f"Invalid variable name in: {item}")
        values[key] = value
    return values


def build_store(
    variable_files: Optional[List[str]],
    store_path: Optional[str] = None
) -> VariableStore:
    """Create the process store and merge each YAML file into it in order.

    When store_path names an existing saved store, it is loaded first.
    """
    if store_path and Path(store_path).exists():
        store = VariableStore.load(Path(store_path))
        logger.info(f"Loaded {len(store)} saved variables from {store_path}")
    else:
        store = VariableStore()

    loader = VariableLoader()
    for file_name in variable_files or []:
        path = Path(file_name)
        count = loader.import_file(path, store)
        logger.info(f"Loaded {count} variables from {path}")
    return store


def save_store(store: VariableStore, store_path: Optional[str]) -> None:
    """Persist the store when --store was given."""
    if store_path:
        store.save(Path(store_path))
        logger.info(f"Saved {len(store)} variables to {store_path}")


def write_output(text: str, out: Optional[str]) -> None:
    """Write text to a file, or to stdout when no path is given."""
    if out:
        out_path = Path(out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding='utf-8')
        logger.info(f"Wrote {out_path}")
    else:
        print(text, end='' if text.endswith('\n') else '\n')
