"""Export command: merge variable sources and print them as YAML."""

import logging
from argparse import Namespace

from notevars.exceptions import VariableParseError
from notevars.processor import VariableProcessor

from .common import build_store, configure_logging, parse_var_pairs, save_store, write_output


logger = logging.getLogger(__name__)


def export_variables(args: Namespace) -> int:
    """Merge --variables files and --var pairs, then export the result."""
    configure_logging(args)

    try:
        store = build_store(args.variables, args.store)
        processor = VariableProcessor(store=store)
        for name, value in parse_var_pairs(args.var).items():
            processor.set_variable(name, value)

        save_store(store, args.store)
        write_output(processor.export_yaml(), args.out)
        return 0

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except VariableParseError as e:
        for line in str(e).splitlines():
            logger.error(line)
        return e.exit_code
    except (UnicodeDecodeError, OSError) as e:
        logger.error(f"File error: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 2
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
