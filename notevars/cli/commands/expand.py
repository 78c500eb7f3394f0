"""Expand command: write a document with its variables applied."""

import logging
from argparse import Namespace
from pathlib import Path

from notevars.exceptions import DeclarationError, VariableParseError
from notevars.processor import VariableProcessor

from .common import build_store, configure_logging, parse_var_pairs, save_store, write_output


logger = logging.getLogger(__name__)


def expand_document(args: Namespace) -> int:
    """
    Expand {{name}} placeholders in a document.

    Global variables come from --variables YAML files (merged in order) and
    --var KEY=VALUE pairs, which are applied as per-call overrides.

    Returns:
        Exit code
    """
    configure_logging(args)

    try:
        document_path = Path(args.file)
        if not document_path.exists():
            logger.error(f"Document not found: {document_path}")
            return 1

        overrides = parse_var_pairs(args.var)
        store = build_store(args.variables, args.store)

        processor = VariableProcessor(
            store=store,
            persist_overrides=not args.no_persist_overrides,
            strict_declarations=args.strict
        )

        content = document_path.read_text(encoding='utf-8')
        result = processor.process_markdown(content, overrides)

        for name in sorted(processor.unresolved_vars):
            logger.warning(f"Unresolved variable: {{{{{name}}}}}")

        save_store(store, args.store)
        write_output(result, args.out)
        return 0

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except (VariableParseError, DeclarationError) as e:
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
