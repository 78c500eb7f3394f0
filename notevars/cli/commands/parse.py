"""Parse command: list the variables a document declares."""

import logging
from argparse import Namespace
from pathlib import Path

from notevars.exceptions import DeclarationError
from notevars.variables import DeclarationParser

from .common import configure_logging


logger = logging.getLogger(__name__)


def show_declarations(args: Namespace) -> int:
    """Print 'name: value' for each declaration, in document order."""
    configure_logging(args)

    try:
        document_path = Path(args.file)
        if not document_path.exists():
            logger.error(f"Document not found: {document_path}")
            return 1

        parser = DeclarationParser(strict=args.strict)
        declarations, _ = parser.parse(document_path.read_text(encoding='utf-8'))

        for v in declarations:
            print(f"{v.name}: {v.value}")

        return 0

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except DeclarationError as e:
        for line in str(e).splitlines():
            logger.error(line)
        return e.exit_code
    except (UnicodeDecodeError, OSError) as e:
        logger.error(f"File error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
