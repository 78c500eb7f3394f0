"""
Declaration parsing for Markdown documents.

Documents declare local variables in HTML comments, one per line:

    <!-- @var name: value -->

Declaration lines (and reserved ``<!-- @include: ... -->`` lines) are removed
from the document; every other line is kept verbatim.
"""

import logging
from typing import List, Tuple

from notevars.exceptions import DeclarationError, MalformedDeclaration
from notevars.state import Variable


logger = logging.getLogger(__name__)


VAR_PREFIX = "<!-- @var "
INCLUDE_PREFIX = "<!-- @include:"
COMMENT_SUFFIX = " -->"


def split_lines(content: str) -> List[str]:
    """Split text on newlines; a '\\r' is dropped only when it precedes a '\\n'.

    A final newline does not produce an extra empty line.
    """
    lines = content.split('\n')
    last = lines.pop()

    result = [line[:-1] if line.endswith('\r') else line for line in lines]
    if last:
        result.append(last)
    return result


class DeclarationParser:
    """Extracts ``<!-- @var -->`` declarations from document text."""

    def __init__(self, strict: bool = False):
        """
        Initialize the parser.

        Args:
            strict: Raise DeclarationError for declaration lines without a
                colon instead of silently dropping them
        """
        self.strict = strict

    def parse(self, content: str) -> Tuple[List[Variable], str]:
        """
        Parse declarations out of a document.

        Args:
            content: Document text

        Returns:
            Tuple of (declarations in document order, remaining text)

        Raises:
            DeclarationError: In strict mode, if any declaration is malformed
        """
        variables: List[Variable] = []
        kept_lines: List[str] = []
        malformed: List[MalformedDeclaration] = []

        for line_number, line in enumerate(split_lines(content), start=1):
            trimmed = line.strip()

            if trimmed.startswith(VAR_PREFIX) and trimmed.endswith(COMMENT_SUFFIX):
                # Prefix and suffix overlap on a bare "<!-- @var -->"
                body = trimmed[len(VAR_PREFIX):]
                body = body[:len(body) - len(COMMENT_SUFFIX)] if len(body) >= len(COMMENT_SUFFIX) else ''

                name, sep, value = body.partition(':')
                if sep:
                    variables.append(Variable(name=name.strip(), value=value.strip()))
                else:
                    malformed.append(MalformedDeclaration(line_number, line))
            elif trimmed.startswith(INCLUDE_PREFIX) and trimmed.endswith(COMMENT_SUFFIX):
                # Reserved for content inclusion; consumed with no effect
                continue
            else:
                kept_lines.append(line)

        if malformed:
            if self.strict:
                raise DeclarationError(malformed)
            logger.debug(f"Dropped {len(malformed)} malformed declaration line(s)")

        if variables:
            logger.debug(f"Parsed {len(variables)} variable declaration(s)")

        return variables, '\n'.join(kept_lines)


def parse_declarations(content: str, strict: bool = False) -> Tuple[List[Variable], str]:
    """Parse declarations out of a document. See DeclarationParser.parse."""
    return DeclarationParser(strict=strict).parse(content)
