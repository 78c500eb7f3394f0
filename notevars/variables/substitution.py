"""
Variable substitution implementation.
Handles {{name}} resolution against document declarations and the global store.
"""

import logging
import re
import threading
from typing import Dict, List, Mapping, Optional, Set

from notevars.state import VariableStore
from .declarations import DeclarationParser


logger = logging.getLogger(__name__)


class VariableSubstitutor:
    """
    Expands {{name}} placeholders in document text.

    Resolution order for each placeholder:
    - local: <!-- @var name: value --> declarations in the same document
    - overrides: caller-supplied mapping (never written to the store)
    - global: the VariableStore

    Placeholders that resolve nowhere are left exactly as written. Substituted
    values are not scanned again.
    """

    # {{...}} with at least one character and no closing brace inside
    VAR_PATTERN = re.compile(r'\{\{([^}]+)\}\}')

    def __init__(self, strict: bool = False):
        """Initialize the substitutor.

        Args:
            strict: Passed to the declaration parser
        """
        self.parser = DeclarationParser(strict=strict)
        self._last_call = threading.local()

    @property
    def unresolved_vars(self) -> Set[str]:
        """Names left unresolved by the most recent call made from this thread."""
        return set(getattr(self._last_call, "unresolved", ()))

    def expand(
        self,
        content: str,
        store: Optional[VariableStore] = None,
        overrides: Optional[Mapping[str, str]] = None
    ) -> str:
        """
        Parse declarations out of content and substitute placeholders.

        Args:
            content: Document text, possibly containing declaration lines
            store: Global variables consulted after local declarations
            overrides: Optional call-scoped values between local and global

        Returns:
            Remaining text with placeholders substituted

        Raises:
            DeclarationError: In strict mode, if a declaration is malformed
        """
        declarations, remainder = self.parser.parse(content)

        local: Dict[str, str] = {}
        for v in declarations:
            local[v.name] = v.value

        if overrides:
            scoped = dict(overrides)
            scoped.update(local)
            local = scoped

        return self.substitute(remainder, local, store)

    def substitute(
        self,
        text: str,
        local: Mapping[str, str],
        store: Optional[VariableStore] = None
    ) -> str:
        """
        Substitute placeholders in text that has no declaration lines.

        Args:
            text: Text containing {{name}} references
            local: Values that take precedence over the store
            store: Global variables

        Returns:
            Text with variables substituted
        """
        unresolved: Set[str] = set()

        def replace_var(match):
            var_name = match.group(1).strip()

            if var_name in local:
                return local[var_name]

            if store is not None:
                value = store.get(var_name)
                if value is not None:
                    return value

            unresolved.add(var_name)
            return match.group(0)

        result = self.VAR_PATTERN.sub(replace_var, text)

        self._last_call.unresolved = unresolved
        if unresolved:
            logger.debug(f"Unresolved variables left in place: {sorted(unresolved)}")

        return result

    def find_placeholders(self, text: str) -> List[str]:
        """
        List placeholder names in order of occurrence.

        Args:
            text: Text to scan

        Returns:
            Trimmed names, duplicates included
        """
        return [m.group(1).strip() for m in self.VAR_PATTERN.finditer(text)]
