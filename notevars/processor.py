"""
Command surface for the editor: global variable management, YAML
import/export and Markdown expansion, all bound to one VariableStore.
"""

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from notevars.loader import VariableLoader
from notevars.state import Variable, VariableStore
from notevars.variables import VariableSubstitutor


logger = logging.getLogger(__name__)


class VariableProcessor:
    """
    Binds the declaration parser, substitutor and YAML codec to a store.

    Variable priority during expansion:
    1. Document declarations (<!-- @var name: value -->)
    2. Global variables (the store, plus any per-call global_variables)
    """

    def __init__(
        self,
        store: Optional[VariableStore] = None,
        persist_overrides: bool = True,
        strict_declarations: bool = False
    ):
        """
        Initialize the processor.

        Args:
            store: Shared store; a new empty one is created if omitted
            persist_overrides: Write per-call global_variables into the store
                before expanding. When False they only apply to that call.
            strict_declarations: Raise DeclarationError on declaration lines
                without a colon instead of dropping them
        """
        self.store = store if store is not None else VariableStore()
        self.persist_overrides = persist_overrides
        self.substitutor = VariableSubstitutor(strict=strict_declarations)
        self.loader = VariableLoader()

    def set_variable(self, name: str, value: str) -> None:
        """Set a global variable."""
        self.store.set(name, value)

    def get_variable(self, name: str) -> Optional[str]:
        """Get a global variable, or None."""
        return self.store.get(name)

    def get_all_variables(self) -> Dict[str, str]:
        """Snapshot of all global variables."""
        return self.store.get_all()

    def import_yaml(self, yaml_content: str) -> int:
        """Merge variables from YAML into the store; atomic on error."""
        return self.loader.import_yaml(yaml_content, self.store)

    def export_yaml(self) -> str:
        """Export the store as YAML."""
        return self.loader.export_yaml(self.store)

    def parse_markdown(self, content: str) -> Tuple[List[Variable], str]:
        """Extract declarations; returns (declarations, remaining text)."""
        return self.substitutor.parser.parse(content)

    def process_markdown(
        self,
        content: str,
        global_variables: Optional[Mapping[str, str]] = None
    ) -> str:
        """
        Expand variables in Markdown content.

        Args:
            content: Markdown text
            global_variables: Extra global values for this call. With
                persist_overrides (the default) these are merged into the
                store permanently before expansion.

        Returns:
            Expanded text with declaration lines removed
        """
        overrides = None
        if global_variables:
            if self.persist_overrides:
                self.store.set_many(global_variables)
            else:
                overrides = global_variables

        return self.substitutor.expand(content, self.store, overrides=overrides)

    def get_expanded_markdown(
        self,
        content: str,
        global_variables: Optional[Mapping[str, str]] = None
    ) -> str:
        """Expanded Markdown for saving; same behaviour as process_markdown."""
        return self.process_markdown(content, global_variables)

    @property
    def unresolved_vars(self):
        """Placeholder names left unresolved by this thread's last expansion."""
        return self.substitutor.unresolved_vars
