"""YAML import/export of global variables.

Document shape:

    variables:
      - name: project
        value: notevars
      - name: version
        value: "1.0"
"""

import logging
from pathlib import Path
from typing import Any, List
import yaml

from notevars.exceptions import ValidationError, VariableParseError
from notevars.state import Variable, VariableSet, VariableStore


logger = logging.getLogger(__name__)


class StringScalarLoader(yaml.SafeLoader):
    """YAML loader that keeps plain scalars like 30, yes, on or 2024-01-01 as strings."""

    def construct_mapping(self, node, deep=False):
        """Reject mappings that repeat a key instead of keeping the last one."""
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == 'tag:yaml.org,2002:merge':
                    continue
                key = self.construct_object(key_node, deep=True)
                try:
                    duplicate = key in seen
                except TypeError:
                    # Unhashable keys are reported by the base constructor
                    continue
                if duplicate:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        f"found duplicate key {key!r}", key_node.start_mark
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


# Drop the implicit resolvers that turn plain scalars into bool/int/float/timestamp.
# The null resolver stays so that an empty or '~' value is reported as missing.
_NON_STRING_TAGS = {
    'tag:yaml.org,2002:bool',
    'tag:yaml.org,2002:int',
    'tag:yaml.org,2002:float',
    'tag:yaml.org,2002:timestamp',
}
StringScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NON_STRING_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class VariableLoader:
    """Loads and validates variable YAML; exports the store back to YAML."""

    def __init__(self):
        """Initialize loader."""
        self.errors: List[ValidationError] = []

    def parse(self, text: str) -> VariableSet:
        """Parse and validate variable YAML.

        Args:
            text: YAML document

        Returns:
            Parsed VariableSet, entries in document order

        Raises:
            VariableParseError: If the document is malformed
        """
        self.errors = []

        try:
            document = yaml.load(text, Loader=StringScalarLoader)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to parse YAML: {e}")
            self._raise_parse_errors()

        if document is None:
            self._add_error("Variables document is empty")
            self._raise_parse_errors()

        if not isinstance(document, dict):
            self._add_error(f"Variables document must be a YAML mapping, got {type(document).__name__}")
            self._raise_parse_errors()

        if 'variables' not in document:
            self._add_error("'variables' field is required")
            self._raise_parse_errors()

        entries = document['variables']
        if not isinstance(entries, list):
            self._add_error(f"'variables' must be a list, got {type(entries).__name__}", "variables")
            self._raise_parse_errors()

        variables = []
        for i, entry in enumerate(entries):
            variable = self._validate_entry(entry, f"variables[{i}]")
            if variable is not None:
                variables.append(variable)

        if self.errors:
            self._raise_parse_errors()

        return VariableSet(variables=variables)

    def _validate_entry(self, entry: Any, path: str):
        """Validate one {name, value} entry; returns None if it has errors."""
        if not isinstance(entry, dict):
            self._add_error(f"Entry must be a mapping with 'name' and 'value', got {type(entry).__name__}", path)
            return None

        valid = True
        for key in ('name', 'value'):
            if entry.get(key) is None:
                self._add_error(f"'{key}' field is required", path)
                valid = False
            elif not isinstance(entry[key], str):
                self._add_error(f"'{key}' must be a string, got {type(entry[key]).__name__}", path)
                valid = False

        if not valid:
            return None
        return Variable(name=entry['name'], value=entry['value'])

    def import_yaml(self, text: str, store: VariableStore) -> int:
        """Merge variables from YAML into the store.

        The whole document is validated before the store is touched, so a
        malformed document leaves the store unchanged.

        Args:
            text: YAML document
            store: Store to merge into

        Returns:
            Number of entries applied

        Raises:
            VariableParseError: If the document is malformed
        """
        var_set = self.parse(text)
        count = store.set_many((v.name, v.value) for v in var_set.variables)
        logger.debug(f"Imported {count} variables")
        return count

    def export_yaml(self, store: VariableStore) -> str:
        """Serialize a snapshot of the store to YAML. Entry order is unspecified."""
        var_set = VariableSet.from_mapping(store.get_all())
        return yaml.safe_dump(
            var_set.to_dict(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False
        )

    def import_file(self, path: Path, store: VariableStore) -> int:
        """Merge variables from a YAML file into the store."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Variables file not found: {path}")

        logger.debug(f"Loading variables from {path}")
        return self.import_yaml(path.read_text(encoding='utf-8'), store)

    def export_file(self, path: Path, store: VariableStore) -> None:
        """Write the YAML export of the store to a file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.export_yaml(store), encoding='utf-8')
        logger.debug(f"Exported variables to {path}")

    def _add_error(self, message: str, path: str = ""):
        """Add a parse error."""
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_parse_errors(self):
        """Raise VariableParseError with accumulated errors."""
        raise VariableParseError(self.errors)
