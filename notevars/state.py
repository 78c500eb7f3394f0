"""Variable data model and the process-wide variable store.

The store holds global variables shared by every document. It is created once
by the application and handed to whoever needs it; reads always return copies
so callers can never mutate the shared mapping through a result.
"""

import json
import logging
import threading
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Dict, Any, Iterable, List, Mapping, Optional, Tuple, Union

from notevars.exceptions import ValidationError, VariableParseError


logger = logging.getLogger(__name__)


@dataclass
class Variable:
    """A single name/value binding."""
    name: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Variable":
        """Create Variable from dict."""
        return cls(name=data["name"], value=data["value"])


@dataclass
class VariableSet:
    """Ordered list of variables, the serialization shape of the store."""
    variables: List[Variable] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for YAML/JSON serialization."""
        return {"variables": [v.to_dict() for v in self.variables]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VariableSet":
        """Create VariableSet from dict."""
        return cls(variables=[Variable.from_dict(item) for item in data["variables"]])

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "VariableSet":
        """Create VariableSet from a name -> value mapping."""
        return cls(variables=[Variable(name, value) for name, value in mapping.items()])

    def to_mapping(self) -> Dict[str, str]:
        """Collapse to a mapping; later duplicates overwrite earlier ones."""
        result: Dict[str, str] = {}
        for v in self.variables:
            result[v.name] = v.value
        return result


Pairs = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


class VariableStore:
    """Thread-safe name -> value mapping for global variables.

    Every operation takes the lock for the duration of a single read or
    mutation and releases it through a ``with`` block, so an exception raised
    inside a critical section never leaves the store locked.
    """

    def __init__(self, variables: Optional[Mapping[str, str]] = None):
        """Initialize the store.

        Args:
            variables: Optional initial contents (copied)
        """
        self._lock = threading.Lock()
        self._variables: Dict[str, str] = dict(variables or {})

    def set(self, name: str, value: str) -> None:
        """Insert or overwrite a variable."""
        with self._lock:
            self._variables[name] = value

    def set_many(self, pairs: Pairs) -> int:
        """Insert or overwrite several variables in one critical section.

        Args:
            pairs: Mapping or iterable of (name, value); later pairs win

        Returns:
            Number of pairs applied
        """
        if isinstance(pairs, Mapping):
            items = list(pairs.items())
        else:
            items = list(pairs)

        with self._lock:
            for name, value in items:
                self._variables[name] = value

        return len(items)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a variable value, or default if it is not set."""
        with self._lock:
            return self._variables.get(name, default)

    def get_all(self) -> Dict[str, str]:
        """Return an independent snapshot of every variable."""
        with self._lock:
            return dict(self._variables)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._variables

    def __len__(self) -> int:
        with self._lock:
            return len(self._variables)

    def __repr__(self) -> str:
        return f"VariableStore({self.get_all()!r})"

    def save(self, path: Path) -> None:
        """Persist a snapshot as JSON atomically (temp file + rename).

        Args:
            path: Destination file
        """
        path = Path(path)
        snapshot = VariableSet.from_mapping(self.get_all())

        path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = path.with_suffix(path.suffix + '.tmp')
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(snapshot.to_dict(), f, indent=2, ensure_ascii=False)

        temp_file.replace(path)
        logger.debug(f"Saved {len(snapshot.variables)} variables to {path}")

    @classmethod
    def load(cls, path: Path) -> "VariableStore":
        """Build a store from a file written by ``save``.

        Raises:
            FileNotFoundError: If the file doesn't exist
            VariableParseError: If the file is not a valid snapshot
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Variable store file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            var_set = VariableSet.from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise VariableParseError([ValidationError(
                f"Invalid variable store file: {e}", path=str(path)
            )]) from e

        for v in var_set.variables:
            if not isinstance(v.name, str) or not isinstance(v.value, str):
                raise VariableParseError([ValidationError(
                    f"Variable names and values must be strings, got {v.name!r}: {v.value!r}",
                    path=str(path)
                )])

        store = cls()
        store.set_many((v.name, v.value) for v in var_set.variables)
        logger.debug(f"Loaded {len(store)} variables from {path}")
        return store
