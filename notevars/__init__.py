"""Variable substitution engine for Markdown notes."""

from notevars.exceptions import DeclarationError, ValidationError, VariableParseError
from notevars.loader import VariableLoader
from notevars.processor import VariableProcessor
from notevars.state import Variable, VariableSet, VariableStore
from notevars.variables import DeclarationParser, VariableSubstitutor, parse_declarations

__all__ = [
    'DeclarationError',
    'DeclarationParser',
    'ValidationError',
    'Variable',
    'VariableLoader',
    'VariableParseError',
    'VariableProcessor',
    'VariableSet',
    'VariableStore',
    'VariableSubstitutor',
    'parse_declarations',
]

__version__ = "0.1.0"
