"""
Variable declaration parsing and substitution.
"""

from .declarations import DeclarationParser, parse_declarations
from .substitution import VariableSubstitutor

__all__ = ['DeclarationParser', 'VariableSubstitutor', 'parse_declarations']
