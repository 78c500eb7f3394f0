"""CLI command handlers."""

from .expand import expand_document
from .export import export_variables
from .parse import show_declarations

__all__ = ['expand_document', 'export_variables', 'show_declarations']
