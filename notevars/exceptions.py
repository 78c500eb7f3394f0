"""Variable engine exceptions."""

from typing import List
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single parse/validation problem."""
    message: str
    path: str = ""
    exit_code: int = 2


class VariableParseError(Exception):
    """Raised when structured variable input is malformed.

    The codec raises this after collecting every problem in the document,
    before anything is merged into the store, allowing the CLI to catch it
    and map it to an exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Parse error at {error.path}: {error.message}")
            else:
                messages.append(f"Parse error: {error.message}")

        super().__init__("\n".join(messages))


@dataclass
class MalformedDeclaration:
    """A declaration-shaped line that has no name/value separator."""
    line_number: int
    text: str


class DeclarationError(Exception):
    """Raised in strict mode when declaration lines cannot be parsed."""

    def __init__(self, declarations: List[MalformedDeclaration]):
        self.declarations = declarations
        self.exit_code = 2

        messages = []
        for item in declarations:
            messages.append(
                f"Malformed variable declaration on line {item.line_number}: {item.text}"
            )

        super().__init__("\n".join(messages))
