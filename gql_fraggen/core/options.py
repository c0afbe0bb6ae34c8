"""Fragment generation options."""

import re

from pydantic import BaseModel, ConfigDict, field_validator

_NAME_START = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")
_NAME_CONTINUE = re.compile(r"^[_0-9A-Za-z]*$")


class FragmentOptions(BaseModel):
    """Configuration for a fragment generation run.

    Attributes:
        prefix: Prepended to every fragment name
        suffix: Appended to every fragment name
        mark_concrete_types: Select ``__typename`` in object type fragments
        quiet: Suppress non-fatal schema diagnostics
        include_input_objects: Emit fragments for input object types
    """
    model_config = ConfigDict(frozen=True)

    prefix: str = ""
    suffix: str = "Fields"
    mark_concrete_types: bool = False
    quiet: bool = False
    include_input_objects: bool = True

    @field_validator("prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if value and not _NAME_START.match(value):
            raise ValueError(f"prefix {value!r} is not a valid GraphQL name")
        return value

    @field_validator("suffix")
    @classmethod
    def _check_suffix(cls, value: str) -> str:
        if not _NAME_CONTINUE.match(value):
            raise ValueError(f"suffix {value!r} may only contain letters, digits and '_'")
        return value

    def fragment_name(self, type_name: str) -> str:
        """Return the fragment name for a type."""
        return f"{self.prefix}{type_name}{self.suffix}"
