"""Edit operation value type."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from patchrunner.core.exceptions import EditValidationError


@dataclass(frozen=True)
class EditOperation:
    """One literal find/replace request.

    Built once from tool-call arguments and never mutated, so the values the
    validator checked are exactly the values the engine applies. ``new_string``
    is None only when the caller omitted it; validation rejects that.
    """

    old_string: str
    new_string: str | None
    replace_all: bool = False

    @classmethod
    def from_arguments(cls, raw: Any, index: int = 0) -> "EditOperation":
        """Build an operation from a tool-call argument mapping.

        Args:
            raw: Mapping with ``old_string``, ``new_string`` and optional ``replace_all``
            index: Position of the operation in its list, for error messages

        Raises:
            EditValidationError: If ``raw`` is not a mapping or a field has the wrong type
        """
        if not isinstance(raw, Mapping):
            raise EditValidationError(
                f"Edit {index + 1}: expected an object, got {type(raw).__name__}",
                index=index,
                reason="not_an_object",
            )

        old_string = raw.get("old_string")
        new_string = raw.get("new_string")
        replace_all = raw.get("replace_all", False)

        if old_string is None:
            old_string = ""
        if not isinstance(old_string, str):
            raise EditValidationError(
                f"Edit {index + 1}: old_string must be a string",
                index=index,
                reason="old_string_type",
            )
        if new_string is not None and not isinstance(new_string, str):
            raise EditValidationError(
                f"Edit {index + 1}: new_string must be a string",
                index=index,
                reason="new_string_type",
            )
        if replace_all is None:
            replace_all = False
        if not isinstance(replace_all, bool):
            raise EditValidationError(
                f"Edit {index + 1}: replace_all must be a boolean",
                index=index,
                reason="replace_all_type",
            )

        return cls(old_string=old_string, new_string=new_string, replace_all=replace_all)

    def to_dict(self) -> dict[str, Any]:
        return {
            "old_string": self.old_string,
            "new_string": self.new_string,
            "replace_all": self.replace_all,
        }


def operations_from_arguments(raw_edits: Any) -> list[EditOperation]:
    """Build the operation list for a multi-edit call.

    Raises:
        EditValidationError: If ``raw_edits`` is not a list or an entry is malformed
    """
    if not isinstance(raw_edits, list):
        raise EditValidationError("edits must be a non-empty list", reason="not_a_list")
    return [EditOperation.from_arguments(raw, i) for i, raw in enumerate(raw_edits)]
