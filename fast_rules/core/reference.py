from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from fast_rules.exceptions import BadSchemaError
from fast_rules.utils.path_resolver import get_value_from_path, split_path


class Reference(BaseModel):
    """
    Deferred lookup into the data being validated.

    A reference only carries its path; it is resolved against the root data of
    each `Schema.validate` call, so the same chain can be reused for any payload:

        SR.number().min(SR.ref("limits.min"))
        SR.string().equal(SR.ref("items.0.name"))
    """

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...]

    @classmethod
    def from_string(cls, path: str) -> "Reference":
        try:
            return cls(path=split_path(path))
        except ValueError as exc:
            raise BadSchemaError(f"Invalid ref path: {exc}") from exc

    def resolve(self, root: Any) -> Any:
        return get_value_from_path(root, self.path)

    def __str__(self) -> str:
        return ".".join(self.path)


def ref(path: str) -> Reference:
    if not isinstance(path, str):
        raise BadSchemaError("Ref path must be a string.")
    return Reference.from_string(path)
