from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any

from pydantic import BeforeValidator, FiniteFloat, TypeAdapter

from gql_engine.core.errors import DuplicateKeyError
from gql_engine.models import FieldRequest


def _int_id_to_str(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


GraphQLID = Annotated[str, BeforeValidator(_int_id_to_str)]

SCALARS: dict[str, Any] = {
    "Int": int,
    "Float": FiniteFloat,
    "String": str,
    "Boolean": bool,
    "ID": GraphQLID,
    "JSON": Any,
}


def describe_type(tp: Any) -> str:
    for name, scalar in SCALARS.items():
        if scalar is tp:
            return name
    if tp is float:
        return "Float"
    return getattr(tp, "__name__", repr(tp))


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter[Any]:
    return TypeAdapter(tp)


def to_output_value(tp: Any, value: Any) -> Any:
    """Validate ``value`` as ``tp`` and return its JSON-compatible form.

    Raises ``pydantic.ValidationError`` if the value does not fit the type.
    """
    adapter = _adapter(tp)
    return adapter.dump_python(adapter.validate_python(value), mode="json")


class ObjectBuilder:
    """Assembles an output object one response key at a time.

    Keys keep insertion order. Binding a key twice raises ``DuplicateKeyError``
    and leaves the first binding in place.
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}

    def add(self, field: FieldRequest, value: Any) -> None:
        key = field.response_key
        if key in self._fields:
            raise DuplicateKeyError(field)
        self._fields[key] = value

    def build(self) -> dict[str, Any]:
        return dict(self._fields)
