from typing import Any, Protocol

from gql_engine.core.errors import UnexpectedArgumentsError
from gql_engine.models import FieldRequest


class ArgumentCoercer(Protocol):
    def coerce(self, field: FieldRequest, type_name: str) -> dict[str, Any]: ...


class NoArguments:
    """Accepts only fields requested without arguments."""

    def coerce(self, field: FieldRequest, type_name: str) -> dict[str, Any]:
        if field.arguments:
            raise UnexpectedArgumentsError(field)
        return {}


class PassThroughArguments:
    """Hands argument values to the handler unchanged, keyed by argument name."""

    def coerce(self, field: FieldRequest, type_name: str) -> dict[str, Any]:
        return {arg.name: arg.value for arg in field.arguments}
