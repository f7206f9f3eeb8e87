"""Errors that arise while processing a GraphQL query.

Every failure the engine can report is a ``GraphQLError``. Raising one is how
resolution code signals a problem; ``to_error()`` turns it into the ``Error``
value that ends up in the response's ``"errors"`` list.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from gql_engine.models import FieldRequest, Location, is_valid_name

DEFAULT_STATUS_CODE = 500


class Error(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    locations: tuple[Location, ...] = ()
    status_code: int = DEFAULT_STATUS_CODE


class GraphQLError(Exception):
    """Base class for errors raised while processing a query.

    Subclasses implement ``format_error``: human-readable text aimed first at
    developers of GraphQL clients, then at developers of GraphQL servers.
    ``to_error`` calls it and supplies no locations and status 500; override it
    to provide either.
    """

    def format_error(self) -> str:
        raise NotImplementedError

    def to_error(self) -> Error:
        return Error(message=self.format_error())

    def __str__(self) -> str:
        return self.format_error()


def single_error(error: GraphQLError) -> list[Error]:
    """Make a list of errors containing a single error."""
    return [error.to_error()]


class InvalidNameError(GraphQLError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def format_error(self) -> str:
        return f"Not a valid GraphQL name: {self.name!r}"

    def to_error(self) -> Error:
        return Error(message=self.format_error(), status_code=400)


def make_name(text: str) -> str:
    """Return ``text`` if it is a valid GraphQL name, else raise ``InvalidNameError``."""
    if not is_valid_name(text):
        raise InvalidNameError(text)
    return text


class FieldError(GraphQLError):
    """An error tied to one requested field; reports that field's location."""

    status_code = 400

    def __init__(self, field: FieldRequest) -> None:
        super().__init__(field.name)
        self.field = field

    def to_error(self) -> Error:
        locations = (self.field.location,) if self.field.location is not None else ()
        return Error(message=self.format_error(), locations=locations, status_code=self.status_code)


class FieldNotFoundError(FieldError):
    def __init__(self, field: FieldRequest, type_name: str) -> None:
        super().__init__(field)
        self.type_name = type_name

    def format_error(self) -> str:
        return f"Cannot query field {self.field.name!r} on type {self.type_name!r}."


class DuplicateKeyError(FieldError):
    def format_error(self) -> str:
        return (
            f"Duplicate response key {self.field.response_key!r}: "
            "fields sharing a response key must request the same field."
        )


class UnexpectedArgumentsError(FieldError):
    def format_error(self) -> str:
        names = ", ".join(arg.name for arg in self.field.arguments)
        return f"Field {self.field.name!r} does not accept arguments: {names}"


class SelectionOnLeafError(FieldError):
    def format_error(self) -> str:
        return f"Field {self.field.name!r} is a leaf and has no subfields."


class MissingSelectionError(FieldError):
    def format_error(self) -> str:
        return f"Field {self.field.name!r} of object type must have a selection of subfields."


class HandlerError(FieldError):
    status_code = 500

    def __init__(self, field: FieldRequest, cause: BaseException) -> None:
        super().__init__(field)
        self.cause = cause

    def format_error(self) -> str:
        return f"Handler for field {self.field.name!r} failed: {self.cause}"


class LeafValueError(FieldError):
    status_code = 500

    def __init__(self, field: FieldRequest, type_name: str, value: Any) -> None:
        super().__init__(field)
        self.type_name = type_name
        self.value = value

    def format_error(self) -> str:
        return f"Field {self.field.name!r} returned a value that is not a valid {self.type_name}: {self.value!r}"


class DocumentError(GraphQLError):
    """The query document could not be decoded into a selection set."""

    def __init__(self, message: str, locations: Sequence[Location] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.locations = tuple(locations)

    def format_error(self) -> str:
        return self.message

    def to_error(self) -> Error:
        return Error(message=self.message, locations=self.locations, status_code=400)
