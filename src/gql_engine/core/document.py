"""Decoding of canonical query documents.

A document is the JSON form of a selection set, as handed over by an upstream
parser: either a list of field objects or an object with a ``selectionSet``
list. Failures here happen before any resolution starts and are reported as a
``PreExecutionFailure``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from gql_engine.config import EngineSettings
from gql_engine.core.errors import DocumentError, Error
from gql_engine.core.executor import run
from gql_engine.core.ports.arguments import ArgumentCoercer
from gql_engine.core.response import PreExecutionFailure, Response
from gql_engine.core.schema import ObjectNode
from gql_engine.models import FieldRequest, SelectionSet

_SELECTION_SET = TypeAdapter(SelectionSet)


class InvalidDocumentError(ValueError):
    """Raised when a document cannot be decoded; carries one error per problem."""

    def __init__(self, errors: list[DocumentError]) -> None:
        super().__init__("; ".join(e.format_error() for e in errors))
        self.errors = errors

    def to_errors(self) -> list[Error]:
        return [e.to_error() for e in self.errors]


def _format_loc(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) or "document"


def load_selection_set(raw: str | bytes | Any) -> tuple[FieldRequest, ...]:
    if isinstance(raw, str | bytes):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidDocumentError([DocumentError(f"Document is not valid JSON: {exc.msg}")]) from exc
        except UnicodeDecodeError as exc:
            raise InvalidDocumentError([DocumentError(f"Document is not valid UTF-8: {exc.reason}")]) from exc

    if isinstance(raw, Mapping):
        if "selectionSet" not in raw:
            raise InvalidDocumentError([DocumentError("Document object must have a 'selectionSet' key.")])
        raw = raw["selectionSet"]

    try:
        return _SELECTION_SET.validate_python(raw)
    except ValidationError as exc:
        raise InvalidDocumentError(
            [DocumentError(f"{_format_loc(err['loc'])}: {err['msg']}") for err in exc.errors()]
        ) from exc


async def execute_document(
    schema: ObjectNode,
    handlers: Any,
    document: str | bytes | Any,
    *,
    coercer: ArgumentCoercer | None = None,
    settings: EngineSettings | None = None,
    extensions: dict[str, Any] | None = None,
) -> Response:
    try:
        selection_set = load_selection_set(document)
    except InvalidDocumentError as exc:
        return PreExecutionFailure(errors=exc.to_errors(), extensions=extensions)
    return await run(schema, handlers, selection_set, coercer=coercer, settings=settings, extensions=extensions)
