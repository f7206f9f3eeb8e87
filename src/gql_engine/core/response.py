"""GraphQL response envelope and its canonical encoding.

A GraphQL response must:

* be a map
* have a "data" key iff the operation executed
* have an "errors" key iff the operation encountered errors
* not include "data" if the operation failed before execution (syntax errors,
  validation errors, missing info)
* not have keys other than "data", "errors" and "extensions"

"data" is null if an error encountered during execution prevented a valid
response. "errors" is a non-empty list of maps with a "message", optional
"locations" (1-indexed "line"/"column" maps) and a "statusCode".
"""

from __future__ import annotations

import json
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from gql_engine.core.errors import Error
from gql_engine.models import Location

Errors = Annotated[list[Error], Field(min_length=1)]


class _Envelope(BaseModel):
    model_config = ConfigDict(frozen=True)

    extensions: dict[str, Any] | None = None


class Success(_Envelope):
    data: dict[str, Any]


class PreExecutionFailure(_Envelope):
    errors: Errors


class ExecutionFailure(_Envelope):
    errors: Errors


class PartialSuccess(_Envelope):
    data: dict[str, Any]
    errors: Errors


Response = Success | PreExecutionFailure | ExecutionFailure | PartialSuccess


def encode_location(location: Location) -> dict[str, int]:
    return {"line": location.line, "column": location.column}


def encode_error(error: Error) -> dict[str, Any]:
    encoded: dict[str, Any] = {"message": error.message}
    if error.locations:
        encoded["locations"] = [encode_location(loc) for loc in error.locations]
    encoded["statusCode"] = error.status_code
    return encoded


def encode_errors(errors: list[Error]) -> list[dict[str, Any]]:
    return [encode_error(e) for e in errors]


def encode(response: Response) -> dict[str, Any]:
    """Encode a response into its canonical map."""
    encoded: dict[str, Any]
    if isinstance(response, Success):
        encoded = {"data": response.data}
    elif isinstance(response, PreExecutionFailure):
        encoded = {"errors": encode_errors(response.errors)}
    elif isinstance(response, ExecutionFailure):
        encoded = {"data": None, "errors": encode_errors(response.errors)}
    elif isinstance(response, PartialSuccess):
        encoded = {"data": response.data, "errors": encode_errors(response.errors)}
    else:
        raise TypeError(f"Not a response: {response!r}")

    if response.extensions is not None:
        encoded["extensions"] = response.extensions
    return encoded


def to_json(response: Response, indent: int | None = None) -> str:
    return json.dumps(encode(response), indent=indent, allow_nan=False)
