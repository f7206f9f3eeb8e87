from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from gql_engine.config import EngineSettings, get_settings
from gql_engine.core.errors import GraphQLError, HandlerError, single_error
from gql_engine.core.ports.arguments import ArgumentCoercer, NoArguments
from gql_engine.core.response import ExecutionFailure, PartialSuccess, Response, Success
from gql_engine.core.schema import ObjectNode, ResolutionContext
from gql_engine.models import FieldRequest

logger = logging.getLogger(__name__)

_ROOT_FIELD = FieldRequest(name="query")


async def run(
    schema: ObjectNode,
    handlers: Any,
    selection_set: Sequence[FieldRequest],
    *,
    coercer: ArgumentCoercer | None = None,
    settings: EngineSettings | None = None,
    extensions: dict[str, Any] | None = None,
) -> Response:
    """Resolve ``selection_set`` against the root object and wrap the outcome."""
    context = ResolutionContext(
        coercer=coercer or NoArguments(),
        settings=settings or get_settings(),
    )
    logger.debug("Executing %d root field(s) on %s", len(selection_set), schema.type_name)

    try:
        resolved = await schema.resolve(handlers, selection_set, context)
    except GraphQLError as exc:
        return ExecutionFailure(errors=single_error(exc), extensions=extensions)
    except Exception as exc:
        logger.exception("Root handler for %s failed", schema.type_name)
        return ExecutionFailure(errors=single_error(HandlerError(_ROOT_FIELD, exc)), extensions=extensions)

    if resolved.value is None:
        return ExecutionFailure(
            errors=resolved.errors or single_error(HandlerError(_ROOT_FIELD, ValueError("root handler returned null"))),
            extensions=extensions,
        )
    if resolved.errors:
        logger.debug("Query finished with %d error(s)", len(resolved.errors))
        return PartialSuccess(data=resolved.value, errors=resolved.errors, extensions=extensions)
    return Success(data=resolved.value, extensions=extensions)


def run_sync(
    schema: ObjectNode,
    handlers: Any,
    selection_set: Sequence[FieldRequest],
    **kwargs: Any,
) -> Response:
    return asyncio.run(run(schema, handlers, selection_set, **kwargs))
