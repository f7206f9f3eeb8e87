"""Schema nodes and the recursive resolution walk.

A schema is a tree built once at startup: ``ObjectNode`` maps declared field
names to child nodes, ``LeafNode`` declares the output type of a terminal
value. Handlers are supplied per query and mirror the tree: an object handler
is a mapping (or any object with attributes, or a callable returning either),
a leaf handler is a callable returning the value, or the value itself.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from gql_engine.config import EngineSettings, get_settings
from gql_engine.core.errors import (
    Error,
    FieldNotFoundError,
    GraphQLError,
    HandlerError,
    LeafValueError,
    MissingSelectionError,
    SelectionOnLeafError,
    make_name,
    single_error,
)
from gql_engine.core.ports.arguments import ArgumentCoercer, NoArguments
from gql_engine.core.values import SCALARS, ObjectBuilder, describe_type, to_output_value
from gql_engine.models import FieldRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolved:
    value: Any
    errors: list[Error] = field(default_factory=list)


@dataclass(frozen=True)
class ResolutionContext:
    coercer: ArgumentCoercer = field(default_factory=NoArguments)
    settings: EngineSettings = field(default_factory=get_settings)


async def invoke(handler: Any, arguments: Mapping[str, Any]) -> Any:
    """Run a handler, awaiting its result if needed. Non-callables are values."""
    if not callable(handler):
        return handler
    result = handler(**arguments)
    if inspect.isawaitable(result):
        result = await result
    return result


def _lookup(source: Any, name: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _signature(request: FieldRequest) -> tuple[Any, ...]:
    return (
        request.name,
        request.alias,
        [(arg.name, arg.value) for arg in request.arguments],
        [_signature(child) for child in request.selection_set],
    )


class SchemaNode(ABC):
    type_name: str

    @property
    def is_leaf(self) -> bool:
        return False

    @abstractmethod
    async def resolve(
        self,
        handler: Any,
        selection_set: Sequence[FieldRequest],
        context: ResolutionContext | None = None,
    ) -> Resolved: ...


class LeafNode(SchemaNode):
    def __init__(self, output_type: Any = Any, type_name: str | None = None) -> None:
        self.output_type = output_type
        self.type_name = type_name or describe_type(output_type)

    @property
    def is_leaf(self) -> bool:
        return True

    async def resolve(
        self,
        handler: Any,
        selection_set: Sequence[FieldRequest],
        context: ResolutionContext | None = None,
    ) -> Resolved:
        value = await invoke(handler, {})
        return Resolved(to_output_value(self.output_type, value))

    def __repr__(self) -> str:
        return f"LeafNode({self.type_name})"


class ObjectNode(SchemaNode):
    def __init__(self, fields: Mapping[str, SchemaNode], type_name: str = "Query") -> None:
        self.fields: Mapping[str, SchemaNode] = MappingProxyType(dict(fields))
        self.type_name = type_name

    async def resolve(
        self,
        handler: Any,
        selection_set: Sequence[FieldRequest],
        context: ResolutionContext | None = None,
    ) -> Resolved:
        context = context or ResolutionContext()
        source = await invoke(handler, {})
        if source is None:
            return Resolved(None)

        requested: list[FieldRequest] = []
        seen: list[tuple[Any, ...]] = []
        errors_before: dict[int, list[Error]] = {}
        for request in selection_set:
            signature = _signature(request)
            if signature in seen:
                continue
            seen.append(signature)
            if request.name not in self.fields:
                if context.settings.unknown_fields == "error":
                    errors_before.setdefault(len(requested), []).extend(
                        single_error(FieldNotFoundError(request, self.type_name))
                    )
                continue
            requested.append(request)

        coros = [self._resolve_field(request, source, context) for request in requested]
        if context.settings.concurrent_fields:
            results = await asyncio.gather(*coros)
        else:
            results = [await coro for coro in coros]

        builder = ObjectBuilder()
        errors: list[Error] = []
        for index, (request, result) in enumerate(zip(requested, results, strict=True)):
            errors.extend(errors_before.get(index, []))
            try:
                builder.add(request, result.value)
            except GraphQLError as exc:
                errors.append(exc.to_error())
                continue
            errors.extend(result.errors)
        errors.extend(errors_before.get(len(requested), []))
        return Resolved(builder.build(), errors)

    async def _resolve_field(self, request: FieldRequest, source: Any, context: ResolutionContext) -> Resolved:
        child = self.fields[request.name]
        if child.is_leaf and request.selection_set:
            return Resolved(None, single_error(SelectionOnLeafError(request)))
        if not child.is_leaf and not request.selection_set:
            return Resolved(None, single_error(MissingSelectionError(request)))

        try:
            arguments = context.coercer.coerce(request, self.type_name)
            produced = await invoke(_lookup(source, request.name), arguments)
        except GraphQLError as exc:
            return Resolved(None, [exc.to_error()])
        except Exception as exc:
            logger.exception("Handler for %s.%s failed", self.type_name, request.name)
            return Resolved(None, single_error(HandlerError(request, exc)))

        try:
            return await child.resolve(produced, request.selection_set, context)
        except (ValidationError, PydanticSerializationError):
            return Resolved(None, single_error(LeafValueError(request, child.type_name, produced)))
        except GraphQLError as exc:
            return Resolved(None, [exc.to_error()])
        except Exception as exc:
            logger.exception("Resolving %s.%s failed", self.type_name, request.name)
            return Resolved(None, single_error(HandlerError(request, exc)))

    def __repr__(self) -> str:
        return f"ObjectNode({self.type_name}, {list(self.fields)})"


def _strip_optional(tp: Any) -> Any:
    args = getattr(tp, "__args__", ())
    if len(args) == 2 and type(None) in args:
        return next(a for a in args if a is not type(None))
    return tp


def parse_type(reference: str) -> Any:
    """Turn a scalar type reference such as ``Int!`` or ``[String]`` into a Python type.

    Types are nullable unless marked with ``!``, as in GraphQL SDL.
    """
    text = reference.strip()
    if text.endswith("!"):
        return _strip_optional(parse_type(text[:-1]))
    if text.startswith("[") and text.endswith("]"):
        return list[parse_type(text[1:-1])] | None  # type: ignore[misc]
    if text not in SCALARS:
        raise ValueError(f"Unknown scalar type {text!r}. Supported: {sorted(SCALARS)}")
    scalar = SCALARS[text]
    return scalar if scalar is Any else scalar | None


def _object_type_name(field_name: str) -> str:
    return field_name[:1].upper() + field_name[1:]


def build_schema(description: Mapping[str, Any], type_name: str = "Query") -> ObjectNode:
    """Build an immutable node tree from a declarative description.

    Values may be ``SchemaNode`` instances, nested mappings (object types named
    after their field, or by a ``__typename`` entry), scalar references like
    ``"String!"``, or Python types.
    """
    fields: dict[str, SchemaNode] = {}
    for name, entry in description.items():
        if name == "__typename":
            continue
        make_name(name)
        if isinstance(entry, SchemaNode):
            fields[name] = entry
        elif isinstance(entry, Mapping):
            fields[name] = build_schema(entry, str(entry.get("__typename", _object_type_name(name))))
        elif isinstance(entry, str):
            fields[name] = LeafNode(parse_type(entry), entry.strip())
        else:
            fields[name] = LeafNode(entry)
    return ObjectNode(fields, type_name)


def load_schema(path: str | Path) -> ObjectNode:
    """Build a schema from a JSON file holding a declarative description."""
    schema_path = Path(path)
    try:
        description = json.loads(schema_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise FileNotFoundError(f"Schema file not found: {path}") from None
    if not isinstance(description, Mapping):
        raise ValueError(f"Schema file must contain a JSON object: {path}")
    return build_schema(description, str(description.get("__typename", "Query")))
