from gql_engine.core.document import InvalidDocumentError, execute_document, load_selection_set
from gql_engine.core.errors import (
    Error,
    GraphQLError,
    InvalidNameError,
    make_name,
    single_error,
)
from gql_engine.core.executor import run, run_sync
from gql_engine.core.response import (
    ExecutionFailure,
    PartialSuccess,
    PreExecutionFailure,
    Response,
    Success,
    encode,
    encode_error,
    to_json,
)
from gql_engine.core.schema import LeafNode, ObjectNode, Resolved, SchemaNode, build_schema

__all__ = [
    "Error",
    "ExecutionFailure",
    "GraphQLError",
    "InvalidDocumentError",
    "InvalidNameError",
    "LeafNode",
    "ObjectNode",
    "PartialSuccess",
    "PreExecutionFailure",
    "Resolved",
    "Response",
    "SchemaNode",
    "Success",
    "build_schema",
    "encode",
    "encode_error",
    "execute_document",
    "load_selection_set",
    "make_name",
    "run",
    "run_sync",
    "single_error",
    "to_json",
]
