import re
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

_NAME_PATTERN = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")


def is_valid_name(text: str) -> bool:
    return _NAME_PATTERN.fullmatch(text) is not None


def _check_name(text: str) -> str:
    if not is_valid_name(text):
        raise ValueError(f"Not a valid GraphQL name: {text!r}")
    return text


Name = Annotated[str, AfterValidator(_check_name)]


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    column: int = Field(ge=1)


class Argument(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Name
    value: Any = None


class FieldRequest(BaseModel):
    """A single requested field, as produced by an upstream parser."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Name
    alias: Name | None = None
    arguments: tuple[Argument, ...] = ()
    selection_set: tuple["FieldRequest", ...] = Field(default=(), alias="selectionSet")
    location: Location | None = None

    @property
    def response_key(self) -> str:
        return self.alias if self.alias is not None else self.name


FieldRequest.model_rebuild()  # necessary for recursive types

SelectionSet = tuple[FieldRequest, ...]
