"""Shared model configuration

JSON bodies use camelCase; documents in the store use snake_case.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Required string that must not be blank
RequiredStr = Annotated[str, Field(min_length=1)]


class RequestModel(BaseModel):
    """Incoming payloads: unknown fields are rejected"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )


class ResponseModel(BaseModel):
    """Outgoing payloads built from stored documents; extra document keys are dropped"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Acknowledgement(ResponseModel):
    ok: bool = True
    message: str
    id: Optional[str] = None
