"""
UserCRUD - Record Schemas
==========================

What:  Pydantic models for the stored Record and for the three request
       shapes the mutating routes accept.
How:   Route handlers parse the request body into a plain dict and validate
       it against one of these models exactly once. A failed validation is
       converted into a ValidationError listing the missing fields.

Request contracts:
    RecordFields   name, email, phone          (POST /create-a-db-record)
    RecordUpdate   id, name, email, phone      (POST /update-a-db-record)
    RecordDelete   name                        (POST /delete-a-db-record)

"Present" means a non-empty string. Numbers sent in a JSON body are accepted
and stored as their string form.
"""

from typing import Any, Dict, Type, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from usercrud.exceptions import ValidationError

RECORD_FIELDS = ("name", "email", "phone")

_RequestModel = TypeVar("_RequestModel", bound=BaseModel)


class Record(BaseModel):
    """
    A user document as displayed by the views.

    `id` is the string form of the document's ObjectId. Documents are
    schemaless, so any field the document lacks is shown as an empty string
    and any other stored value (list, bool, date...) is shown in its str() form.
    """

    id: str = Field(description="String form of the MongoDB _id")
    name: str = Field(default="")
    email: str = Field(default="")
    phone: str = Field(default="")

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Record":
        """Builds a Record from a raw MongoDB document."""
        return cls(
            id=str(document.get("_id", "")),
            **{
                field: str(document[field])
                for field in RECORD_FIELDS
                if document.get(field) is not None
            },
        )


class RecordFields(BaseModel):
    """The user-editable fields of a record, all required."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    def to_document(self) -> Dict[str, str]:
        """The fields written to MongoDB; never includes an identifier."""
        return self.model_dump(include=set(RECORD_FIELDS))


class RecordUpdate(RecordFields):
    """An update submission: the target id plus the full set of new values."""

    id: str = Field(min_length=1)


class RecordDelete(BaseModel):
    """A delete submission, keyed on the record's name."""

    name: str = Field(min_length=1)

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")


def parse_request(model: Type[_RequestModel], data: Dict[str, Any]) -> _RequestModel:
    """
    Validate a request body against one of the request contracts.

    Args:
        model: RecordFields, RecordUpdate or RecordDelete
        data:  The decoded form or JSON body

    Returns:
        The validated model instance.

    Raises:
        ValidationError: One or more required fields are absent or empty.
            The message names the offending fields in declaration order.
    """
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        bad_fields = []
        for error in exc.errors():
            location = error.get("loc") or ("body",)
            field = str(location[0])
            if field not in bad_fields:
                bad_fields.append(field)
        ordered = [f for f in model.model_fields if f in bad_fields]
        ordered += [f for f in bad_fields if f not in ordered]
        raise ValidationError(
            message=f"Missing required fields: {', '.join(ordered)}.",
            fields=ordered,
            context={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc
