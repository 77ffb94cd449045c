from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

# Columns every create/update must supply, in insert order.
REQUIRED_FIELDS = ("firstname", "lastname", "email", "city", "language")


class UserFields(BaseModel):
    """Writable user attributes; all five are required non-empty strings."""

    model_config = ConfigDict(extra="ignore")

    firstname: StrictStr = Field(min_length=1)
    lastname: StrictStr = Field(min_length=1)
    email: StrictStr = Field(min_length=1)
    city: StrictStr = Field(min_length=1)
    language: StrictStr = Field(min_length=1)

    def as_params(self) -> List[str]:
        return [getattr(self, name) for name in REQUIRED_FIELDS]


class UserPublic(BaseModel):
    id: int
    firstname: str
    lastname: str
    email: str
    city: str
    language: str


class UserCreated(BaseModel):
    id: int


def invalid_fields(exc: ValidationError) -> List[str]:
    """
    Names of the required fields rejected by a UserFields validation,
    in declaration order. A non-object body yields every field.
    """
    names = set()
    for error in exc.errors():
        loc = error.get("loc") or ()
        if loc and loc[0] in REQUIRED_FIELDS:
            names.add(loc[0])
        else:
            return list(REQUIRED_FIELDS)
    return [name for name in REQUIRED_FIELDS if name in names]


def parse_user_fields(payload: Optional[Any]) -> UserFields:
    """Validate a raw JSON body; raises ValidationError on any bad field."""
    return UserFields.model_validate(payload if payload is not None else {})
