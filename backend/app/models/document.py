"""
The single persisted document holding every account and photo collection.
"""
from pydantic import BaseModel, Field, model_validator

from app.models.photo import Photo
from app.models.user import Account


class Document(BaseModel):
    """
    Root of the data file::

        {"users": {<email>: Account}, "photos": {<email>: [Photo, ...]}}

    Dict order is insertion order and is preserved through load/save.
    """
    users: dict[str, Account] = Field(default_factory=dict)
    photos: dict[str, list[Photo]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _attach_account_keys(self) -> "Document":
        for email, account in self.users.items():
            account.email = email
        return self

    def to_json(self) -> str:
        """Serialize using the camelCase keys of the data file."""
        return self.model_dump_json(by_alias=True, indent=2)

    def copy_for_write(self) -> "Document":
        """Deep copy used as the working copy of a transaction."""
        return self.model_copy(deep=True)
