"""
Storefront Backend: User Schemas
=================================

What:  Read view and partial-update shapes for users.

Security:
    UserResponse has no password field at all, so a password can never be
    serialized even by accident. Passwords only flow inbound through
    UserPatchRequest / UserPatch.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field

PATCHABLE_FIELDS = ("email", "password")


class UserResponse(BaseModel):
    """Subset view of a user: id, email, name."""

    id: str
    email: str
    name: str


class UserPatchRequest(BaseModel):
    """
    Body of PATCH /user/{id}.

    A field left out is not touched. A field sent as null IS supplied and is
    written as NULL (the store decides whether that is allowed). Sending
    neither field, or no body at all, is valid and changes nothing.
    """

    email: Optional[str] = Field(default=None, description="New email address")
    password: Optional[str] = Field(default=None, description="New password")


class UserPatch(UserPatchRequest):
    """Partial user update keyed by user id, as consumed by the gateway."""

    id: str = Field(description="User to update")

    @property
    def is_empty(self) -> bool:
        return not self.changes

    @property
    def changes(self) -> Dict[str, Optional[str]]:
        """Supplied fields only; an explicit None is kept, an omitted field is not."""
        return {name: getattr(self, name) for name in PATCHABLE_FIELDS if name in self.model_fields_set}
