"""Message Schemas — request bodies and response envelopes for /api/messages.

Invariants:
    - No response schema has a submitterToken field
    - MessageCreated.token is the only place a capability token leaves the server

Design Decisions:
    - Request fields are optional strings: emptiness and length are checked by
      core/message_rules so the reasons match whether or not HTTP is involved
    - populate_by_name: Python attribute names, on-wire names kept as aliases
"""

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    name: str | None = None
    message: str | None = None


class MessageUpdate(BaseModel):
    message: str | None = None


class MessagePublic(BaseModel):
    """Listed message — public data only."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    message: str
    date: str
    timestamp: int
    edited: bool = False
    edited_at: str | None = Field(None, alias="editedAt")


class MessageCreated(MessagePublic):
    """Creation response — carries the submitter token exactly once."""
    token: str


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_messages: int = Field(alias="totalMessages")
    has_next: bool = Field(alias="hasNext")
    has_prev: bool = Field(alias="hasPrev")


class MessageList(BaseModel):
    messages: list[MessagePublic]
    pagination: Pagination


class MessageUpdated(BaseModel):
    success: bool = True
    message: MessagePublic


class MessageDeleted(BaseModel):
    success: bool = True
    message: str = "Message deleted successfully"
