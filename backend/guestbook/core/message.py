"""Message — the guestbook entry and its storage/public projections.

Invariants:
    - to_public() never contains submitterToken
    - to_record() / from_record() use the on-disk key names
      (id, name, message, date, timestamp, submitterToken, edited, editedAt)
    - created_at is epoch milliseconds

Design Decisions:
    - Dataclass over ORM model: the whole collection is one JSON document
    - Records without submitterToken (written before ownership existed) load
      with submitter_token=None, so only the admin can change them
"""

from dataclasses import dataclass


@dataclass
class Message:
    """One guestbook entry."""

    id: int
    name: str
    body: str
    created_at: int
    display_date: str
    submitter_token: str | None = None
    edited: bool = False
    edited_at: str | None = None

    @classmethod
    def from_record(cls, record: dict) -> "Message":
        return cls(
            id=int(record["id"]),
            name=record["name"],
            body=record["message"],
            created_at=int(record.get("timestamp", record["id"])),
            display_date=record.get("date", ""),
            submitter_token=record.get("submitterToken"),
            edited=bool(record.get("edited", False)),
            edited_at=record.get("editedAt"),
        )

    def to_record(self) -> dict:
        record = self.to_public()
        if self.submitter_token:
            record["submitterToken"] = self.submitter_token
        return record

    def to_public(self) -> dict:
        """API projection — the capability token is a secret, never listed."""
        public = {
            "id": self.id,
            "name": self.name,
            "message": self.body,
            "date": self.display_date,
            "timestamp": self.created_at,
            "edited": self.edited,
        }
        if self.edited_at:
            public["editedAt"] = self.edited_at
        return public
