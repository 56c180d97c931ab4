"""Message Store — the guestbook collection persisted as one JSON document.

Invariants:
    - Collection is newest-first; append() prepends, order survives every rewrite
    - Every mutating operation holds self._write_lock across load → transform → save,
      so concurrent appends/updates/removes never lose a write
    - Validation and authorization run before anything is written
    - Saves are atomic: temp file in the same directory, fsync, os.replace
    - submitterToken exists only on disk; list_messages() never returns it
    - All OS/JSON failures surface as StorageError (details logged, not returned)

Design Decisions:
    - asyncio.Lock over a file lock: single process, single event loop
    - Readers take no lock: os.replace guarantees they see some complete write
    - File IO runs in worker threads (asyncio.to_thread) to keep the loop free
    - ids are creation milliseconds, bumped to newest_id + 1 on collision so
      two submissions in the same millisecond stay distinct
"""

import asyncio
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from guestbook.core.authorization import Actor, decide, window_ms
from guestbook.core.domain_types import (
    DEFAULT_EDIT_WINDOW_DAYS, Decision, MessageId, SubmitterToken,
)
from guestbook.core.errors import (
    ForbiddenError, ResourceNotFoundError, StorageError,
    UnauthorizedError, WindowExpiredError,
)
from guestbook.core.message import Message
from guestbook.core.message_rules import (
    PaginationInfo, check_edit_body, check_submission,
    format_display_date, paginate, parse_positive_int,
)
from guestbook.core.tokens import issue_token

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


class MessageStore:
    """Owns the message file and serializes every write to it."""

    def __init__(
        self,
        path: Path,
        edit_window_days: int = DEFAULT_EDIT_WINDOW_DAYS,
        default_page_limit: int = 10,
        max_page_limit: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.path = Path(path)
        self.edit_window_days = edit_window_days
        self.default_page_limit = default_page_limit
        self.max_page_limit = max_page_limit
        self._window = window_ms(edit_window_days)
        self._clock = clock
        self._write_lock = asyncio.Lock()

    # ─── Lifecycle ───────────────────────────────────────────────

    async def initialize(self) -> bool:
        """Create an empty collection file if absent. Returns True if created."""
        async with self._write_lock:
            if self.path.exists():
                logger.info(f"Messages file found: {self.path}")
                return False
            await asyncio.to_thread(self._create_empty)
            logger.info(f"Created messages file: {self.path}")
            return True

    async def health_check(self) -> bool:
        """Check the collection is readable and parses (for readiness probes)."""
        try:
            await asyncio.to_thread(self._load)
            return True
        except StorageError:
            return False

    # ─── Reads ───────────────────────────────────────────────────

    async def list_messages(
        self, page: int | str | None = None, limit: int | str | None = None,
    ) -> tuple[list[dict], PaginationInfo]:
        page_number = parse_positive_int(page, 1)
        page_size = parse_positive_int(limit, self.default_page_limit)
        if self.max_page_limit is not None:
            page_size = min(page_size, self.max_page_limit)
        messages = await asyncio.to_thread(self._load)
        items, info = paginate(messages, page_number, page_size)
        return [m.to_public() for m in items], info

    # ─── Writes ──────────────────────────────────────────────────

    async def append(
        self, name: str | None, body: str | None,
    ) -> tuple[Message, SubmitterToken]:
        """Add a message to the top. The token is returned here and never again."""
        error = check_submission(name, body)
        if error:
            raise error
        async with self._write_lock:
            messages = await asyncio.to_thread(self._load)
            now = self._clock()
            token = SubmitterToken(issue_token())
            message = Message(
                id=self._next_id(messages, _to_ms(now)),
                name=name.strip(),
                body=body.strip(),
                created_at=_to_ms(now),
                display_date=format_display_date(now),
                submitter_token=token,
            )
            messages.insert(0, message)
            await asyncio.to_thread(self._save, messages)
        logger.info("Message created", extra={"message_id": message.id})
        return message, token

    async def update(
        self, message_id: MessageId, new_body: str | None, actor: Actor,
    ) -> Message:
        async with self._write_lock:
            messages = await asyncio.to_thread(self._load)
            message = messages[self._index_of(messages, message_id)]
            now = self._clock()
            self._authorize(actor, message, _to_ms(now))
            error = check_edit_body(new_body)
            if error:
                raise error
            message.body = new_body.strip()
            message.edited = True
            message.edited_at = format_display_date(now)
            await asyncio.to_thread(self._save, messages)
        logger.info(
            "Message edited",
            extra={"message_id": message.id, "actor": actor.kind.value},
        )
        return message

    async def remove(self, message_id: MessageId, actor: Actor) -> Message:
        async with self._write_lock:
            messages = await asyncio.to_thread(self._load)
            index = self._index_of(messages, message_id)
            self._authorize(actor, messages[index], _to_ms(self._clock()))
            removed = messages.pop(index)
            await asyncio.to_thread(self._save, messages)
        logger.info(
            f"Deleted message from {removed.name}",
            extra={"message_id": removed.id, "actor": actor.kind.value},
        )
        return removed

    # ─── Helpers ─────────────────────────────────────────────────

    @staticmethod
    def _next_id(messages: list[Message], now_ms: int) -> MessageId:
        newest = max((m.id for m in messages), default=0)
        return MessageId(now_ms if now_ms > newest else newest + 1)

    @staticmethod
    def _index_of(messages: list[Message], message_id: int) -> int:
        for index, message in enumerate(messages):
            if message.id == message_id:
                return index
        raise ResourceNotFoundError("Message", str(message_id))

    def _authorize(self, actor: Actor, message: Message, now_ms: int) -> None:
        decision = decide(actor, message, now_ms, self._window)
        if decision == Decision.UNAUTHORIZED:
            raise UnauthorizedError()
        if decision == Decision.FORBIDDEN:
            raise ForbiddenError()
        if decision == Decision.WINDOW_EXPIRED:
            raise WindowExpiredError(self.edit_window_days)

    # ─── File IO (runs in worker threads) ────────────────────────

    def _create_empty(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create messages directory: {e}")
            raise StorageError("initialize")
        self._save([])

    def _load(self) -> list[Message]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError("messages file must contain a JSON array")
            return [Message.from_record(record) for record in data]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Error reading messages: {e}", exc_info=True)
            raise StorageError("read")

    def _save(self, messages: list[Message]) -> None:
        payload = json.dumps(
            [m.to_record() for m in messages], indent=2, ensure_ascii=False,
        )
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error(f"Error saving messages: {e}", exc_info=True)
            if tmp_name:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError("save")


# Singleton (initialized on startup)
message_store: MessageStore | None = None


def init_message_store(path: Path, **kwargs) -> MessageStore:
    global message_store
    message_store = MessageStore(path, **kwargs)
    return message_store


def get_message_store() -> MessageStore:
    """FastAPI dependency for the message store."""
    if message_store is None:
        raise RuntimeError("Message store not initialized")
    return message_store
