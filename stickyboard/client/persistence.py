"""
Sticky Store Persistence Client.

Sends complete note snapshots to the sticky store and reads them back.
Makes exactly one attempt per call: any transport error, non-2xx status or
malformed payload is raised as PersistenceError. Callers decide whether to
swallow it (the note widget does) or propagate it (board creation does).
"""

from typing import Any

import httpx
from pydantic import ValidationError

from stickyboard.backend.core.exceptions import PersistenceError
from stickyboard.backend.core.logging import get_logger, log_with_source
from stickyboard.backend.schemas.sticky import StickyCreate, StickyResponse, StickyUpdate
from stickyboard.board.models import NoteDraft, NoteSnapshot
from stickyboard.client.api import APIClient

logger = get_logger(__name__)

STICKIES_PATH = "/api/v1/stickies"


class StickyStoreClient:
    """
    Persistence client for sticky notes.

    Usage:
        store = StickyStoreClient()
        notes = await store.list_all()
        created = await store.create(draft)
        await store.update(created.evolve(text="hello"))
        await store.delete(created.id)
        await store.close()
    """

    def __init__(self, api: APIClient | None = None) -> None:
        self.api = api if api is not None else APIClient(frontend="board")

    async def close(self) -> None:
        await self.api.close()

    async def list_all(self) -> list[NoteSnapshot]:
        """Fetch every stored note."""
        body = await self._call("list_all", "GET", STICKIES_PATH, expected=200)
        items = body.get("data") or []
        return [self._parse("list_all", item) for item in items]

    async def create(self, draft: NoteDraft) -> NoteSnapshot:
        """Store a new note and return it with its server-assigned ID."""
        payload = self._validate("create", StickyCreate, draft.to_payload())
        body = await self._call("create", "POST", STICKIES_PATH, expected=201, json=payload)
        return self._parse("create", body.get("data"))

    async def update(self, snapshot: NoteSnapshot) -> NoteSnapshot:
        """Replace the stored state of a note with the given full snapshot."""
        payload = self._validate("update", StickyUpdate, snapshot.to_payload())
        body = await self._call(
            "update",
            "PUT",
            f"{STICKIES_PATH}/{snapshot.id}",
            expected=200,
            json=payload,
        )
        return self._parse("update", body.get("data"))

    async def delete(self, note_id: str) -> None:
        """Remove a note from the store."""
        await self._call("delete", "DELETE", f"{STICKIES_PATH}/{note_id}", expected=204)

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        expected: int,
        **kwargs: Any,
    ) -> dict[str, Any]:
        try:
            response = await self.api.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise PersistenceError(
                f"Sticky store unreachable during {operation}: {e}",
                operation=operation,
            ) from e

        if response.status_code != expected:
            message = _error_message(response)
            log_with_source(
                logger,
                "board",
                "debug",
                "Sticky store rejected request",
                operation=operation,
                status_code=response.status_code,
                error=message,
            )
            raise PersistenceError(
                f"Sticky store {operation} failed with HTTP {response.status_code}: {message}",
                operation=operation,
                status_code=response.status_code,
            )

        if response.status_code == 204:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise PersistenceError(
                f"Sticky store returned invalid JSON during {operation}",
                operation=operation,
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _validate(operation: str, schema: type, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            return schema.model_validate(payload).model_dump(mode="json")
        except ValidationError as e:
            raise PersistenceError(
                f"Refusing to send invalid note state during {operation}: {e}",
                operation=operation,
            ) from e

    @staticmethod
    def _parse(operation: str, item: Any) -> NoteSnapshot:
        try:
            stored = StickyResponse.model_validate(item)
        except ValidationError as e:
            raise PersistenceError(
                f"Sticky store returned a malformed note during {operation}",
                operation=operation,
            ) from e
        return NoteSnapshot.from_payload(stored.model_dump(mode="json"))


def _error_message(response: httpx.Response) -> str:
    """Pull the error message out of an error envelope, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if not isinstance(body, dict):
        return str(body)[:200]
    error = body.get("error") or body.get("detail") or {}
    if isinstance(error, dict):
        return error.get("message") or error.get("code") or "unknown error"
    return str(error)
