"""Remote document store client for household snapshots.

The remote service exposes a collection of JSON documents keyed by
household id:

    GET    /households          -> list of documents (404 when never written)
    PUT    /households/{id}     -> upsert one document
    DELETE /households/{id}     -> remove one document

Only documents that changed since the last successful write are sent, and
documents missing from a new snapshot are deleted remotely.
"""

from __future__ import annotations

import copy
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

import httpx

from household_registry.exceptions import PersistenceError, SnapshotDecodeError
from household_registry.logging_config import get_logger
from household_registry.repositories.interfaces import Snapshot, SnapshotStore

logger = get_logger(__name__)

COLLECTION_PATH = "/households"


class RemoteDocumentStore(SnapshotStore):
    """Snapshot store backed by a remote HTTP document collection.

    With ``background_writes`` enabled, writes are queued on a single worker
    thread and the caller never waits on the network. Writes still apply in
    submission order; failures are logged and the next snapshot resends
    whatever did not make it.
    """

    backend_name = "remote"

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        client: httpx.Client | None = None,
        timeout: float = 10.0,
        background_writes: bool = False,
    ) -> None:
        self._owns_client = client is None
        self._client = (
            client
            if client is not None
            else httpx.Client(base_url=base_url, timeout=timeout)
        )
        self._executor = (
            ThreadPoolExecutor(max_workers=1, thread_name_prefix="hhr-remote-writer")
            if background_writes
            else None
        )
        self._last_written: dict[str, dict[str, Any]] = {}

    def read_snapshot(self) -> Snapshot | None:
        try:
            response = self._client.get(COLLECTION_PATH)
        except httpx.HTTPError as e:
            raise PersistenceError(self.backend_name, str(e)) from e
        if response.status_code == 404:
            return None
        self._raise_for_status(response)

        try:
            payload = response.json()
        except ValueError as e:
            raise SnapshotDecodeError(self.backend_name, "response is not JSON") from e
        if not isinstance(payload, list):
            raise SnapshotDecodeError(self.backend_name, "expected a list of documents")
        if not all(isinstance(doc, dict) for doc in payload):
            raise SnapshotDecodeError(
                self.backend_name, "every document must be an object"
            )

        try:
            documents = sorted(payload, key=lambda doc: doc.get("position", 0))
        except TypeError as e:
            raise SnapshotDecodeError(
                self.backend_name, "document positions are not comparable"
            ) from e
        snapshot: Snapshot = []
        for doc in documents:
            doc = {k: v for k, v in doc.items() if k != "position"}
            snapshot.append(doc)
        self._last_written = {
            str(doc["id"]): {**doc, "position": position}
            for position, doc in enumerate(snapshot)
            if "id" in doc
        }
        return snapshot

    def write_snapshot(self, records: Snapshot) -> None:
        records = copy.deepcopy(records)
        if self._executor is None:
            self._write(records)
            return
        future = self._executor.submit(self._write, records)
        future.add_done_callback(self._log_background_failure)

    def flush(self) -> None:
        """Block until every queued background write has been attempted."""
        if self._executor is not None:
            self._executor.submit(lambda: None).result()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._owns_client:
            self._client.close()

    def _write(self, records: Snapshot) -> None:
        documents = {
            str(record["id"]): {**record, "position": position}
            for position, record in enumerate(records)
        }
        for household_id, document in documents.items():
            if self._last_written.get(household_id) == document:
                continue
            self._send("PUT", f"{COLLECTION_PATH}/{household_id}", json=document)
            self._last_written[household_id] = document

        for household_id in list(self._last_written):
            if household_id not in documents:
                self._send("DELETE", f"{COLLECTION_PATH}/{household_id}")
                del self._last_written[household_id]

        logger.debug("remote_snapshot_written", household_count=len(documents))

    def _send(self, method: str, path: str, **kwargs: Any) -> None:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise PersistenceError(self.backend_name, str(e)) from e
        if method == "DELETE" and response.status_code == 404:
            return
        self._raise_for_status(response)

    def _raise_for_status(self, response: httpx.Response) -> None:
        if 200 <= response.status_code < 300:
            return
        raise PersistenceError(
            self.backend_name,
            f"{response.request.method} {response.request.url.path} "
            f"returned {response.status_code}",
        )

    def _log_background_failure(self, future: Future[None]) -> None:
        error = future.exception()
        if error is not None:
            logger.error(
                "remote_snapshot_write_failed",
                error=str(error),
                error_type=type(error).__name__,
            )
