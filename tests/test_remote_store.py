import json

import httpx
import pytest

from household_registry.domain.households import Household
from household_registry.exceptions import PersistenceError, SnapshotDecodeError
from household_registry.repositories.remote import RemoteDocumentStore
from household_registry.repositories.serialization import household_to_dict
from household_registry.services.record_store import RecordStore


class FakeDocumentServer:
    """In-process stand-in for the remote document collection."""

    def __init__(self) -> None:
        self.documents: dict[str, dict] | None = None
        self.requests: list[tuple[str, str]] = []
        self.fail_with: int | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"detail": "unavailable"})

        parts = request.url.path.strip("/").split("/")
        if request.method == "GET" and parts == ["households"]:
            if self.documents is None:
                return httpx.Response(404, json={"detail": "no collection"})
            return httpx.Response(200, json=list(self.documents.values()))
        if request.method == "PUT" and len(parts) == 2:
            if self.documents is None:
                self.documents = {}
            self.documents[parts[1]] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True})
        if request.method == "DELETE" and len(parts) == 2:
            if self.documents is None or parts[1] not in self.documents:
                return httpx.Response(404)
            del self.documents[parts[1]]
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def server() -> FakeDocumentServer:
    return FakeDocumentServer()


@pytest.fixture
def client(server: FakeDocumentServer) -> httpx.Client:
    with httpx.Client(
        transport=httpx.MockTransport(server.handler), base_url="http://docs.test"
    ) as c:
        yield c


@pytest.fixture
def remote(client: httpx.Client) -> RemoteDocumentStore:
    return RemoteDocumentStore(client=client)


def documents(*names: str) -> list[dict]:
    return [household_to_dict(Household(head_name=name)) for name in names]


class TestRemoteDocumentStore:
    def test_missing_collection_reads_none(self, remote):
        assert remote.read_snapshot() is None

    def test_write_puts_each_document(self, remote, server):
        snapshot = documents("A", "B")

        remote.write_snapshot(snapshot)

        assert [m for m, _ in server.requests] == ["PUT", "PUT"]
        assert set(server.documents) == {d["id"] for d in snapshot}

    def test_read_restores_order_and_strips_position(self, remote, server):
        snapshot = documents("Zed", "Alpha", "Mid")
        remote.write_snapshot(snapshot)
        # server returns documents in arbitrary order
        server.documents = dict(reversed(list(server.documents.items())))

        result = remote.read_snapshot()

        assert result == snapshot

    def test_unchanged_documents_are_not_resent(self, remote, server):
        snapshot = documents("A", "B")
        remote.write_snapshot(snapshot)
        server.requests.clear()

        snapshot[1]["phone"] = "0909"
        remote.write_snapshot(snapshot)

        assert server.requests == [("PUT", f"/households/{snapshot[1]['id']}")]

    def test_removed_documents_are_deleted(self, remote, server):
        snapshot = documents("A", "B")
        remote.write_snapshot(snapshot)
        server.requests.clear()

        remote.write_snapshot(snapshot[:1])

        assert server.requests == [("DELETE", f"/households/{snapshot[1]['id']}")]
        assert list(server.documents) == [snapshot[0]["id"]]

    def test_read_primes_known_documents(self, client, server):
        RemoteDocumentStore(client=client).write_snapshot(documents("A", "B"))
        fresh = RemoteDocumentStore(client=client)
        stored = fresh.read_snapshot()
        server.requests.clear()

        fresh.write_snapshot(stored[:1])

        assert [m for m, _ in server.requests] == ["DELETE"]

    def test_server_error_raises_persistence_error(self, remote, server):
        server.fail_with = 503

        with pytest.raises(PersistenceError) as exc:
            remote.write_snapshot(documents("A"))

        assert "503" in exc.value.message

    def test_non_list_payload(self):
        store = RemoteDocumentStore(
            client=httpx.Client(
                transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})),
                base_url="http://docs.test",
            )
        )

        with pytest.raises(SnapshotDecodeError):
            store.read_snapshot()

    @pytest.mark.parametrize(
        "payload",
        [
            [1, 2],
            [{"id": "a", "position": 0}, "b"],
            [{"id": "a", "position": 0}, {"id": "b", "position": "first"}],
        ],
    )
    def test_malformed_documents(self, payload):
        store = RemoteDocumentStore(
            client=httpx.Client(
                transport=httpx.MockTransport(
                    lambda r: httpx.Response(200, json=payload)
                ),
                base_url="http://docs.test",
            )
        )

        with pytest.raises(SnapshotDecodeError):
            store.read_snapshot()

    def test_record_store_survives_malformed_collection(self, capsys, caplog):
        client = httpx.Client(
            transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[1, 2])),
            base_url="http://docs.test",
        )
        store = RecordStore(RemoteDocumentStore(client=client))

        assert store.load() == []

        all_output = capsys.readouterr().out + caplog.text
        assert "snapshot_read_failed" in all_output

    def test_transport_error_wrapped(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        store = RemoteDocumentStore(
            client=httpx.Client(
                transport=httpx.MockTransport(refuse), base_url="http://docs.test"
            )
        )

        with pytest.raises(PersistenceError):
            store.read_snapshot()

    def test_failed_document_is_resent_next_time(self, remote, server):
        snapshot = documents("A")
        server.fail_with = 500
        with pytest.raises(PersistenceError):
            remote.write_snapshot(snapshot)

        server.fail_with = None
        remote.write_snapshot(snapshot)

        assert snapshot[0]["id"] in server.documents


class TestBackgroundWrites:
    def test_writes_apply_in_order(self, client, server):
        store = RemoteDocumentStore(client=client, background_writes=True)
        snapshot = documents("A", "B")

        store.write_snapshot(snapshot)
        store.write_snapshot(snapshot[1:])
        store.flush()

        assert list(server.documents) == [snapshot[1]["id"]]
        store.close()

    def test_failures_are_logged_not_raised(self, client, server, capsys, caplog):
        server.fail_with = 500
        store = RemoteDocumentStore(client=client, background_writes=True)

        store.write_snapshot(documents("A"))
        store.close()

        all_output = capsys.readouterr().out + caplog.text
        assert "remote_snapshot_write_failed" in all_output

    def test_record_store_does_not_wait_for_failures(self, client, server):
        server.fail_with = 500
        remote = RemoteDocumentStore(client=client, background_writes=True)
        store = RecordStore(remote)

        created = store.create(Household(head_name="A", apartment_number="1"))
        remote.close()

        assert created.ordinal == 1
        assert len(store) == 1
