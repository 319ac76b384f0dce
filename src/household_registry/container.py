"""Dependency injection container for the household registry.

Wires settings to a snapshot store, the record store and the registry
service. Everything is built lazily on first access and cached.

Usage:
    from household_registry.container import Container, get_container

    container = get_container()
    registry = container.registry_service
    registry.sort_by("head_name")
"""

from functools import cached_property, lru_cache
from typing import TYPE_CHECKING

from household_registry.config import Settings, StorageBackend, get_settings
from household_registry.logging_config import get_logger

if TYPE_CHECKING:
    from household_registry.repositories.interfaces import SnapshotStore
    from household_registry.services.csv_export import CsvExporter, FileDownloadSink
    from household_registry.services.record_store import RecordStore
    from household_registry.services.registry import HouseholdRegistryService

logger = get_logger(__name__)


class Container:
    """Dependency injection container.

    The container can be configured with custom settings for testing:

        test_settings = Settings(storage_backend=StorageBackend.MEMORY)
        container = Container(settings=test_settings)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        logger.debug(
            "container_created",
            storage_backend=self._settings.storage_backend.value,
            environment=self._settings.environment.value,
        )

    @property
    def settings(self) -> Settings:
        """Get application settings."""
        return self._settings

    @cached_property
    def snapshot_store(self) -> "SnapshotStore":
        """Durable collaborator selected by ``storage_backend``."""
        backend = self._settings.storage_backend
        if backend == StorageBackend.SQLITE:
            return self._create_sqlite_store()
        if backend == StorageBackend.REMOTE:
            return self._create_remote_store()
        if backend == StorageBackend.MEMORY:
            from household_registry.repositories.memory import InMemorySnapshotStore

            logger.info("initializing_memory_store")
            return InMemorySnapshotStore()
        return self._create_json_store()

    def _create_json_store(self) -> "SnapshotStore":
        from household_registry.repositories.json_file import JsonFileSnapshotStore

        path = self._settings.storage_path
        logger.info("initializing_json_store", path=str(path))
        return JsonFileSnapshotStore(path, key=self._settings.storage_key)

    def _create_sqlite_store(self) -> "SnapshotStore":
        from household_registry.repositories.sqlite import (
            SQLiteDatabase,
            SQLiteSnapshotStore,
        )

        db_path = str(self._settings.sqlite_path)
        logger.info("initializing_sqlite_store", path=db_path)

        db = SQLiteDatabase(db_path)
        db.initialize()
        return SQLiteSnapshotStore(db)

    def _create_remote_store(self) -> "SnapshotStore":
        import httpx

        from household_registry.repositories.remote import RemoteDocumentStore

        url = self._settings.remote_url
        if not url:
            raise ValueError("remote_url must be set when storage_backend is remote")

        logger.info(
            "initializing_remote_store",
            # Don't log the full URL as it may contain credentials
            host=httpx.URL(url).host,
            background_writes=self._settings.remote_background_writes,
        )
        return RemoteDocumentStore(
            base_url=url,
            timeout=self._settings.remote_timeout,
            background_writes=self._settings.remote_background_writes,
        )

    @cached_property
    def record_store(self) -> "RecordStore":
        """Record store, rehydrated from the snapshot store on first access."""
        from household_registry.sample_data import sample_households
        from household_registry.services.record_store import RecordStore

        store = RecordStore(self.snapshot_store)
        initial = sample_households() if self._settings.seed_sample_data else None
        store.load(initial=initial)
        return store

    @cached_property
    def csv_exporter(self) -> "CsvExporter":
        from household_registry.services.csv_export import CsvExporter

        return CsvExporter(filename=self._settings.export_filename)

    @cached_property
    def download_sink(self) -> "FileDownloadSink":
        from household_registry.services.csv_export import FileDownloadSink

        return FileDownloadSink(self._settings.export_directory)

    @cached_property
    def registry_service(self) -> "HouseholdRegistryService":
        """Get the registry service the display layer talks to."""
        from household_registry.services.registry import HouseholdRegistryService

        return HouseholdRegistryService(
            self.record_store,
            exporter=self.csv_exporter,
            download_sink=self.download_sink,
        )

    def close(self) -> None:
        """Close the snapshot store if it was ever opened."""
        if "snapshot_store" in self.__dict__:
            logger.info("closing_snapshot_store")
            self.snapshot_store.close()

    def __enter__(self) -> "Container":
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager, closing resources."""
        self.close()


_container: Container | None = None


@lru_cache
def get_container() -> Container:
    """Get the global container singleton.

    For testing, create a Container directly with custom settings instead
    of using this function.
    """
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Reset the global container, closing its resources."""
    global _container
    if _container is not None:
        _container.close()
        _container = None
    get_container.cache_clear()
