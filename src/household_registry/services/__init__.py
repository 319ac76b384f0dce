from household_registry.services.aggregation import RegistryStats, aggregate
from household_registry.services.csv_export import (
    CSV_MEDIA_TYPE,
    CsvDownload,
    CsvExporter,
    DownloadSink,
    FileDownloadSink,
    export_csv,
    format_date_for_export,
)
from household_registry.services.query import (
    QueryCriteria,
    SortConfig,
    collation_key,
    query,
    run_query,
)
from household_registry.services.record_store import RecordStore
from household_registry.services.registry import (
    HouseholdRegistryService,
    validate_household,
)

__all__ = [
    "CSV_MEDIA_TYPE",
    "CsvDownload",
    "CsvExporter",
    "DownloadSink",
    "FileDownloadSink",
    "HouseholdRegistryService",
    "QueryCriteria",
    "RecordStore",
    "RegistryStats",
    "SortConfig",
    "aggregate",
    "collation_key",
    "export_csv",
    "format_date_for_export",
    "query",
    "run_query",
    "validate_household",
]
