from gigafind.core.model.path_filter import ExclusionPolicy, is_bulk_directory, should_exclude
from gigafind.core.model.records import Entry, RawMetric, RawRecord
from gigafind.core.model.results import ResultItem, ResultSet
from gigafind.core.model.thresholds import ScanConfig, Threshold, build_config, parse_threshold
from gigafind.core.model.types import DuplicatePolicy, EntryKind, KindFilter, ModeChoice, ScanMode, SizeUnit
from gigafind.core.model.units import normalize, parse_size

__all__ = [
    "DuplicatePolicy",
    "Entry",
    "EntryKind",
    "ExclusionPolicy",
    "KindFilter",
    "ModeChoice",
    "RawMetric",
    "RawRecord",
    "ResultItem",
    "ResultSet",
    "ScanConfig",
    "ScanMode",
    "SizeUnit",
    "Threshold",
    "build_config",
    "is_bulk_directory",
    "normalize",
    "parse_size",
    "parse_threshold",
    "should_exclude",
]
