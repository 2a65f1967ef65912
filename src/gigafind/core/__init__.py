from gigafind.core.aggregate import admit, aggregate
from gigafind.core.classify import classify
from gigafind.core.config import LOG_FORMAT, Settings, resolve_settings
from gigafind.core.model import (
    DuplicatePolicy,
    Entry,
    EntryKind,
    ExclusionPolicy,
    KindFilter,
    ModeChoice,
    RawMetric,
    RawRecord,
    ResultItem,
    ResultSet,
    ScanConfig,
    ScanMode,
    SizeUnit,
    Threshold,
    build_config,
    normalize,
    parse_size,
    parse_threshold,
    should_exclude,
)
from gigafind.core.pipeline import DataError, PipelineError, ScanOutcome, run_scan

__all__ = [
    "LOG_FORMAT",
    "DataError",
    "DuplicatePolicy",
    "Entry",
    "EntryKind",
    "ExclusionPolicy",
    "KindFilter",
    "ModeChoice",
    "PipelineError",
    "RawMetric",
    "RawRecord",
    "ResultItem",
    "ResultSet",
    "ScanConfig",
    "ScanMode",
    "ScanOutcome",
    "Settings",
    "SizeUnit",
    "Threshold",
    "admit",
    "aggregate",
    "build_config",
    "classify",
    "normalize",
    "parse_size",
    "parse_threshold",
    "resolve_settings",
    "run_scan",
    "should_exclude",
]
