"""Transformation engines for promptslim."""

from .json_slimmer import JsonSlimmer, shape_signature, slim_json, unique_structures
from .log_filter import (
    LineKind,
    LogFilter,
    StackPhase,
    StackTracker,
    classify_line,
    clean_line,
    slim_log,
)
from .schema_analyzer import (
    AnalysisResult,
    NumericRange,
    SchemaAnalysis,
    SchemaAnalyzer,
    SchemaField,
    SchemaKind,
    ValueAnalysis,
    ValueKind,
    analyze_data,
    analyze_json,
    analyze_values,
    render_summary,
)

__all__ = [
    # JSON slimming
    "JsonSlimmer",
    "shape_signature",
    "slim_json",
    "unique_structures",
    # Log filtering
    "LineKind",
    "LogFilter",
    "StackPhase",
    "StackTracker",
    "classify_line",
    "clean_line",
    "slim_log",
    # Schema analysis
    "AnalysisResult",
    "NumericRange",
    "SchemaAnalysis",
    "SchemaAnalyzer",
    "SchemaField",
    "SchemaKind",
    "ValueAnalysis",
    "ValueKind",
    "analyze_data",
    "analyze_json",
    "analyze_values",
    "render_summary",
]
