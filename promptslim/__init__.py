"""
promptslim - shrink JSON payloads and logs before they go into a prompt.

Three stateless engines, each taking text plus options and returning the
transformed text with before/after size estimates:

- slim_json: keep one example per repeated object shape, drop noisy keys
- slim_log: keep errors and a bounded stack trace, drop framework noise
- analyze_json: describe a payload by its inferred schema instead

Quick Start:

    from promptslim import SlimOptions, slim_json

    result = slim_json(api_response, SlimOptions.for_level("aggressive"))
    print(result.transformed)
    print(f"{result.reduction_ratio:.0%} smaller")

Error Handling:

    from promptslim import ParseError

    try:
        slim_json("{not json")
    except ParseError as e:
        print(e.details["diagnostic"])
"""

from .config import (
    CompressionLevel,
    LogOptions,
    SlimOptions,
    SlimResult,
)
from .exceptions import ConfigurationError, ParseError, PromptSlimError
from .tokenizers import estimate_tokens
from .transforms import (
    AnalysisResult,
    JsonSlimmer,
    LogFilter,
    SchemaAnalysis,
    SchemaAnalyzer,
    analyze_json,
    slim_json,
    slim_log,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "CompressionLevel",
    "LogOptions",
    "SlimOptions",
    "SlimResult",
    # Exceptions
    "ConfigurationError",
    "ParseError",
    "PromptSlimError",
    # Engines
    "AnalysisResult",
    "JsonSlimmer",
    "LogFilter",
    "SchemaAnalysis",
    "SchemaAnalyzer",
    "analyze_json",
    "estimate_tokens",
    "slim_json",
    "slim_log",
]
