"""
Named boolean toggles backed by a fixed-size bit mask.

Toggle state is addressed by ordinal (O(1)) or by name, and can be
bulk-loaded from ``<0|1> <name>`` line files or ``<name>: <0|1>`` YAML.
"""

from .errors import (
    FrozenToggleSetError,
    MalformedRecordError,
    SourceUnavailableError,
    ToggleError,
    ToggleOrdinalError,
    UnknownFormatError,
)
from .lazy import LazyToggles
from .loader import load_from_file
from .records import (
    LineRecordFormat,
    RecordFormat,
    YamlRecordFormat,
    format_for_path,
    get_format,
    parse_flag,
)
from .settings import ToggleSettings
from .toggle_set import LoadReport, ToggleSet
from .variants import Variants, variants_of

__version__ = "1.1.1"

__all__ = [
    "FrozenToggleSetError",
    "MalformedRecordError",
    "SourceUnavailableError",
    "ToggleError",
    "ToggleOrdinalError",
    "UnknownFormatError",
    "LazyToggles",
    "load_from_file",
    "LineRecordFormat",
    "RecordFormat",
    "YamlRecordFormat",
    "format_for_path",
    "get_format",
    "parse_flag",
    "ToggleSettings",
    "LoadReport",
    "ToggleSet",
    "Variants",
    "variants_of",
]
