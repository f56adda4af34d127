from .core import (
    SEPARATOR,
    SOURCE_EXTENSION,
    ConfigurationError,
    InvalidConfiguration,
    ResolverCache,
    TraceEvent,
)
from .loader import ResolverHook, load_source
from .report import memo_table, print_report, trace_table
from .resolver import Resolver
from .search import DirectorySearch
from .utils import summarize_trace, timer

__version__ = "0.1.0"
