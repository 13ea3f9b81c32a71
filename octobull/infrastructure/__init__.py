"""Infrastructure layer exports."""

from .row_store import (
    AppsScriptRowStoreClient,
    InMemoryRowStore,
    LoginResult,
    RowStoreClient,
    RowStoreError,
    configure_row_store,
    get_row_store,
)
from .summarizer import (
    GeminiSummarizer,
    NoOpSummarizer,
    Summarizer,
    SummarizerError,
    configure_summarizer,
    get_summarizer,
)

__all__ = [
    "AppsScriptRowStoreClient",
    "InMemoryRowStore",
    "LoginResult",
    "RowStoreClient",
    "RowStoreError",
    "configure_row_store",
    "get_row_store",
    "GeminiSummarizer",
    "NoOpSummarizer",
    "Summarizer",
    "SummarizerError",
    "configure_summarizer",
    "get_summarizer",
]
