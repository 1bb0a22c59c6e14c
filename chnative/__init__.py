"""Query binding, query-settings encoding and value types for a ClickHouse native client."""

__version__ = "0.1.0"
__all__ = ["result", "settings", "statement", "tls_registry", "types", "word_matcher"]