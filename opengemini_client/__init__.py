"""Building blocks for openGemini: query result models, statement parsing, retention policy statements, endpoint selection and columnar write requests."""

__version__ = "0.1.0"
__all__ = ["models", "statement_parser", "retention_policy", "endpoints", "record_builder"]