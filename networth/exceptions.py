"""
Custom exceptions for networth.

Purpose
-------
Provides a unified exception hierarchy for the boundaries of the package
(configuration, ledger mutation, CSV ingestion). The analytics engine itself
raises nothing for valid numeric input: undefined cases resolve to documented
defaults instead.

Exception Hierarchy
-------------------
NetWorthError (base)
├── ConfigurationError - Invalid configuration or parameters
├── ValidationError - Ledger data validation failures
│   └── DateConflictError - Record date already present under "reject" policy
└── IngestionError - CSV input cannot be interpreted

Usage
-----
>>> from networth.exceptions import DateConflictError
>>>
>>> try:
...     ledger = ledger.upsert(record, on_conflict="reject")
... except DateConflictError as e:
...     print(f"Skipped: {e}")
"""


class NetWorthError(Exception):
    """
    Base exception for all networth errors.

    Examples
    --------
    >>> try:
    ...     ledger = read_csv(path)
    ... except NetWorthError as e:
    ...     logger.error("Import failed: %s", e)
    """
    pass


class ConfigurationError(NetWorthError):
    """
    Invalid configuration or parameters.

    Raised by code paths that validate outside the pydantic models, such as:
    - Unknown timeframe passed directly to the aggregator
    - Unknown conflict policy passed to Ledger.upsert

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "timeframe must be one of 'month', 'quarter', 'year', got 'week'."
    ... )
    """
    pass


class ValidationError(NetWorthError):
    """
    Ledger data validation failures.

    Raised when ledger input is structurally invalid:
    - Duplicate column ids
    - Category change for an unknown column

    Examples
    --------
    >>> raise ValidationError("Duplicate column id 'col_1'.")
    """
    pass


class DateConflictError(ValidationError):
    """
    A record for the same date already exists.

    Raised by Ledger.upsert when the conflict policy is "reject".

    Examples
    --------
    >>> raise DateConflictError(
    ...     "A record dated 2024-03-01 already exists. "
    ...     "Use on_conflict='overwrite' or 'merge' to replace it."
    ... )
    """

    def __init__(self, message: str, conflict_date=None):
        super().__init__(message)
        self.conflict_date = conflict_date


class IngestionError(NetWorthError):
    """
    CSV input cannot be interpreted.

    Raised when:
    - The file has fewer than two non-empty lines
    - The header has no Year or Month column
    - No row yields a resolvable date

    Examples
    --------
    >>> raise IngestionError("CSV header must contain 'Year' and 'Month' columns.")
    """
    pass
