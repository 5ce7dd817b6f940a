"""
Exception classes for proofcheck.

All proofcheck exceptions inherit from ProofCheckError,
making it easy to catch all library errors.

Example:
    >>> try:
    ...     report = proofcheck.check_file("missing.txt")
    ... except proofcheck.DocumentLoadError as e:
    ...     print(f"Cannot read manuscript: {e}")
    ... except proofcheck.ProofCheckError as e:
    ...     print(f"proofcheck error: {e}")
"""


class ProofCheckError(Exception):
    """
    Base exception for all proofcheck errors.

    Catch this to handle any proofcheck-specific error.
    """

    pass


class DocumentLoadError(ProofCheckError):
    """
    Raised when the primary manuscript cannot be read.

    This is the only fatal input error. Missing dictionaries, good-word
    lists and he/be data files are logged as warnings and the run
    continues with degraded data.
    """

    pass


class DataFileError(ProofCheckError):
    """
    Raised when a data file exists but cannot be decoded at all.

    Individual malformed lines are skipped, not raised.
    """

    pass


class ConfigurationError(ProofCheckError):
    """
    Raised for invalid configuration.

    Example:
        >>> SpellcheckConfig(frequency_amnesty=0)
        ConfigurationError: frequency_amnesty must be >= 1, got 0
    """

    pass
