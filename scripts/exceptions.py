"""
ERP Fixtures - Script Exceptions

This module defines custom exceptions for script compilation and parsing.
"""


class ScriptError(Exception):
    """Base exception for script-related errors."""
    pass


class ScriptEncodingError(ScriptError):
    """Exception raised when a value cannot be written to a script."""
    pass


class ScriptParseError(ScriptError):
    """Exception raised when script bytes cannot be decoded."""
    pass
