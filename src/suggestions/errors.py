"""
Suggestion builder error classes.
"""

from typing import List, Optional


class SuggestionBuilderError(Exception):
    """Base exception for suggestion builder errors"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self):
        if self.original_error is not None:
            return f"{self.message}: {self.original_error}"
        return self.message


class OverridesError(SuggestionBuilderError):
    """Raised when the manual overrides file cannot be read"""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.path = path


class SyncError(SuggestionBuilderError):
    """Raised when uploading a batch of suggestions fails"""

    def __init__(
        self,
        message: str,
        batch: Optional[int] = None,
        failures: Optional[List[dict]] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.batch = batch
        self.failures = failures or []
