"""Scoped context fields for structured logging.

Fields bound here (for example the page being filled or the field label
being matched) are copied onto every log record by ContextualFilter. The
storage is a ContextVar, so each thread and task sees its own fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_log_context: ContextVar[Dict[str, Any]] = ContextVar("formfill_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields bound in the current context."""
    return dict(_log_context.get())


def bind_log_context(**fields: Any) -> Token:
    """Add fields on top of the current context.

    Returns:
        Token for reset_log_context()

    Example:
        >>> token = bind_log_context(page="https://jobs.example.com/apply")
        >>> reset_log_context(token)
    """
    return _log_context.set({**_log_context.get(), **fields})


def reset_log_context(token: Token) -> None:
    """Restore the context that was active before bind_log_context()."""
    _log_context.reset(token)


def clear_log_context() -> None:
    """Drop every bound field. Mostly useful in tests."""
    _log_context.set({})


class log_context:
    """Bind fields for the duration of a with-block.

    Example:
        >>> with log_context(field_label="Expected CTC *"):
        ...     logger.info("Matching field")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._token: Optional[Token] = None

    def __enter__(self) -> Dict[str, Any]:
        self._token = bind_log_context(**self.fields)
        return get_log_context()

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            reset_log_context(self._token)
            self._token = None
        return False
