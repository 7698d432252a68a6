"""Logging configuration.

`errctx` logs through the standard {py:obj}`logging` module under the
`errctx` logger and installs no handlers on import. Call
{py:obj}`setup_tracing` to see those records on stderr, e.g. while
debugging where a failure picked up its context.

"""
import logging
from typing import Optional

__all__ = [
    "setup_tracing",
]

_LEVELS = {
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    # There is no finer level in `logging`.
    "TRACE": logging.DEBUG,
}

_HANDLER_NAME = "errctx"


def setup_tracing(log_level: Optional[str] = None) -> logging.Handler:
    """Send `errctx` log records to stderr.

    Calling this again replaces the handler from the previous call.

    ```python
    >>> handler = setup_tracing("DEBUG")
    >>> logging.getLogger("errctx").level == logging.DEBUG
    True
    >>> handler = setup_tracing()
    >>> len([h for h in logging.getLogger("errctx").handlers if h.name == "errctx"])
    1
    >>> logging.getLogger("errctx").removeHandler(handler)
    >>> logging.getLogger("errctx").setLevel(logging.NOTSET)
    ```

    :arg log_level: String of the log level. One of `"ERROR"`,
        `"WARN"`, `"INFO"`, `"DEBUG"`, `"TRACE"`. Defaults to
        `"ERROR"`.

    :returns: The installed handler.

    """
    if log_level is None:
        log_level = "ERROR"
    try:
        level = _LEVELS[log_level.upper()]
    except KeyError:
        msg = f"unknown log level {log_level!r}; expected one of {list(_LEVELS)}"
        raise ValueError(msg) from None

    logger = logging.getLogger("errctx")
    for old in [h for h in logger.handlers if h.name == _HANDLER_NAME]:
        logger.removeHandler(old)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
