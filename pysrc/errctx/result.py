"""Fallible outcomes and attaching context to them.

A function that can fail returns either an {py:obj}`Ok` holding its
value or an {py:obj}`Err` holding the failure. As the outcome is
returned up the stack, each layer can say what it was doing with
{py:obj}`context` or {py:obj}`with_context`. On the failure branch
this converts the failure into an {py:obj}`~errctx.errors.Error` and
appends a line; on the success branch nothing happens.

```python
>>> def connect() -> Result[int, OSError]:
...     return Err(ConnectionRefusedError("connection refused"))
>>> def open_session() -> Fallible[int]:
...     return connect().context("while opening session")
>>> def handle(request_id: int) -> Fallible[int]:
...     return open_session().with_context(
...         lambda: f"while handling request {request_id}"
...     )
>>> print(handle(42).error)
connection refused
while opening session
while handling request 42
```

Code that raises instead of returning outcomes can use
{py:obj}`contextualize` for the same effect, or {py:obj}`attempt` to
turn a raising call into an outcome.

"""
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, NoReturn, TypeVar, Union

from typing_extensions import Self, TypeAlias, override

from errctx.errors import Error

__all__ = [
    "Err",
    "Fallible",
    "Ok",
    "Result",
    "attempt",
    "context",
    "contextualize",
    "with_context",
]

logger = logging.getLogger(__name__)

X = TypeVar("X")
"""Type of a success value."""

E = TypeVar("E", bound=Exception)
"""Type of a failure."""

D = TypeVar("D")
"""Type of a fallback value."""


class _Outcome(ABC):
    @abstractmethod
    def is_ok(self) -> bool:
        """`True` if this is an {py:obj}`Ok`."""
        ...

    def is_err(self) -> bool:
        """`True` if this is an {py:obj}`Err`."""
        return not self.is_ok()

    @abstractmethod
    def unwrap(self) -> Any:
        """Return the success value or raise the failure."""
        ...

    @abstractmethod
    def unwrap_or(self, default: Any) -> Any:
        """Return the success value or `default`."""
        ...

    @abstractmethod
    def context(self, text: Any) -> Any:
        """Attach a line of context to a failure.

        See {py:obj}`errctx.result.context`.

        """
        ...

    @abstractmethod
    def with_context(self, make_text: Callable[[], Any]) -> Any:
        """Attach a lazily built line of context to a failure.

        See {py:obj}`errctx.result.with_context`.

        """
        ...


@dataclass(frozen=True)
class Ok(_Outcome, Generic[X]):
    """A successful outcome."""

    value: X

    @override
    def is_ok(self) -> bool:
        return True

    @override
    def unwrap(self) -> X:
        return self.value

    @override
    def unwrap_or(self, default: Any) -> X:
        return self.value

    @override
    def context(self, text: Any) -> Self:
        return self

    @override
    def with_context(self, make_text: Callable[[], Any]) -> Self:
        return self


@dataclass(frozen=True)
class Err(_Outcome, Generic[E]):
    """A failed outcome."""

    error: E

    @override
    def is_ok(self) -> bool:
        return False

    @override
    def unwrap(self) -> NoReturn:
        err = self.error
        # Link a container to what it wraps the same way
        # `contextualize` does, unless it was already raised that way.
        if isinstance(err, Error) and err.__cause__ is None:
            raise err from err.inner
        raise err

    @override
    def unwrap_or(self, default: D) -> D:
        return default

    @override
    def context(self, text: Any) -> "Err[Error]":
        err = Error.from_exc(self.error)
        err.extend_context(text)
        return Err(err)

    @override
    def with_context(self, make_text: Callable[[], Any]) -> "Err[Error]":
        err = Error.from_exc(self.error)
        err.extend_context(make_text())
        return Err(err)


Result: TypeAlias = Union[Ok[X], Err[E]]
"""Either a success value or a failure."""

Fallible: TypeAlias = Union[Ok[X], Err[Error]]
"""An outcome whose failure has been given context."""


def _check_outcome(outcome: Any) -> None:
    if not isinstance(outcome, _Outcome):
        msg = f"expected an `Ok` or `Err`; got {outcome!r}"
        raise TypeError(msg)


def context(outcome: Result[X, Exception], text: Any) -> Fallible[X]:
    """Attach a line of context to a failed outcome.

    If `outcome` is an {py:obj}`Ok`, it is returned as is. If it is
    an {py:obj}`Err`, its failure is converted into an
    {py:obj}`~errctx.errors.Error` (or reused if it already is one)
    and `text` is appended.

    ```python
    >>> context(Ok(5), "while counting")
    Ok(value=5)
    >>> out = context(Err(KeyError("port")), "while reading config")
    >>> out.error.context
    ('while reading config',)
    ```

    :arg outcome: Outcome to annotate.

    :arg text: Context; converted with {py:obj}`str`.

    :returns: An outcome whose failure, if any, is an
        {py:obj}`~errctx.errors.Error`.

    """
    _check_outcome(outcome)
    return outcome.context(text)


def with_context(
    outcome: Result[X, Exception], make_text: Callable[[], Any]
) -> Fallible[X]:
    """Attach a lazily built line of context to a failed outcome.

    Like {py:obj}`context`, but `make_text` is only called if
    `outcome` is an {py:obj}`Err`. Use this when building the text is
    not free.

    :arg outcome: Outcome to annotate.

    :arg make_text: Called with no arguments to build the context.

    :returns: An outcome whose failure, if any, is an
        {py:obj}`~errctx.errors.Error`.

    """
    _check_outcome(outcome)
    return outcome.with_context(make_text)


def attempt(f: Callable[..., X], *args: Any, **kwargs: Any) -> Result[X, Exception]:
    """Call a function and capture a raised failure as an outcome.

    Only {py:obj}`Exception`s are captured; things like
    {py:obj}`KeyboardInterrupt` still propagate.

    ```python
    >>> attempt(int, "12")
    Ok(value=12)
    >>> attempt(int, "twelve").context("while parsing port").unwrap()
    Traceback (most recent call last):
    ...
    errctx.errors.Error: invalid literal for int() with base 10: 'twelve'
    while parsing port
    ```

    """
    try:
        return Ok(f(*args, **kwargs))
    except Exception as ex:
        return Err(ex)


@contextmanager
def contextualize(text: Union[Any, Callable[[], Any]]) -> Iterator[None]:
    """Attach context to any failure raised inside a block.

    If an {py:obj}`Exception` escapes the block, it is converted into
    an {py:obj}`~errctx.errors.Error` (or reused if it already is
    one), `text` is appended and the error is re-raised. If `text` is
    callable it is only called on failure. If calling it raises, that
    exception propagates instead and the original failure is only
    reachable as its `__context__`, so keep such functions trivial.

    This can also be used as a decorator.

    ```python
    >>> @contextualize("while loading settings")
    ... def load():
    ...     with contextualize(lambda: "while reading settings.toml"):
    ...         raise FileNotFoundError("no such file")
    >>> try:
    ...     load()
    ... except Error as ex:
    ...     print(ex)
    no such file
    while reading settings.toml
    while loading settings
    ```

    :arg text: Context, or a function with no arguments that builds
        it.

    """
    try:
        yield
    except Exception as ex:
        err = Error.from_exc(ex)
        err.extend_context(text() if callable(text) else text)
        logger.debug("failure left context scope: %r", err)
        if err is ex:
            raise
        raise err from ex
