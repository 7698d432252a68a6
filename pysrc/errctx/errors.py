"""The error container.

{py:obj}`Error` wraps any {py:obj}`Exception` and carries an ordered
list of context strings that callers attach as the failure propagates
upward. Rendering the container shows the original failure first and
then each context line in the order it was attached.

```python
>>> err = Error(ConnectionRefusedError("connection refused"))
>>> err.extend_context("while opening session")
>>> err.extend_context("while handling request 42")
>>> print(err)
connection refused
while opening session
while handling request 42
```

The wrapped failure keeps its identity. Type checks and attribute
lookups reach through the container.

```python
>>> isinstance(err.downcast(ConnectionRefusedError), ConnectionRefusedError)
True
>>> err.downcast(KeyError) is None
True
```

Use {py:obj}`msg` or {py:obj}`format_err` to start a failure without
defining a dedicated exception type.

```python
>>> print(msg("disk full"))
disk full
>>> print(format_err("disk {} is {}% full", "/dev/sda1", 100))
disk /dev/sda1 is 100% full
```

"""
from typing import Any, Iterator, List, Optional, Tuple, Type, TypeVar

__all__ = [
    "Error",
    "Message",
    "format_err",
    "msg",
]

E = TypeVar("E", bound=Exception)
"""Type of a wrapped failure when downcasting."""


class Message(Exception):
    """A failure that is just some text.

    This is what {py:obj}`msg` and {py:obj}`format_err` wrap. It has
    no cause of its own.

    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def _restore(cls, inner: Exception, context: Tuple[str, ...]) -> "Error":
    err = cls(inner)
    err._context.extend(context)
    return err


class Error(Exception):
    """A failure annotated with zero or more layers of context.

    Any {py:obj}`Exception` can be wrapped, except another `Error`.
    Use {py:obj}`Error.from_exc` when you don't know which one you
    have. `BaseException`s like {py:obj}`KeyboardInterrupt` are not
    failures in this sense and are rejected.

    Attributes not defined on the container are looked up on the
    wrapped failure, so `err.errno` works if the original exception
    has an `errno`.

    :arg inner: Failure to wrap. It is held as-is, not copied.

    :raises TypeError: If `inner` is not an {py:obj}`Exception` or is
        already an `Error`.

    """

    def __init__(self, inner: Exception):
        if isinstance(inner, Error):
            msg = (
                "can't wrap an `Error` in another `Error`; "
                "use `Error.from_exc` to pass it through"
            )
            raise TypeError(msg)
        if not isinstance(inner, Exception):
            msg = f"can only wrap `Exception` instances; got {inner!r}"
            raise TypeError(msg)
        super().__init__(inner)
        self._inner = inner
        self._context: List[str] = []

    @classmethod
    def from_exc(cls, exc: Exception) -> "Error":
        """Convert any failure into a container.

        An `Error` is returned unchanged, so converting never nests
        containers.

        ```python
        >>> err = Error.from_exc(ValueError("bad"))
        >>> Error.from_exc(err) is err
        True
        ```

        """
        if isinstance(exc, Error):
            return exc
        return cls(exc)

    @classmethod
    def msg(cls, text: Any) -> "Error":
        """Start a failure from just a message.

        :arg text: Converted with {py:obj}`str`.

        :returns: A container around a {py:obj}`Message`.

        """
        return cls(Message(str(text)))

    @property
    def inner(self) -> Exception:
        """The wrapped failure."""
        return self._inner

    @property
    def context(self) -> Tuple[str, ...]:
        """Context lines, oldest first."""
        return tuple(self._context)

    def extend_context(self, text: Any) -> None:
        """Attach one more line of context.

        Lines already attached are never modified.

        :arg text: Converted with {py:obj}`str`.

        """
        self._context.append(str(text))

    def source(self) -> Optional[BaseException]:
        """The cause of the wrapped failure, if it has one.

        This follows the same rules Python uses when printing a
        traceback: an explicit `raise ... from` cause wins, otherwise
        the implicit context unless it was suppressed. The container
        itself is never part of the chain.

        """
        inner = self._inner
        if inner.__cause__ is not None:
            return inner.__cause__
        if inner.__suppress_context__:
            return None
        return inner.__context__

    def chain(self) -> Iterator[BaseException]:
        """Walk the wrapped failure and each successive cause.

        ```python
        >>> try:
        ...     try:
        ...         {}["port"]
        ...     except KeyError as ex:
        ...         raise ValueError("bad config") from ex
        ... except ValueError as ex:
        ...     err = Error(ex)
        >>> [type(e).__name__ for e in err.chain()]
        ['ValueError', 'KeyError']
        ```

        """
        seen = set()
        exc: Optional[BaseException] = self._inner
        while exc is not None and id(exc) not in seen:
            seen.add(id(exc))
            yield exc
            if exc.__cause__ is not None:
                exc = exc.__cause__
            elif exc.__suppress_context__:
                exc = None
            else:
                exc = exc.__context__

    def downcast(self, cls: Type[E]) -> Optional[E]:
        """Get the wrapped failure back as its original type.

        :arg cls: Type to check the wrapped failure against.

        :returns: The wrapped failure if it is an instance of `cls`,
            otherwise `None`.

        """
        if isinstance(self._inner, cls):
            return self._inner
        return None

    def is_instance(self, cls: Type[Exception]) -> bool:
        """Check the type of the wrapped failure."""
        return isinstance(self._inner, cls)

    def into_inner(self) -> Exception:
        """Give up the container and return the wrapped failure.

        Any attached context is dropped. Use this to hand the failure
        to code that doesn't know about `Error`.

        """
        return self._inner

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails. Look in `__dict__`
        # directly so a half-built instance can't recurse. Dunders
        # like `__notes__` belong to the container, not the inner.
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        try:
            inner = self.__dict__["_inner"]
        except KeyError:
            raise AttributeError(name) from None
        return getattr(inner, name)

    def __str__(self) -> str:
        return "\n".join([str(self._inner), *self._context])

    def __repr__(self) -> str:
        return f"Error({self._inner!r}, context={self._context!r})"

    def __reduce__(self):
        return (_restore, (type(self), self._inner, tuple(self._context)))


def msg(text: Any) -> Error:
    """Build an error from a literal message.

    ```python
    >>> err = msg("disk full")
    >>> str(err)
    'disk full'
    >>> err.context
    ()
    ```

    """
    return Error.msg(text)


def format_err(template: str, *args: Any, **kwargs: Any) -> Error:
    """Build an error from a formatted message.

    :arg template: A {py:obj}`str.format` template.

    :arg args: Positional values for `template`.

    :arg kwargs: Keyword values for `template`.

    """
    return Error(Message(template.format(*args, **kwargs)))
