"""`errctx` is a small library for carrying failures up a call stack
while each layer explains what it was doing.

# Overview

There is one error type, {py:obj}`errctx.errors.Error`. It wraps any
{py:obj}`Exception` without losing it: the original object is still
there, so its message, its `__cause__` chain and its type all survive.
On top of that it holds a list of **context** lines. Each caller that
sees the failure go by can append one. When the error is printed you
get what actually broke first, then why each caller cared.

```python
>>> from errctx.errors import Error
>>> err = Error(ConnectionRefusedError("connection refused"))
>>> err.extend_context("while opening session")
>>> err.extend_context("while handling request 42")
>>> print(err)
connection refused
while opening session
while handling request 42
```

Context lines come out in the order they were attached. The first one
is closest to the original failure.

# Outcomes

Functions that return their failures rather than raising them use
{py:obj}`errctx.result.Ok` and {py:obj}`errctx.result.Err`. Both have
`context` and `with_context` methods. On an `Ok` they do nothing. On
an `Err` they convert the failure into an `Error` and append a line.

```python
>>> from errctx.result import Err, Ok
>>> Ok(3).context("while counting")
Ok(value=3)
>>> out = Err(TimeoutError("timed out")).context("while polling")
>>> print(out.error)
timed out
while polling
```

An `Error` that already has context is extended in place, never
wrapped in a second `Error`.

```python
>>> out = out.with_context(lambda: "while refreshing dashboard")
>>> out.error.context
('while polling', 'while refreshing dashboard')
>>> type(out.error.inner).__name__
'TimeoutError'
```

`with_context` takes a function so that building the text costs
nothing unless there was a failure.

# Raising Code

Most Python code raises. {py:obj}`errctx.result.contextualize` does
the same job for a block or a function.

```python
>>> from errctx.result import contextualize
>>> try:
...     with contextualize("while parsing port"):
...         int("eighty")
... except Error as ex:
...     print(ex)
invalid literal for int() with base 10: 'eighty'
while parsing port
```

# Starting a Failure

When there is no existing exception to wrap, build one from a message
with {py:obj}`errctx.errors.msg` or {py:obj}`errctx.errors.format_err`.

```python
>>> from errctx.errors import format_err, msg
>>> print(msg("disk full"))
disk full
>>> print(format_err("quota exceeded for {user}", user="ada"))
quota exceeded for ada
```

# Getting the Original Back

{py:obj}`errctx.errors.Error.downcast` returns the wrapped failure if
it has the type you ask for. {py:obj}`errctx.errors.Error.into_inner`
hands it back with the context dropped, for code that doesn't know
about `Error`.

```python
>>> err.downcast(ConnectionRefusedError) is err.inner
True
>>> err.into_inner()
ConnectionRefusedError('connection refused')
```

"""  # noqa: D205
