"""`pytest` config for `pytests/`.

This sets up our fixtures.

"""

from pytest import fixture


class RefusedError(ConnectionRefusedError):
    """A qualifying failure with extra state to check identity with."""

    def __init__(self, msg, port):
        super().__init__(msg)
        self.port = port


@fixture
def refused():
    """A fresh failure whose display text is `"connection refused"`."""
    yield RefusedError("connection refused", 5432)


@fixture
def calls():
    """A list to count side effects in."""
    yield []
