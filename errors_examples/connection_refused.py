"""
A request handler fails because the database refuses the connection.
Each layer returns an outcome and says what it was doing, so the
printed error reads from the root cause up to the request.
"""

from errctx.result import Err, context, with_context


def connect(port):
    # XXX: Error here
    return Err(ConnectionRefusedError("connection refused"))


def open_session():
    return context(connect(5432), "while opening session")


def handle(request_id):
    return with_context(open_session(), lambda: f"while handling request {request_id}")


if __name__ == "__main__":
    out = handle(42)
    if out.is_err():
        print(out.error)
        print("errno:", out.error.errno)
