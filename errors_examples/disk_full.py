"""
A failure that starts from a message instead of an existing exception.
The top level hands it to code that only knows plain exceptions.
"""

from errctx.errors import format_err, msg


def reserve(path, needed, free):
    if needed > free:
        return format_err("need {} bytes on {}, have {}", needed, path, free)
    return None


if __name__ == "__main__":
    print(msg("disk full"))
    err = reserve("/var/spool", 4096, 512)
    err.extend_context("while writing spool file")
    print(err)
    print(repr(err.into_inner()))
