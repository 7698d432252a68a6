import pickle

from errctx.errors import Error, Message, format_err, msg
from pytest import raises


def test_wrap_keeps_identity(refused):
    err = Error(refused)

    assert err.inner is refused
    assert err.downcast(ConnectionRefusedError) is refused
    assert err.downcast(type(refused)).port == 5432
    assert err.context == ()


def test_downcast_wrong_type_is_none(refused):
    err = Error(refused)

    assert err.downcast(KeyError) is None
    assert not err.is_instance(KeyError)
    assert err.is_instance(OSError)


def test_downcast_never_sees_container(refused):
    err = Error(refused)

    assert err.downcast(Error) is None


def test_render_without_context_is_inner_text(refused):
    assert str(Error(refused)) == "connection refused"


def test_render_context_in_attachment_order():
    err = msg("boom")
    err.extend_context("a")
    err.extend_context("b")
    err.extend_context("c")

    assert str(err) == "boom\na\nb\nc"
    assert err.context == ("a", "b", "c")


def test_extend_context_stringifies():
    err = msg("boom")
    err.extend_context(42)

    assert err.context == ("42",)


def test_context_view_is_read_only():
    err = msg("boom")
    err.extend_context("a")
    view = err.context
    err.extend_context("b")

    assert view == ("a",)
    with raises(AttributeError):
        err.context = ("x",)


def test_end_to_end_scenario(refused):
    err = Error.from_exc(refused)
    err.extend_context("while opening session")
    err.extend_context("while handling request 42")

    assert str(err).splitlines() == [
        "connection refused",
        "while opening session",
        "while handling request 42",
    ]


def test_msg_round_trip():
    err = msg("disk full")

    assert str(err) == "disk full"
    assert isinstance(err.inner, Message)
    assert err.inner.message == "disk full"


def test_error_msg_classmethod():
    assert str(Error.msg("disk full")) == "disk full"


def test_format_err():
    err = format_err("disk {path} is {pct}% full", path="/var", pct=97)

    assert str(err) == "disk /var is 97% full"
    assert err.source() is None


def test_from_exc_passes_error_through(refused):
    err = Error(refused)

    assert Error.from_exc(err) is err


def test_cant_nest_errors(refused):
    with raises(TypeError):
        Error(Error(refused))


def test_cant_wrap_non_exception():
    with raises(TypeError):
        Error("not an exception")


def test_cant_wrap_base_exception():
    with raises(TypeError):
        Error(KeyboardInterrupt())


def test_source_is_explicit_cause():
    try:
        try:
            raise KeyError("host")
        except KeyError as ex:
            raise ValueError("bad config") from ex
    except ValueError as ex:
        err = Error(ex)

    assert isinstance(err.source(), KeyError)
    assert err.source() is err.inner.__cause__


def test_source_is_implicit_context():
    try:
        try:
            raise KeyError("host")
        except KeyError:
            raise ValueError("bad config")  # noqa: B904
    except ValueError as ex:
        err = Error(ex)

    assert isinstance(err.source(), KeyError)


def test_source_respects_suppressed_context():
    try:
        try:
            raise KeyError("host")
        except KeyError:
            raise ValueError("bad config") from None
    except ValueError as ex:
        err = Error(ex)

    assert err.source() is None


def test_source_none_without_cause(refused):
    assert Error(refused).source() is None


def test_chain_skips_container():
    try:
        try:
            try:
                raise OSError("disk")
            except OSError as ex:
                raise KeyError("cache") from ex
        except KeyError as ex:
            raise ValueError("load") from ex
    except ValueError as ex:
        err = Error(ex)
    err.extend_context("while starting")

    assert [type(e) for e in err.chain()] == [ValueError, KeyError, OSError]


def test_into_inner_drops_context(refused):
    err = Error(refused)
    err.extend_context("while opening session")

    inner = err.into_inner()

    assert inner is refused
    assert str(inner) == "connection refused"


def test_attributes_delegate_to_inner(refused):
    err = Error(refused)

    assert err.port == 5432
    assert err.strerror is None


def test_missing_attribute_raises(refused):
    err = Error(refused)

    with raises(AttributeError):
        err.not_a_thing  # noqa: B018


def test_dunders_do_not_delegate():
    inner = ValueError("bad")
    inner.__notes__ = ["from inner"]
    err = Error(inner)

    assert getattr(err, "__notes__", None) is None


def test_repr():
    err = msg("disk full")
    err.extend_context("while saving")

    assert repr(err) == "Error(Message('disk full'), context=['while saving'])"


def test_is_raisable(refused):
    err = Error(refused)
    err.extend_context("while opening session")

    with raises(Error, match="while opening session") as info:
        raise err

    assert info.value.inner is refused


def test_pickle_keeps_context():
    err = Error(ValueError("bad"))
    err.extend_context("while parsing")

    loaded = pickle.loads(pickle.dumps(err))

    assert isinstance(loaded.inner, ValueError)
    assert loaded.context == ("while parsing",)
    assert str(loaded) == "bad\nwhile parsing"


def test_pickle_message():
    loaded = pickle.loads(pickle.dumps(msg("disk full")))

    assert loaded.inner.message == "disk full"
    assert str(loaded) == "disk full"
