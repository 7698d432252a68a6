"""Project-wide `pytest` config.

This sets up our documentation test config.

See the [documentation for
Sybil](https://sybil.readthedocs.io/en/latest/index.html) for details
here.

This config tells Sybil to read the _Python source files_ in `pysrc/`
and look for Markdown code blocks in their docstrings and run them as
doctests. It reads the source, not the installed version of `errctx`.

"""
import doctest

from errctx.tracing import setup_tracing
from sybil import Sybil
from sybil.parsers import myst


def pytest_addoption(parser):
    """Add a `--errctx-log-level` CLI option to pytest.

    This will control the `setup_tracing` log level.

    """
    parser.addoption(
        "--errctx-log-level",
        action="store",
        choices=["ERROR", "WARN", "INFO", "DEBUG", "TRACE"],
    )


def pytest_configure(config):
    """This will run on pytest init."""
    log_level = config.getoption("--errctx-log-level")
    if log_level:
        setup_tracing(log_level=log_level)


doctest_option_flags = doctest.ELLIPSIS | doctest.NORMALIZE_WHITESPACE

pytest_collect_file = Sybil(
    parsers=[
        myst.PythonCodeBlockParser(doctest_optionflags=doctest_option_flags),
        myst.SkipParser(),
    ],
    path="./pysrc",
    patterns=["*.py"],
).pytest()
