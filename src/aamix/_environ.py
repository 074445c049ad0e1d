# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

import os
from collections.abc import Callable
from contextlib import contextmanager
from pathlib import Path
from typing import Any

__all__ = ["register_environ_variable", "get_environ_variable", "aamix_environ"]


# Local variable for retaining the variables, may be used for
# extroversion
AAMIX_ENVIRON = {}


@contextmanager
def aamix_environ(**environ):
    r"""Create a new context for temporary overwriting the aamix environment variables

    Parameters
    ----------
    environ : dict, optional
        the temporary environment variables that should be used in this context
    """
    global AAMIX_ENVIRON
    old = {}
    for key, value in environ.items():
        old[key] = AAMIX_ENVIRON[key]["value"]
        AAMIX_ENVIRON[key]["value"] = value
    try:
        yield  # nothing to yield
    finally:
        for key in environ:
            AAMIX_ENVIRON[key]["value"] = old[key]


def register_environ_variable(
    name: str,
    default: Any,
    description: str = None,
    process: Callable[[Any], Any] = None,
):
    """Register a new global aamix environment variable.

    Parameters
    -----------
    name: str
        the name of the environment variable. Needs to
        be correctly prefixed with "AAMIX_".
    default: any, optional
        the default value for this environment variable
    description: str, optional
        a description of what this variable does.
    process : callable, optional
        a callable which will be used to post-process the value when retrieving
        it.

    Raises
    ------
    ValueError
       if `name` does not start with "AAMIX_"
    NameError
       if `name` has already been registered
    """
    if not name.startswith("AAMIX_"):
        raise ValueError("register_environ_variable: name should start with 'AAMIX_'")

    if process is None:

        def process(arg):
            return arg

    global AAMIX_ENVIRON

    if name in AAMIX_ENVIRON:
        raise NameError(f"register_environ_variable: name {name} already registered")

    AAMIX_ENVIRON[name] = {
        "default": default,
        "description": description,
        "process": process,
        "value": os.environ.get(name, default),
    }


def get_environ_variable(name: str):
    """Gets the value of a registered environment variable.

    Parameters
    -----------
    name: str
        the name of the environment variable.
    """
    variable = AAMIX_ENVIRON[name]
    return variable["process"](variable["value"])


def _abs_path(path: str):
    path = Path(path)
    return path.resolve()


register_environ_variable(
    "AAMIX_LOG_FILE",
    "",
    "Log file to write into. If empty, do not log.",
    process=_abs_path,
)

register_environ_variable(
    "AAMIX_LOG_LEVEL",
    "INFO",
    "Define the log level used when writing to the file. Should be importable from logging module.",
    lambda x: x.upper(),
)

register_environ_variable(
    "AAMIX_PRECISION",
    "double",
    "Default floating point precision of the accelerator buffers (single or double).",
    process=lambda val: val.lower().strip(),
)
