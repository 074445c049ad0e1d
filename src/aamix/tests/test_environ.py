# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

import pytest

from aamix._environ import (
    AAMIX_ENVIRON,
    aamix_environ,
    get_environ_variable,
    register_environ_variable,
)

pytestmark = pytest.mark.environ


def test_registered():
    for name in ("AAMIX_LOG_FILE", "AAMIX_LOG_LEVEL", "AAMIX_PRECISION"):
        assert name in AAMIX_ENVIRON
        assert AAMIX_ENVIRON[name]["description"]


def test_log_level_upper():
    with aamix_environ(AAMIX_LOG_LEVEL="debug"):
        assert get_environ_variable("AAMIX_LOG_LEVEL") == "DEBUG"


def test_context_restores():
    old = get_environ_variable("AAMIX_PRECISION")
    with aamix_environ(AAMIX_PRECISION=" Single "):
        assert get_environ_variable("AAMIX_PRECISION") == "single"
    assert get_environ_variable("AAMIX_PRECISION") == old


def test_register_prefix():
    with pytest.raises(ValueError):
        register_environ_variable("NOT_AAMIX", 1)


def test_register_twice():
    with pytest.raises(NameError):
        register_environ_variable("AAMIX_PRECISION", "double")


def test_register_process(monkeypatch):
    monkeypatch.setenv("AAMIX_TEST_INT", "3")
    register_environ_variable("AAMIX_TEST_INT", 1, "test variable", process=int)
    try:
        assert get_environ_variable("AAMIX_TEST_INT") == 3
    finally:
        del AAMIX_ENVIRON["AAMIX_TEST_INT"]
