# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

""" Global aamix fixtures """
from functools import partial

import numpy as np
import pytest


@pytest.fixture(scope="session")
def aamix_tolerance():
    r32 = (1e-5, 1e-5)
    r64 = (1e-10, 1e-10)
    return {
        np.float32: r32,
        np.float32(0).dtype: r32,
        np.float64: r64,
        np.float64(0).dtype: r64,
        None: r64,
    }


@pytest.fixture(scope="session")
def aamix_allclose(aamix_tolerance):
    def factory(dtype):
        atol, rtol = aamix_tolerance[dtype]
        return partial(np.allclose, atol=atol, rtol=rtol)

    return {key: factory(key) for key in aamix_tolerance.keys()}


@pytest.fixture(scope="session", params=[np.float32, np.float64])
def aamix_float(request, aamix_tolerance):
    yield (request.param,) + aamix_tolerance[request.param]


def pytest_report_header(config, start_path):
    from aamix._environ import get_environ_variable

    return [f"aamix-test: AAMIX_PRECISION={get_environ_variable('AAMIX_PRECISION')}"]


def pytest_configure(config):
    # Locally manage pytest.ini input
    for mark in [
        "mixing",
        "anderson",
        "linalg",
        "messages",
        "environ",
        "help",
        "version",
    ]:
        config.addinivalue_line(
            "markers", f"{mark}: mark test to run only on named environment"
        )
