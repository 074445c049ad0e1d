# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

import numpy as np
import pytest

from aamix import AAMixError
from aamix._environ import aamix_environ
from aamix._help import get_dtype

pytestmark = pytest.mark.help


@pytest.mark.parametrize("name", ["single", "float32", "f4", "SINGLE", np.float32])
def test_get_dtype_single(name):
    assert get_dtype(name) == np.float32


@pytest.mark.parametrize(
    "name", ["double", "float64", "f8", np.float64, np.complex128, np.dtype("f8")]
)
def test_get_dtype_double(name):
    assert get_dtype(name) == np.float64


def test_get_dtype_environ():
    with aamix_environ(AAMIX_PRECISION="single"):
        assert get_dtype() == np.float32
    with aamix_environ(AAMIX_PRECISION="double"):
        assert get_dtype() == np.float64


@pytest.mark.parametrize("name", ["half", "quad", np.int32, np.float16])
def test_get_dtype_fail(name):
    with pytest.raises(AAMixError):
        get_dtype(name)
