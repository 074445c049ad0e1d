# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

from functools import partial as _partial

import scipy.linalg as sl

__all__ = []


def _append(name, suffix):
    return [name + s for s in suffix]


# Least squares through the complete orthogonal factorization (xGELSY).
# The column pivoted QR reveals the numerical rank, and for rank deficient
# matrices the minimum norm solution is returned instead of failing.
lstsq = _partial(
    sl.lstsq,
    check_finite=False,
    overwrite_a=False,
    overwrite_b=False,
    lapack_driver="gelsy",
)
lstsq_destroy = _partial(
    sl.lstsq,
    check_finite=False,
    overwrite_a=True,
    overwrite_b=True,
    lapack_driver="gelsy",
)
__all__ += _append("lstsq", ["", "_destroy"])
