# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

import numpy as np

from ._environ import get_environ_variable
from .messages import AAMixError

__all__ = ["get_dtype", "dtype_complex_to_float"]


# Recognized names of the two working precisions
_precision_dtype = {
    "single": np.float32,
    "float": np.float32,
    "float32": np.float32,
    "f4": np.float32,
    "double": np.float64,
    "float64": np.float64,
    "f8": np.float64,
}


def dtype_complex_to_float(dtype):
    """Return the equivalent precision real data-type if the `dtype` is complex"""
    if dtype == np.complex128:
        return np.float64
    elif dtype == np.complex64:
        return np.float32
    return dtype


def get_dtype(var=None):
    """Returns the `numpy.dtype` of the working precision `var`

    Parameters
    ----------
    var : str or numpy.dtype, optional
       the precision, either a name (``single``, ``double``, ``float32``, ``f8``, ...)
       or a floating point data-type.
       Defaults to the ``AAMIX_PRECISION`` environment variable.

    Raises
    ------
    AAMixError
       if `var` is not a recognized single or double precision

    Examples
    --------
    >>> get_dtype("single") == np.float32
    True
    >>> get_dtype(np.complex128) == np.float64
    True
    """
    if var is None:
        var = get_environ_variable("AAMIX_PRECISION")

    if isinstance(var, str):
        try:
            return np.dtype(_precision_dtype[var.lower().strip()])
        except KeyError:
            raise AAMixError(
                f"get_dtype: unknown precision '{var}', must be one of "
                f"{sorted(_precision_dtype.keys())}"
            )

    try:
        dtype = np.dtype(dtype_complex_to_float(np.dtype(var)))
    except TypeError:
        raise AAMixError(f"get_dtype: cannot interpret {var!r} as a data-type")
    if dtype not in (np.float32, np.float64):
        raise AAMixError(
            f"get_dtype: precision must be single or double, got {dtype.name}"
        )
    return dtype
