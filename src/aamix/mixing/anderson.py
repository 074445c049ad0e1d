# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
import numpy.typing as npt

from aamix._help import get_dtype
from aamix._internal import set_module
from aamix.linalg import lstsq
from aamix.messages import info, warn

from .base import BaseMixer, T

__all__ = ["AndersonAcceleration", "AndersonMixer"]

_log = logging.getLogger(__name__)

# Floor of the residual delta norms, below this the floor is used
# as the normalization divisor
_EPS = 1e-14


@set_module("aamix.mixing")
class AndersonAcceleration:
    r"""Anderson acceleration (type-I, Anderson-DIIS) of a fixed-point iteration

    Given evaluations :math:`\mathbf g_k = G(\mathbf u_k)` of a fixed-point map
    the next iterate is calculated from the last :math:`m_k\le m` differences

    .. math::

       \Delta\mathbf F_i &= \mathbf F_{i+1} - \mathbf F_i, \qquad
       \mathbf F_i = \mathbf g_i - \mathbf u_i
       \\
       \Delta\mathbf G_i &= \mathbf g_{i+1} - \mathbf g_i
       \\
       \boldsymbol\theta &= \operatorname{argmin}_{\boldsymbol\theta}
            \big\|\mathbf F_k - \Delta\mathbf F \boldsymbol\theta\big\|
       \\
       \mathbf u_{k+1} &= \mathbf g_k - \Delta\mathbf G \boldsymbol\theta

    The residual differences are normalized before entering the normal
    equations :math:`\mathbf M = \Delta\mathbf F^T\Delta\mathbf F`, and only the
    row/column of :math:`\mathbf M` belonging to the newest difference is
    updated per call. The normal equations are solved by a complete orthogonal
    decomposition so rank deficient histories yield the minimum norm
    solution.

    The history is a ring buffer of `m` slots. Each slot is a *row* of the
    internal ``(m, dim)`` arrays. A new difference is started on one call
    and committed into the slot at `col_idx` on the following call, once
    the current values are known.

    The object has to be initialized with `init` before calling `compute`
    or `replace`.

    Parameters
    ----------
    dtype : str or numpy.dtype, optional
       working precision of all buffers (``single`` or ``double``),
       defaults to the ``AAMIX_PRECISION`` environment variable

    Examples
    --------
    >>> def G(u):
    ...     return 0.5 * u + 1
    >>> aa = AndersonAcceleration()
    >>> aa.init(2, 1, [0.])
    >>> u = aa.compute(G(np.zeros(1)))
    >>> for _ in range(3):
    ...     u = aa.compute(G(u))
    >>> np.allclose(u, 2)
    True
    """

    def __init__(self, dtype: Optional[Any] = None):
        self._dtype = get_dtype(dtype)
        self._eps = self._dtype.type(_EPS)
        self._rcond = np.finfo(self._dtype).eps
        self._m = -1
        self._dim = -1
        self._iter = -1
        self._col_idx = -1
        self._rank = 0

    def __str__(self) -> str:
        r"""String representation"""
        return (
            f"{self.__class__.__name__}{{history: {self.history}/{self._m}, "
            f"dim: {self._dim}, iteration: {self._iter}, dtype: {self._dtype.name}}}"
        )

    def __repr__(self) -> str:
        return f"<{self.__module__}.{self}>"

    @property
    def dtype(self) -> np.dtype:
        """Data-type of all internal buffers"""
        return self._dtype

    @property
    def eps(self) -> np.floating:
        """Lower bound of the normalization divisors"""
        return self._eps

    @property
    def initialized(self) -> bool:
        """Whether `init` has been called"""
        return self._iter >= 0

    @property
    def history_max(self) -> int:
        """Maximum number of history slots (:math:`m`)"""
        return self._m

    @property
    def dim(self) -> int:
        """Dimension of the iterates"""
        return self._dim

    @property
    def iteration(self) -> int:
        """Number of `compute` calls since `init` (or `reset`)"""
        return self._iter

    @property
    def col_idx(self) -> int:
        """Slot the next difference will be committed to"""
        return self._col_idx

    @property
    def history(self) -> int:
        """Number of committed history slots"""
        if self._iter < 1:
            return 0
        return min(self._m, self._iter - 1)

    @property
    def rank(self) -> int:
        """Numerical rank of the latest mixing system"""
        return self._rank

    @property
    def u(self) -> npt.NDArray:
        """Current iterate (internal buffer, valid until the next mutating call)"""
        return self._u

    @property
    def residual(self) -> npt.NDArray:
        r"""Residual :math:`\mathbf g - \mathbf u` of the latest `compute` call"""
        return self._F

    @property
    def coefficients(self) -> npt.NDArray:
        r"""Mixing coefficients :math:`\boldsymbol\theta` of the committed slots (normalized basis)"""
        return self._theta[: self.history]

    @property
    def scale(self) -> npt.NDArray:
        """Normalization divisors of the committed residual differences"""
        return self._dF_scale[: self.history]

    @property
    def gram(self) -> npt.NDArray:
        """Gram matrix of the committed (normalized) residual differences"""
        n = self.history
        return self._M[:n, :n]

    @property
    def residual_deltas(self) -> npt.NDArray:
        """Committed normalized residual differences, one slot per row (storage order)"""
        return self._dF[: self.history]

    @property
    def iterate_deltas(self) -> npt.NDArray:
        """Committed map-evaluation differences, one slot per row (storage order)"""
        return self._dG[: self.history]

    def _vector(self, v: npt.ArrayLike) -> npt.NDArray:
        v = np.ravel(v)
        assert v.size == self._dim, f"expected a vector of length {self._dim}"
        return v

    def init(self, m: int, d: int, u0: npt.ArrayLike) -> None:
        r"""Allocate all buffers and set the initial iterate

        All previous history is discarded.

        Parameters
        ----------
        m :
           number of previous iterations used for the mixing
        d :
           dimension of the iterates
        u0 :
           initial iterate, of length `d`
        """
        assert m > 0, "History size must be larger than 0"
        assert d > 0, "Dimension must be larger than 0"
        if self._iter > 0:
            info(
                f"{self.__class__.__name__}.init discards {self.history} history steps"
            )

        dtype = self._dtype
        self._m = m
        self._dim = d
        self._u = np.empty(d, dtype=dtype)
        self._F = np.zeros(d, dtype=dtype)
        self._g = np.empty(d, dtype=dtype)
        # start of the next (pending) differences
        self._F_prev = np.zeros(d, dtype=dtype)
        self._g_prev = np.zeros(d, dtype=dtype)
        self._dF = np.zeros([m, d], dtype=dtype)
        self._dG = np.zeros([m, d], dtype=dtype)
        self._M = np.zeros([m, m], dtype=dtype)
        self._theta = np.zeros(m, dtype=dtype)
        self._dF_scale = np.ones(m, dtype=dtype)

        self._u[:] = self._vector(u0)
        self._iter = 0
        self._col_idx = 0
        self._rank = 0
        _log.debug(f"init {self}", extra={"obj": self})

    def reset(self, u0: Optional[npt.ArrayLike] = None) -> None:
        """Discard the history while retaining the allocated buffers

        Parameters
        ----------
        u0 :
           new iterate, if not passed the current iterate is retained
        """
        assert self._iter >= 0, f"{self.__class__.__name__}.init must be called first"
        if u0 is not None:
            self._u[:] = self._vector(u0)
        self._iter = 0
        self._col_idx = 0
        self._rank = 0
        _log.debug(f"reset {self}", extra={"obj": self})

    def replace(self, u: npt.ArrayLike) -> None:
        """Overwrite the current iterate, the history is left untouched

        Used when the caller rejects the accelerated step and continues
        from another iterate.

        Parameters
        ----------
        u :
           the new iterate, of length `dim`
        """
        assert self._iter >= 0, f"{self.__class__.__name__}.init must be called first"
        self._u[:] = self._vector(u)

    def compute(self, g: npt.ArrayLike) -> npt.NDArray:
        r"""Calculate the next iterate from the map evaluated at the current iterate

        Parameters
        ----------
        g :
           the fixed-point map evaluated at the iterate last returned
           (or the initial iterate for the first call)

        Returns
        -------
        numpy.ndarray
            the next iterate, this is the internal buffer and is only
            valid until the next call of `compute`, `replace` or `reset`
        """
        assert self._iter >= 0, f"{self.__class__.__name__}.init must be called first"
        # copy, `g` may share memory with the iterate
        g_in = self._vector(g)
        g = self._g
        g[:] = g_in
        F = self._F
        np.subtract(g, self._u, out=F)

        if self._iter == 0:
            self._F_prev[:] = F
            self._g_prev[:] = g
            self._u[:] = g
            self._iter += 1
            return self._u

        m = self._m
        eps = self._eps
        col = self._col_idx

        # commit the pending differences
        dF = self._dF[col]
        np.subtract(F, self._F_prev, out=dF)
        np.subtract(g, self._g_prev, out=self._dG[col])

        scale = max(eps, np.linalg.norm(dF))
        self._dF_scale[col] = scale
        dF /= scale

        m_k = min(m, self._iter)
        theta = self._theta
        M = self._M
        if m_k == 1:
            theta[0] = 0
            dF_sqrnorm = dF.dot(dF)
            M[0, 0] = dF_sqrnorm
            self._rank = 0
            if np.sqrt(dF_sqrnorm) > eps:
                theta[0] = dF.dot(F) / dF_sqrnorm
                self._rank = 1

        else:
            # only the row/column of the new slot has changed
            hist_dF = self._dF[:m_k]
            inner = hist_dF.dot(dF)
            M[col, :m_k] = inner
            M[:m_k, col] = inner

            # relative pivots below 10 * m_k * machine precision are treated as zero
            theta[:m_k], _, self._rank, _ = lstsq(
                M[:m_k, :m_k],
                hist_dF.dot(F),
                cond=10 * m_k * self._rcond,
                overwrite_b=True,
            )
            if self._rank < m_k:
                _log.debug(
                    f"rank deficient mixing system {self._rank}/{m_k}",
                    extra={"obj": self},
                )

        # the coefficients are in the normalized basis, dG is not
        coeff = theta[:m_k] / self._dF_scale[:m_k]
        u = self._u
        np.dot(coeff, self._dG[:m_k], out=u)
        np.subtract(g, u, out=u)

        # start the next differences
        self._col_idx = (col + 1) % m
        self._F_prev[:] = F
        self._g_prev[:] = g

        self._iter += 1
        return u


@set_module("aamix.mixing")
class AndersonMixer(BaseMixer):
    r"""Anderson acceleration as a mixer

    The mixer wraps an `AndersonAcceleration` object and follows the mixing
    protocol: it is called with the input :math:`\mathbf f` of the fixed-point
    map and the difference :math:`\delta\mathbf f = G(\mathbf f) - \mathbf f`
    and returns the next input.

    When the passed :math:`\mathbf f` differs from the accelerators iterate (e.g.
    because another mixer took the previous step) the accelerator iterate is
    replaced, while the history is retained.

    Parameters
    ----------
    history : int, optional
       number of previous iterations used for the mixing
    dtype : str or numpy.dtype, optional
       working precision of the accelerator

    Examples
    --------
    >>> mix = AndersonMixer(history=5)
    >>> f = np.linspace(0, 2, 10)
    >>> for _ in range(20):
    ...     f = mix(f, np.cos(f) - f)
    """

    __slots__ = ("_accel", "_history", "_shape")

    def __init__(self, history: int = 2, dtype: Optional[Any] = None):
        assert history > 0, "History size must be larger than 0"
        self._history = history
        self._accel = AndersonAcceleration(dtype)
        self._shape = None

    def __str__(self) -> str:
        r"""String representation"""
        accel = str(self._accel).replace("\n", "\n  ")
        return f"{self.__class__.__name__}{{history: {self._history},\n  {accel}\n}}"

    def __repr__(self) -> str:
        r"""String representation"""
        hist = self._accel.history
        return f"{self.__class__.__name__}{{history={hist}|{self._history}}}"

    @property
    def accelerator(self) -> AndersonAcceleration:
        """The accelerator used for the mixing"""
        return self._accel

    @property
    def history(self) -> int:
        """Maximum number of history steps"""
        return self._history

    def clear(self) -> None:
        """Discard the accumulated history"""
        if self._accel.initialized:
            self._accel.reset()

    def __call__(self, f: T, df: T) -> T:
        r"""Calculate a new variable :math:`\mathbf f'` using input and output of the functional

        Parameters
        ----------
        f : array_like
           input variable for the functional
        df : array_like
           derivative of the functional, ``G(f) - f``
        """
        f = np.asarray(f)
        accel = self._accel
        g = (f + df).ravel()

        if self._shape is None or f.size != accel.dim:
            if self._shape is not None:
                warn(
                    f"{self.__class__.__name__} input size changed from "
                    f"{accel.dim} to {f.size}, restarting the history"
                )
            accel.init(self._history, f.size, f.ravel())
        elif not np.array_equal(accel.u, f.ravel()):
            accel.replace(f.ravel())
        self._shape = f.shape

        return accel.compute(g).reshape(self._shape).copy()
