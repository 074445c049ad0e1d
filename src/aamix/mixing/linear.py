# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

from aamix._internal import set_module

from .base import BaseWeightMixer, T

__all__ = ["LinearMixer"]


@set_module("aamix.mixing")
class LinearMixer(BaseWeightMixer):
    r"""Linear mixing

    The linear mixing is solely defined using a weight, and the resulting functional
    may then be calculated via:

    .. math::

        \mathbf f^{i+1} = \mathbf f^i + w \delta \mathbf f^i

    A weight of 1 is the plain fixed-point step.

    Parameters
    ----------
    weight : float, optional
       mixing weight
    """

    __slots__ = ()

    def __call__(self, f: T, df: T) -> T:
        r"""Calculate a new variable :math:`\mathbf f'` using input and output of the functional

        Parameters
        ----------
        f : object
           input variable for the functional
        df : object
           derivative of the functional
        """
        return f + self.weight * df
