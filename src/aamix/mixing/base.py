# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable, Iterator
from typing import Any, TypeVar, Union

from aamix._internal import set_module

__all__ = [
    "BaseMixer",
    "BaseWeightMixer",
    "StepMixer",
]

T = TypeVar("T")
TypeBaseMixer = "BaseMixer"
TypeStepMixer = "StepMixer"
TypeWeight = Union[float, int]
# we don't use the Generator as we don't use the SendType/ReturnType
TypeStepCallable = Callable[[], Iterator[TypeBaseMixer]]


@set_module("aamix.mixing")
class BaseMixer:
    r"""Base class mixer

    A mixer is called with the input of a fixed-point map, :math:`\mathbf f`,
    and the difference :math:`\delta\mathbf f = G(\mathbf f) - \mathbf f`,
    and returns the next input.
    """

    __slots__ = ()

    @abstractmethod
    def __call__(self, f: T, df: T, *args: Any, **kwargs: Any) -> T:
        """Mix quantities based on arguments"""


@set_module("aamix.mixing")
class BaseWeightMixer(BaseMixer):
    r"""Base class mixer with a mixing weight"""

    __slots__ = ("_weight",)

    def __init__(self, weight: TypeWeight = 0.2):
        self.set_weight(weight)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}{{weight: {self.weight:.4f}}}"

    __repr__ = __str__

    @property
    def weight(self) -> TypeWeight:
        """This mixers mixing weight, the weight is the fractional contribution of the derivative"""
        return self._weight

    def set_weight(self, weight: TypeWeight):
        """Set a new weight for this mixer

        Parameters
        ----------
        weight :
           the new weight for this mixer, it must be bigger than 0
        """
        assert weight > 0, "Weight must be larger than 0"
        self._weight = weight


@set_module("aamix.mixing")
class StepMixer(BaseMixer):
    """Cycle through mixers as dictated by generator functions

    Each argument is a callable returning an iterator of mixers. The
    iterators are consumed in turn, and once all are exhausted the
    sequence starts over. Any code placed between the ``yield``
    statements runs when the mixer is stepped, e.g. to clear the
    Anderson history.

    Examples
    --------

    Safeguard the acceleration with a linear step after every third
    Anderson step:

    >>> mixer = StepMixer(
    ...        StepMixer.yield_repeat(anderson, 3),
    ...        StepMixer.yield_repeat(linear, 1))

    Restart the Anderson history every 50 steps:

    >>> def restart():
    ...     yield from [anderson] * 50
    ...     anderson.clear()
    >>> mixer = StepMixer(restart)
    """

    __slots__ = ("_yield_func", "_yield_mixer", "_mixer")

    def __init__(self, *yield_funcs: TypeStepCallable):
        self._yield_func = self.yield_chain(*yield_funcs)
        self._yield_mixer = self._yield_func()
        # the current mixer must exist for attribute lookups
        self._mixer = next(self._yield_mixer)

    def next(self) -> TypeBaseMixer:
        """Step to the following mixer and return the one that was current"""
        mixer = self._mixer
        nxt = next(self._yield_mixer, None)
        if nxt is None:
            # start over
            self._yield_mixer = self._yield_func()
            nxt = next(self._yield_mixer)
        self._mixer = nxt
        return mixer

    @property
    def mixer(self) -> TypeBaseMixer:
        """Mixer used in the next call"""
        return self._mixer

    def __call__(self, f: T, df: T, *args: Any, **kwargs: Any) -> T:
        return self.next()(f, df, *args, **kwargs)

    def __getattr__(self, attr: str) -> Any:
        """Look up unknown attributes on the current mixer"""
        return getattr(self.mixer, attr)

    @classmethod
    def yield_repeat(
        cls: TypeStepMixer, mixer: TypeBaseMixer, n: int
    ) -> TypeStepCallable:
        """Generator function yielding `mixer` `n` times"""
        assert n > 0, "Repeat count must be positive"

        def yield_repeat() -> Iterator[TypeBaseMixer]:
            for _ in range(n):
                yield mixer

        return yield_repeat

    @classmethod
    def yield_chain(
        cls: TypeStepMixer, *yield_funcs: TypeStepCallable
    ) -> TypeStepCallable:
        """Generator function yielding from each of `yield_funcs` in order

        Parameters
        ----------
        *yield_funcs :
             callables returning mixer iterators
        """
        if len(yield_funcs) == 1:
            return yield_funcs[0]

        def yield_chain() -> Iterator[TypeBaseMixer]:
            for yield_func in yield_funcs:
                yield from yield_func()

        return yield_chain
