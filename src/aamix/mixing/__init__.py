# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

"""
Mixing objects
==============

Anderson acceleration of fixed-point iterations.

`AndersonAcceleration` is the accelerator itself, fed with one map
evaluation at a time. The mixers wrap it (and a plain linear step) in a
common calling convention ``mixer(f, df)`` such that they may be
alternated with `StepMixer`.

   AndersonAcceleration
   AndersonMixer
   LinearMixer
   StepMixer
"""

from .base import *
from .linear import *
from .anderson import *
