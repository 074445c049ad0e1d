# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

"""
Linear algebra
==============

Thin wrappers around `scipy.linalg` with the input checks disabled
and the driver choices fixed for the small systems solved while mixing.

   lstsq
   lstsq_destroy

"""
from .base import *
