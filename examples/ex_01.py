#!/usr/bin/env python
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

# This example solves the fixed point u = cos(u) on a grid of
# starting values, once with plain iteration and once with
# Anderson acceleration using 5 history steps.

from __future__ import annotations

import numpy as np

import aamix

u0 = np.linspace(0, 7, 1000)

# Plain fixed-point iteration
u = u0.copy()
for plain in range(1, 1000):
    g = np.cos(u)
    if np.fabs(g - u).max() < 1e-8:
        break
    u = g

# Accelerated iteration, the accelerator only sees the map values
aa = aamix.AndersonAcceleration()
aa.init(5, u0.size, u0)
u = u0.copy()
for accel in range(1, 1000):
    g = np.cos(u)
    if np.fabs(g - u).max() < 1e-8:
        break
    u = aa.compute(g)

print(f"plain iterations: {plain}")
print(f"anderson iterations: {accel}")
