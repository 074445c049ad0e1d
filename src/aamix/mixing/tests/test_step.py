# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

import numpy as np
import pytest

from aamix.mixing import AndersonMixer, LinearMixer, StepMixer

pytestmark = pytest.mark.mixing


def test_step_manual():
    mix1 = LinearMixer()
    mix2 = AndersonMixer()

    # now merge them
    def gen():
        yield mix1
        yield mix1
        yield mix2
        yield mix2

    mixer = StepMixer(gen)
    # Now lets test it
    f = np.random.rand(4) + 1
    df = np.random.rand(4) + 0.2

    # test 3 times
    for _ in range(3):
        # we start with linearmixer
        for _ in range(2):
            assert isinstance(mixer.mixer, LinearMixer)
            mixer(f, df)

        for _ in range(2):
            assert isinstance(mixer.mixer, AndersonMixer)
            out = mixer(f, df)
            assert np.all(np.isfinite(out))


def test_step_yield_repeat():
    mix1 = LinearMixer()
    mix2 = AndersonMixer()
    mix1_rep2 = StepMixer.yield_repeat(mix1, 2)
    mix2_rep2 = StepMixer.yield_repeat(mix2, 2)

    # now merge them
    def gen():
        yield from mix1_rep2()
        yield from mix2_rep2()

    mixer = StepMixer(gen)
    # Now lets test it
    f = np.random.rand(4) + 1
    df = np.random.rand(4) + 0.2

    # test 3 times
    for _ in range(3):
        # we start with linearmixer
        for _ in range(2):
            assert isinstance(mixer.mixer, LinearMixer)
            mixer(f, df)

        for _ in range(2):
            assert isinstance(mixer.mixer, AndersonMixer)
            mixer(f, df)


def test_step_yield_repeat_n():
    mix = LinearMixer()
    r = StepMixer.yield_repeat(mix, 1)

    g = r()
    next(g)
    with pytest.raises(StopIteration):
        next(g)

    r = StepMixer.yield_repeat(mix, 2)
    g = r()
    next(g)
    next(g)
    with pytest.raises(StopIteration):
        next(g)


def test_step_yield_chain():
    mix1 = LinearMixer()
    mix2 = AndersonMixer()
    mix1_rep2 = StepMixer.yield_repeat(mix1, 2)
    mix2_rep2 = StepMixer.yield_repeat(mix2, 2)

    # now merge them
    mixer = StepMixer(mix1_rep2, mix2_rep2)

    # Now lets test it
    f = np.random.rand(4) + 1
    df = np.random.rand(4) + 0.2

    # test 3 times
    for _ in range(3):
        # we start with linearmixer
        for _ in range(2):
            assert isinstance(mixer.mixer, LinearMixer)
            mixer(f, df)

        for _ in range(2):
            assert isinstance(mixer.mixer, AndersonMixer)
            mixer(f, df)


def test_step_getattr():
    mix = AndersonMixer(history=3)
    mixer = StepMixer(StepMixer.yield_repeat(mix, 1))
    assert mixer.history == 3
    assert mixer.accelerator is mix.accelerator


def test_step_safeguard_convergence():
    # plain fixed-point steps in between accelerated steps
    anderson = AndersonMixer(history=4)
    linear = LinearMixer(1.0)
    mixer = StepMixer(
        StepMixer.yield_repeat(anderson, 3), StepMixer.yield_repeat(linear, 1)
    )

    f = np.linspace(0, 7, 1000)
    dmax = 1
    i = 0
    while dmax > 1e-7:
        i += 1
        df = np.cos(f) - f
        dmax = np.fabs(df).max()
        f = mixer(f, df)
        assert i < 200

    # the linear steps only replace the accelerator iterate,
    # the accelerator is never restarted
    assert anderson.accelerator.iteration == i - i // 4
    assert anderson.accelerator.history == min(4, i - i // 4 - 1)


def test_step_restart():
    anderson = AndersonMixer(history=4)

    def gen():
        for _ in range(3):
            yield anderson
        anderson.clear()

    mixer = StepMixer(gen)
    f = np.linspace(0, 1, 5)
    for _ in range(2):
        f = mixer(f, np.cos(f) - f)
    assert anderson.accelerator.iteration == 2

    # stepping past the last yield clears the history
    df = np.cos(f) - f
    assert np.allclose(mixer(f, df), f + df)
    assert anderson.accelerator.iteration == 1
