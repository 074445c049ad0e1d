# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# isort: skip_file
from __future__ import annotations

"""
aamix
=====

Anderson acceleration for fixed-point iterations.

The caller drives the iteration and evaluates the fixed-point map,
aamix only calculates the next iterate from the history of
map evaluations.

Accelerator
===========

   AndersonAcceleration

Mixers
======

   AndersonMixer
   LinearMixer
   StepMixer

"""
import logging

# instantiate the logger, but we will not use it here...
logging.getLogger(__name__)

__author__ = "aamix developers"
__license__ = "MPL-2.0"

import aamix._version as _version

__version__ = _version.version
__version_tuple__ = _version.version_tuple

# do not expose this helper package
del _version

from aamix._environ import get_environ_variable

# Immediately check if the file is logable
log_file = get_environ_variable("AAMIX_LOG_FILE")
if not log_file.is_dir():
    # Create the logging
    log_lvl = get_environ_variable("AAMIX_LOG_LEVEL")

    # Start the logging to the file
    logging.basicConfig(filename=str(log_file), level=getattr(logging, log_lvl))
    del log_lvl
del log_file

# Import warning classes
from .messages import AAMixException, AAMixWarning, AAMixInfo, AAMixError

import aamix.linalg as linalg
import aamix.mixing as mixing

from .mixing import *
