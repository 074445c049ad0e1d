# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
from __future__ import annotations

""" Module to expose messages to users

These routines implement a layer of interaction with the user.
The warning routines and error handling should be passed through these
routines.

More specifically we do not like the *very* verbose warnings issued through

>>> import warnings
>>> warnings.warn('Help!')
__main__:1: UserWarning: Help!

and prefer the short context form

>>> warnings.showwarning(AAMixWarning('Help!'), AAMixWarning, 'warn', 'aamix', line='')
:aamix: AAMixWarning: Help!
"""
import warnings

from ._internal import set_module

__all__ = ["AAMixInfo", "AAMixWarning", "AAMixException", "AAMixError"]
__all__ += ["warn", "info"]

# The local registry for warnings issued
_aamix_warn_registry = {}


@set_module("aamix")
class AAMixException(Exception):
    """aamix exception"""


@set_module("aamix")
class AAMixError(AAMixException):
    """aamix error"""


@set_module("aamix")
class AAMixWarning(AAMixException, UserWarning):
    """aamix warnings"""


@set_module("aamix")
class AAMixInfo(AAMixWarning):
    """aamix informations"""


@set_module("aamix")
def warn(message, category=None, register=False):
    """Show warnings in short context form with aamix

    Parameters
    ----------
    message : str, Warning
       the warning to issue, default to issue a `AAMixWarning`
    category : Warning, optional
       the category of the warning to issue. Default to `AAMixWarning', unless `message` is
       a subclass of `Warning`
    register : bool, optional
       whether the warning is registered to limit the number of times this is output
    """
    if isinstance(message, Warning):
        category = message.__class__
    elif category is None:
        category = AAMixWarning
    if register:
        warnings.warn_explicit(
            message, category, "warn", 0, registry=_aamix_warn_registry
        )
    else:
        warnings.warn_explicit(message, category, "warn", 0)


@set_module("aamix")
def info(message, category=None, register=False):
    """Show info in short context form with aamix

    Parameters
    ----------
    message : str, Warning
       the information to issue, default to issue a `AAMixInfo`
    category : Warning, optional
       the category of the warning to issue. Default to `AAMixInfo', unless `message` is
       a subclass of `Warning`
    register : bool, optional
       whether the information is registered to limit the number of times this is output
    """
    if isinstance(message, Warning):
        category = message.__class__
    elif category is None:
        category = AAMixInfo
    if register:
        warnings.warn_explicit(
            message, category, "info", 0, registry=_aamix_warn_registry
        )
    else:
        warnings.warn_explicit(message, category, "info", 0)
