# -*- coding: utf-8 -*-
#
"""Utility routines for pyairy.

When this module is imported, it automatically imports the special submodule
into the current namespace.
"""

from . import special
