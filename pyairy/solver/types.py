# -*- coding: utf-8 -*-
#
"""Shared constants: datatypes, evolve tasks and stepper status codes."""

import numpy as np

# the state is always real-valued
DTYPE = np.float64
RTYPE = np.float64

# Evolve tasks.
#
NORMAL   = 1  # step until tout is reached, interpolate to tout
ONE_STEP = 2  # take a single internal step and return

# Status codes returned by the stepper. Negative means failure.
#
SUCCESS       =   0
TSTOP_RETURN  =   1
TOO_MUCH_WORK =  -1
ERR_FAILURE   =  -3
MEM_NULL      = -21
ILL_INPUT     = -22

_status_names = { SUCCESS       : "SUCCESS",
                  TSTOP_RETURN  : "TSTOP_RETURN",
                  TOO_MUCH_WORK : "TOO_MUCH_WORK",
                  ERR_FAILURE   : "ERR_FAILURE",
                  MEM_NULL      : "MEM_NULL",
                  ILL_INPUT     : "ILL_INPUT" }

def status_name(code):
    """Return a human-readable name (str) for the given status code."""
    return _status_names.get(code, "UNKNOWN(%d)" % code)
