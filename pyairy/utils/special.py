# -*- coding: utf-8 -*-
"""Airy functions for initial conditions and reference solutions.

The values are computed in arbitrary precision by mpmath and then rounded
to double precision, so they are correct to the last ulp or so.

Ai and Bi both solve  u'' = t u;  hence  airy_solution()  gives the exact
solution of the Airy system for the corresponding initial condition.
"""

import numpy as np

import mpmath

from pyairy.solver.types import RTYPE

# Airy functions and their derivatives, high precision from mpmath
_funcs = { "ai" : mpmath.airyai,  # lambda x, derivative=0: ...
           "bi" : mpmath.airybi }


def airy_ai(x):
    """Return Ai(x) (float)."""
    return float( mpmath.airyai(x) )

def airy_ai_prime(x):
    """Return Ai'(x) (float)."""
    return float( mpmath.airyai(x, derivative=1) )

def airy_bi(x):
    """Return Bi(x) (float)."""
    return float( mpmath.airybi(x) )

def airy_bi_prime(x):
    """Return Bi'(x) (float)."""
    return float( mpmath.airybi(x, derivative=1) )


def _get(kind):
    try:
        return _funcs[kind]
    except KeyError:
        raise ValueError("Unknown kind '%s'; valid: %s" % (kind, ", ".join(sorted(_funcs))))


def airy_ic(x, kind="ai"):
    """Return the initial condition [f(x), f'(x)] as a rank-1 np.array, where f is Ai (kind="ai") or Bi (kind="bi")."""
    f = _get(kind)
    return np.array( [ float(f(x)), float(f(x, derivative=1)) ], dtype=RTYPE )


def airy_solution(tt, kind="ai"):
    """Evaluate the exact solution at the times tt.

    Parameters:
        tt : rank-1 array-like of times
        kind : "ai" or "bi"

    Return value:
        rank-2 np.array of shape (len(tt), 2); row i is [f(tt[i]), f'(tt[i])].
    """
    f  = _get(kind)
    tt = np.atleast_1d( np.asarray(tt, dtype=RTYPE) )
    out = np.empty( (tt.shape[0], 2), dtype=RTYPE )
    for i,t in enumerate(tt):
        x = float(t)  # mpmath wants Python floats, not np.float64
        out[i,0] = float( f(x) )
        out[i,1] = float( f(x, derivative=1) )
    return out
