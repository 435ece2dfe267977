# -*- coding: utf-8 -*-
#
"""Driver loop: integrate from t0 to tf, reporting the state every dt.

The adaptive stepper sub-steps internally as it sees fit; the driver only
requests monotonically increasing output times t0 + dt, t0 + 2 dt, ...
The loop condition is checked before each request, so the last reported
time may exceed tf (it is not clamped).
"""

import math

import numpy as np

from .types import DTYPE, NORMAL, status_name
from .nvector import StateVector
from .integrator_interface import create, IntegratorError, CreationError, ConfigurationError, StepFailure, \
                                  DEFAULT_RTOL, DEFAULT_ATOL

__all__ = ["ivp", "n_reports", "format_record", "print_record",
           "IntegratorError", "CreationError", "ConfigurationError", "StepFailure"]


def n_reports(t0, tf, dt):
    """Return the number of records (int) that ivp() emits for a successful run.

    Raises ValueError for the same invalid arguments as ivp().
    """
    _check_config(t0, tf, dt)
    return int(math.ceil( (tf - t0) / dt ))


def format_record(t, y):
    """Format one output record as str, e.g. 'At t = 0.01, y = [0.352443, -0.258819]'."""
    return "At t = %g, y = [%s]" % (t, ", ".join("%g" % x for x in y))


def print_record(t, y):
    """Print one output record to stdout. This is the default report function of ivp()."""
    print( format_record(t, y) )


def _check_config(t0, tf, dt):
    for name, value in (("t0", t0), ("tf", tf), ("dt", dt)):
        if not np.isfinite(value):
            raise ValueError("%s must be finite, got %s" % (name, value))
    if not tf > t0:
        raise ValueError("tf must be greater than t0, got t0 = %g, tf = %g" % (t0, tf))
    if not dt > 0.:
        raise ValueError("dt must be positive, got %g" % dt)


def ivp(rhs, t0, tf, dt, y0, rtol=DEFAULT_RTOL, atol=DEFAULT_ATOL, method="RK45", jac=None,
        report=print_record, stepper_factory=create, vector_factory=StateVector, max_num_steps=None):
    """Solve the initial value problem  w' = rhs(t, w),  w(t0) = y0.

    Parameters:
        rhs : callable rhs(t, w) -> array, e.g. a Kernel instance
        t0, tf : float, start and end time (tf > t0)
        dt : float, output interval (> 0)
        y0 : array-like, initial state
        rtol, atol : float, tolerances for the adaptive stepper
        method : str, integration method (see pyairy.solver.integrator_interface.METHODS)
        jac : callable jac(t, w) -> (n,n) array, or None
        report : callable report(t, y), called once per successful output step
                 with the time reached and the current state (StateVector).
                 None to disable reporting.
        stepper_factory : callable with the signature of integrator_interface.create()
        vector_factory : callable vector_factory(y0) -> StateVector
        max_num_steps : int or None, maximum internal steps per output step

    Return value:
        tuple (ww, tt), where
            ww : rank-2 np.array of shape (nrecords, n), the state at each output time
            tt : rank-1 np.array of length nrecords, the output times

    Raises:
        ValueError if the arguments are invalid,
        CreationError if the stepper could not be created,
        ConfigurationError if the stepper rejected the tolerances or step limit,
        StepFailure if a step returned a negative status (no further steps are taken).

    The state vector and the stepper are released exactly once, also when raising.
    """
    _check_config(t0, tf, dt)

    y = vector_factory(y0)
    try:
        stepper = stepper_factory(rhs, jac, t0, y, method=method)
        if stepper is None:
            raise CreationError("Stepper creation returned no handle")
        try:
            status = stepper.set_tolerances(rtol, atol)
            if status < 0:
                raise ConfigurationError("Invalid tolerances rtol = %g, atol = %g (%s)" % (rtol, atol, status_name(status)),
                                         status)
            if max_num_steps is not None:
                status = stepper.set_max_num_steps(max_num_steps)
                if status < 0:
                    raise ConfigurationError("Invalid max_num_steps = %s (%s)" % (max_num_steps, status_name(status)),
                                             status)

            tt = []
            ww = []
            t = t0
            k = 0
            while t < tf:
                k += 1
                # target from the step index, so that dt does not accumulate roundoff
                status, t = stepper.evolve(t0 + k*dt, y, NORMAL)
                if status < 0:
                    raise StepFailure(t, status)

                tt.append(t)
                ww.append(y.copy_values())
                if report is not None:
                    report(t, y)
        finally:
            stepper.free()
    finally:
        y.destroy()

    return np.array(ww, dtype=DTYPE), np.array(tt, dtype=DTYPE)
