# -*- coding: utf-8 -*-
#
"""Handle-based interface to an adaptive-step ODE integrator.

The actual stepping (step size selection, error control, implicit solves)
is done by scipy.integrate's OdeSolver classes. This module wraps one such
solver behind a small handle API:

    stepper = create(rhs, None, t0, y0)     # CreationError if inputs invalid
    stepper.set_tolerances(rtol, atol)      # -> status
    status, t = stepper.evolve(tout, y)     # -> status (negative = failure), time reached
    stepper.free()

The configuration calls and evolve() report problems via status codes
(see pyairy.solver.types); only create() and lifecycle misuse raise.
Exceptions raised by the RHS itself propagate out of evolve().
"""

import numpy as np

import scipy.integrate

from .types import DTYPE, NORMAL, ONE_STEP, \
                   SUCCESS, TSTOP_RETURN, TOO_MUCH_WORK, ERR_FAILURE, MEM_NULL, ILL_INPUT, \
                   status_name
from .nvector import StateVector

__all__ = ["IntegratorError", "CreationError", "ConfigurationError", "StepFailure",
           "AdaptiveStepper", "create", "status_name", "METHODS", "DEFAULT_MAX_NUM_STEPS"]

# explicit methods first; the implicit ones use the Jacobian if one is given
METHODS = { "RK45"   : scipy.integrate.RK45,
            "RK23"   : scipy.integrate.RK23,
            "DOP853" : scipy.integrate.DOP853,
            "Radau"  : scipy.integrate.Radau,
            "BDF"    : scipy.integrate.BDF }
IMPLICIT_METHODS = ("Radau", "BDF")

DEFAULT_RTOL = 1e-6
DEFAULT_ATOL = 1e-8

# maximum number of internal steps in one evolve() call
DEFAULT_MAX_NUM_STEPS = 500


#############################################
# Errors
#############################################

class IntegratorError(Exception):
    """Base class for integration failures."""

class CreationError(IntegratorError):
    """The integrator could not be created."""

class ConfigurationError(IntegratorError):
    """A configuration call (e.g. set_tolerances()) was rejected.

    Attributes:
        status : int, the status code returned by the stepper
    """
    def __init__(self, message, status):
        IntegratorError.__init__(self, message)
        self.status = status

class StepFailure(IntegratorError):
    """A step returned a negative status.

    Attributes:
        t      : float, the time at which the failure occurred
        status : int, the status code returned by the stepper
    """
    def __init__(self, t, status):
        IntegratorError.__init__(self, "Integration failed at t=%g (%s)" % (t, status_name(status)))
        self.t      = t
        self.status = status


#############################################
# Stepper handle
#############################################

class AdaptiveStepper:
    """Adaptive-step integrator for w' = f(t, w). Create instances via create()."""

    def __init__(self, rhs, jac, t0, y0, method="RK45"):
        self.rhs    = rhs
        self.jac    = jac
        self.method = method
        self.n      = y0.shape[0]

        self._t0      = t0
        self._y0      = y0
        self._rtol    = DEFAULT_RTOL
        self._atol    = DEFAULT_ATOL
        self._tstop   = None
        self._mxsteps = DEFAULT_MAX_NUM_STEPS

        self._solver = None  # scipy OdeSolver, built at the first evolve()
        self._freed  = False
        self._tret   = t0    # time last returned to the caller
        self._nst    = 0     # internal steps taken, all evolve() calls

    @property
    def started(self):
        return self._solver is not None

    #############################################
    # Configuration (only before stepping starts)
    #############################################

    def set_tolerances(self, rtol, atol):
        """Set scalar relative and absolute tolerances. Return status."""
        if self._freed:
            return MEM_NULL
        if self.started:
            return ILL_INPUT
        if not (np.isfinite(rtol) and np.isfinite(atol)) or rtol < 0. or atol < 0.:
            return ILL_INPUT
        self._rtol = float(rtol)
        self._atol = float(atol)
        return SUCCESS

    def set_stop_time(self, tstop):
        """Never step past tstop (> t0). Return status."""
        if self._freed:
            return MEM_NULL
        if self.started or not np.isfinite(tstop) or tstop <= self._t0:
            return ILL_INPUT
        self._tstop = float(tstop)
        return SUCCESS

    def set_max_num_steps(self, mxsteps):
        """Set the maximum number of internal steps per evolve() call (>= 1). Return status."""
        if self._freed:
            return MEM_NULL
        if mxsteps < 1:
            return ILL_INPUT
        self._mxsteps = int(mxsteps)
        return SUCCESS

    #############################################
    # Stepping
    #############################################

    def _fun(self, t, w):
        return self.rhs(t, w)

    def _build_solver(self):
        cls = METHODS[self.method]
        t_bound = self._tstop if self._tstop is not None else np.inf
        kwargs = {}
        if self.method in IMPLICIT_METHODS and self.jac is not None:
            kwargs["jac"] = self.jac
        self._solver = cls( self._fun, self._t0, self._y0, t_bound,
                            rtol=self._rtol, atol=self._atol, **kwargs )

    def evolve(self, tout, y, task=NORMAL):
        """Advance the solution.

        Parameters:
            tout : float
                Target time (NORMAL task). Must not be earlier than the time last returned.
            y : StateVector
                Receives the solution at the returned time (written in place).
            task : NORMAL or ONE_STEP
                NORMAL steps internally until tout is reached and interpolates the
                solution at tout. ONE_STEP takes a single internal step.

        Return value:
            tuple (status, t), where t is the time the solution in y corresponds to.
            On failure, y holds the last successfully computed state and t its time.
        """
        if self._freed:
            return MEM_NULL, self._tret
        if task not in (NORMAL, ONE_STEP) or len(y) != self.n:
            return ILL_INPUT, self._tret
        if task == NORMAL and (not np.isfinite(tout) or tout < self._tret):
            return ILL_INPUT, self._tret

        if not self.started:
            self._build_solver()
        solver = self._solver

        # scipy refuses to step a failed solver; the failure is sticky
        if solver.status == "failed":
            return ERR_FAILURE, self._tret

        if task == ONE_STEP:
            if solver.status == "finished":
                return TSTOP_RETURN, self._tret
            solver.step()
            self._nst += 1
            y.data[:] = solver.y
            self._tret = solver.t
            if solver.status == "failed":
                return ERR_FAILURE, solver.t
            if solver.status == "finished":
                return TSTOP_RETURN, solver.t
            return SUCCESS, solver.t

        # task == NORMAL
        target = tout
        if self._tstop is not None and tout > self._tstop:
            target = self._tstop

        nsteps = 0
        while solver.t < target:
            if nsteps >= self._mxsteps:
                y.data[:] = solver.y
                self._tret = solver.t
                return TOO_MUCH_WORK, solver.t
            solver.step()
            nsteps    += 1
            self._nst += 1
            if solver.status == "failed":
                y.data[:] = solver.y
                self._tret = solver.t
                return ERR_FAILURE, solver.t

        if solver.t == target:
            y.data[:] = solver.y
        else:
            # target lies inside the last internal step
            y.data[:] = solver.dense_output()(target)
        self._tret = target

        if self._tstop is not None and target == self._tstop:
            return TSTOP_RETURN, target
        return SUCCESS, target

    #############################################
    # Statistics
    #############################################

    def get_num_steps(self):
        """Return the total number of internal steps taken."""
        return self._nst

    def get_num_rhs_evals(self):
        """Return the total number of RHS evaluations."""
        return self._solver.nfev if self._solver is not None else 0

    def get_current_time(self):
        """Return the internal time reached by the stepper (may be past the last returned time)."""
        return self._solver.t if self._solver is not None else self._t0

    #############################################
    # Lifecycle
    #############################################

    def free(self):
        """Release the stepper. Must be called exactly once."""
        if self._freed:
            raise RuntimeError("Stepper has already been freed")
        self._solver = None
        self._y0     = None
        self._freed  = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if not self._freed:
            self.free()
        return False


def create(rhs, jac, t0, y0, method="RK45"):
    """Create an adaptive stepper handle.

    Parameters:
        rhs : callable rhs(t, w) -> array of len(w), e.g. a Kernel instance
        jac : callable jac(t, w) -> (n,n) array, or None. Used only by the implicit methods.
        t0  : float, initial time
        y0  : StateVector or array-like, initial state (copied)
        method : str, one of METHODS

    Return value:
        AdaptiveStepper instance.

    Raises CreationError if the inputs are invalid.
    """
    if not callable(rhs):
        raise CreationError("rhs must be callable, got %s" % type(rhs).__name__)
    if jac is not None and not callable(jac):
        raise CreationError("jac must be callable or None, got %s" % type(jac).__name__)
    if method not in METHODS:
        raise CreationError("Unknown method '%s'; valid: %s" % (method, ", ".join(sorted(METHODS))))
    if not np.isfinite(t0):
        raise CreationError("t0 must be finite, got %s" % t0)

    if isinstance(y0, StateVector):
        if y0.destroyed:
            raise CreationError("Initial state vector has been destroyed")
        y0 = y0.copy_values()
    else:
        y0 = np.array(y0, dtype=DTYPE)
    if y0.ndim != 1 or y0.shape[0] == 0:
        raise CreationError("Initial state must be a non-empty rank-1 array, got shape %s" % (y0.shape,))
    if not np.all(np.isfinite(y0)):
        raise CreationError("Initial state must be finite, got %s" % (y0.tolist(),))

    return AdaptiveStepper(rhs, jac, float(t0), y0, method)
