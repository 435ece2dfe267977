# -*- coding: utf-8 -*-
#
# Tests for the driver loop ivp().

import math

import numpy as np

import pytest

from pyairy.solver.types import SUCCESS, ERR_FAILURE, ILL_INPUT, MEM_NULL
from pyairy.solver.nvector import StateVector
from pyairy.solver.kernel_interface import PythonKernel
from pyairy.solver.builtin_kernels import AiryKernel
from pyairy.solver.integrator_interface import create
from pyairy.solver.driver import ivp, n_reports, format_record, \
                                 CreationError, ConfigurationError, StepFailure, IntegratorError
from pyairy.utils.special import airy_ic, airy_solution


#####################
# config for testing
#####################

T0 = 0.0
TF = 2.0
DT = 0.01

Y0 = airy_ic(T0)  # ~ (0.3550280539, -0.2588194038)


#####################
# helpers
#####################

class CountingVector(StateVector):
    """State vector that counts how many times it has been created and destroyed."""
    created   = 0
    destroyed_count = 0

    def __init__(self, data):
        StateVector.__init__(self, data)
        CountingVector.created += 1

    def destroy(self):
        StateVector.destroy(self)
        CountingVector.destroyed_count += 1

    @classmethod
    def reset(cls):
        cls.created = 0
        cls.destroyed_count = 0


class StubStepper:
    """Stepper that reaches each target exactly and fails on the given evolve() call (1-based)."""

    def __init__(self, fail_on=None, tolerance_status=SUCCESS):
        self.fail_on          = fail_on
        self.tolerance_status = tolerance_status
        self.calls            = 0
        self.frees            = 0
        self.targets          = []

    def set_tolerances(self, rtol, atol):
        return self.tolerance_status

    def set_max_num_steps(self, mxsteps):
        return SUCCESS

    def evolve(self, tout, y, task):
        if self.frees:
            return MEM_NULL, tout
        self.calls += 1
        self.targets.append(tout)
        if self.calls == self.fail_on:
            return ERR_FAILURE, tout
        y.data[:] = [float(self.calls), -float(self.calls)]
        return SUCCESS, tout

    def free(self):
        self.frees += 1


def stub_factory(stub):
    def factory(rhs, jac, t0, y0, method="RK45"):
        return stub
    return factory


class Recorder:
    def __init__(self):
        self.records = []

    def __call__(self, t, y):
        self.records.append( (t, y.copy_values()) )


#####################
# tests
#####################

def test_n_reports():
    assert n_reports(T0, TF, DT) == 200
    assert n_reports(0., 1., 0.3) == 4
    assert n_reports(0., 0.025, 0.01) == 3


def test_airy_run():
    rec = Recorder()
    ww,tt = ivp( AiryKernel(), T0, TF, DT, Y0, rtol=1e-6, atol=1e-8, report=rec )

    n = int(math.ceil((TF - T0) / DT))
    assert len(rec.records) == n
    assert tt.shape == (n,)
    assert ww.shape == (n, 2)
    assert tt[-1] >= TF
    assert np.all( np.diff(tt) > 0. )

    # the reported records are the returned ones
    assert [t for t,_ in rec.records] == tt.tolist()
    assert np.array_equal( np.array([y for _,y in rec.records]), ww )

    assert np.allclose( ww, airy_solution(tt), rtol=0., atol=1e-5 )


def test_prints_records(capsys):
    ivp( AiryKernel(), T0, 0.05, DT, Y0 )
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    assert lines[0].startswith("At t = 0.01, y = [0.352")
    assert lines[-1].startswith("At t = 0.05, y = [")


def test_format_record():
    assert format_record(0.01, [0.3524, -0.2588]) == "At t = 0.01, y = [0.3524, -0.2588]"


def test_last_step_overshoots():
    ww,tt = ivp( AiryKernel(), 0., 0.025, 0.01, Y0, report=None )
    assert tt.shape == (3,)
    assert tt[-1] == pytest.approx(0.03)
    assert tt[-1] > 0.025


def test_generic_rhs():
    rhs = PythonKernel(1, lambda t, w, k: -k * w, 2.)
    ww,tt = ivp( rhs, 0., 1., 0.1, [1.], report=None )
    assert ww.shape == (10, 1)
    assert np.allclose( ww[:,0], np.exp(-2. * tt), rtol=1e-5 )


def test_step_failure_on_fifth_call():
    CountingVector.reset()
    stub = StubStepper(fail_on=5)
    rec = Recorder()
    with pytest.raises(StepFailure) as excinfo:
        ivp( AiryKernel(), T0, TF, DT, Y0, report=rec,
             stepper_factory=stub_factory(stub), vector_factory=CountingVector )

    assert len(rec.records) == 4
    assert stub.calls == 5  # no further stepping after the failure
    err = excinfo.value
    assert err.t == pytest.approx(0.05)
    assert err.status == ERR_FAILURE
    assert "t=0.05" in str(err)

    assert stub.frees == 1
    assert CountingVector.created == 1
    assert CountingVector.destroyed_count == 1


def test_resources_released_once_on_success():
    CountingVector.reset()
    stub = StubStepper()
    ww,tt = ivp( AiryKernel(), T0, 0.1, DT, Y0, report=None,
                 stepper_factory=stub_factory(stub), vector_factory=CountingVector )
    assert tt.shape == (10,)
    assert np.array_equal( ww[:,0], np.arange(1., 11.) )
    assert stub.frees == 1
    assert CountingVector.destroyed_count == 1

    # targets are requested in increasing order
    assert np.all( np.diff(stub.targets) > 0. )


def test_real_stepper_freed():
    handles = []
    def factory(*args, **kwargs):
        stepper = create(*args, **kwargs)
        handles.append(stepper)
        return stepper

    ivp( AiryKernel(), T0, 0.1, DT, Y0, report=None, stepper_factory=factory )
    assert len(handles) == 1
    with pytest.raises(RuntimeError):
        handles[0].free()  # already freed by ivp()


def test_creation_failure():
    CountingVector.reset()
    with pytest.raises(CreationError):
        ivp( AiryKernel(), T0, TF, DT, Y0, report=None,
             stepper_factory=lambda *args, **kwargs: None, vector_factory=CountingVector )
    assert CountingVector.destroyed_count == 1

    CountingVector.reset()
    with pytest.raises(CreationError):
        ivp( AiryKernel(), T0, TF, DT, Y0, method="Euler", report=None, vector_factory=CountingVector )
    assert CountingVector.destroyed_count == 1


def test_bad_tolerances():
    CountingVector.reset()
    stub = StubStepper(tolerance_status=ILL_INPUT)
    with pytest.raises(ConfigurationError) as excinfo:
        ivp( AiryKernel(), T0, TF, DT, Y0, rtol=-1., report=None,
             stepper_factory=stub_factory(stub), vector_factory=CountingVector )
    assert excinfo.value.status == ILL_INPUT
    assert isinstance(excinfo.value, IntegratorError)
    assert stub.calls == 0
    assert stub.frees == 1
    assert CountingVector.destroyed_count == 1

    with pytest.raises(ConfigurationError):
        ivp( AiryKernel(), T0, TF, DT, Y0, atol=-1., report=None )


@pytest.mark.parametrize("t0,tf,dt", [ (0., 0., 0.01),
                                       (1., 0., 0.01),
                                       (0., 1., 0.),
                                       (0., 1., -0.01),
                                       (0., np.inf, 0.01) ])
def test_invalid_arguments(t0, tf, dt):
    CountingVector.reset()
    with pytest.raises(ValueError):
        ivp( AiryKernel(), t0, tf, dt, Y0, report=None, vector_factory=CountingVector )
    assert CountingVector.created == 0


def nan_after_half(t, w):
    if t >= 0.5:
        return np.full_like(w, np.nan)
    return -w


def test_real_step_failure():
    # time at which the stepper gives up on its own
    stepper = create(PythonKernel(1, nan_after_half), None, 0., [1.])
    status, t_fail = stepper.evolve(1., StateVector([1.]))
    stepper.free()
    assert status == ERR_FAILURE

    CountingVector.reset()
    handles = []
    def factory(*args, **kwargs):
        stepper = create(*args, **kwargs)
        handles.append(stepper)
        return stepper

    rec = Recorder()
    with pytest.raises(StepFailure) as excinfo:
        ivp( PythonKernel(1, nan_after_half), 0., 1., 0.1, [1.], report=rec,
             stepper_factory=factory, vector_factory=CountingVector )

    err = excinfo.value
    assert err.status == ERR_FAILURE
    assert err.t == t_fail
    assert "ERR_FAILURE" in str(err)
    assert all(t <= t_fail for t,_ in rec.records)

    assert len(handles) == 1
    with pytest.raises(RuntimeError):
        handles[0].free()  # already freed by ivp()
    assert CountingVector.created == 1
    assert CountingVector.destroyed_count == 1


def test_n_reports_rejects_invalid_arguments():
    with pytest.raises(ValueError):
        n_reports(0., 1., 0.)
    with pytest.raises(ValueError):
        n_reports(1., 0., 0.1)
