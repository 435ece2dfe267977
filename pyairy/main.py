# -*- coding: utf-8 -*-
"""Integrate the Airy system from Airy function initial values and print the solution.

Run this module as the main program to perform the integration.
Command-line options are available; pass the standard --help flag to see them.
"""

import sys

import numpy as np

from pyairy import __version__
from pyairy.solver.builtin_kernels import AiryKernel
from pyairy.solver.integrator_interface import create, METHODS, DEFAULT_MAX_NUM_STEPS, \
                                               CreationError, ConfigurationError, StepFailure
from pyairy.solver.driver import ivp, print_record
from pyairy.utils.special import airy_ic, airy_solution


#####################
# config
#####################

T0 = 0.0   # start time
TF = 2.0   # end time
DT = 0.01  # output interval

RTOL = 1.0e-6
ATOL = 1.0e-8

METHOD = "RK45"
IC     = "ai"  # initial condition from Ai or Bi at T0

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


############################################################################################################
# Main program
############################################################################################################

def main(t0=T0, tf=TF, dt=DT, rtol=RTOL, atol=ATOL, method=METHOD, ic=IC,
         max_steps=DEFAULT_MAX_NUM_STEPS, stats=False, report=print_record):
    """Run the integration. Return the process exit status (int).

    One record per output step is passed to report() (default: printed to stdout).
    Diagnostics go to stderr.
    """
    # The stepper is freed inside ivp(), so statistics must be grabbed from it while it is alive.
    handles = {}
    def stepper_factory(*args, **kwargs):
        stepper = create(*args, **kwargs)
        handles["stepper"] = stepper
        return stepper

    try:
        y0 = airy_ic(t0, kind=ic)

        if stats:
            print( "Integrating the Airy system on [%g, %g], output every %g" % (t0, tf, dt) )
            print( "Method %s, rtol = %g, atol = %g, IC from %s: [%g, %g]" % (method, rtol, atol, ic.capitalize(), y0[0], y0[1]) )

        ww,tt = ivp( AiryKernel(), t0, tf, dt, y0,
                     rtol=rtol, atol=atol, method=method,
                     report=report, stepper_factory=stepper_factory, max_num_steps=max_steps )
    except CreationError as err:
        print( "Error initializing integrator: %s" % err, file=sys.stderr )
        return EXIT_FAILURE
    except ConfigurationError as err:
        print( "Error configuring integrator: %s" % err, file=sys.stderr )
        return EXIT_FAILURE
    except StepFailure as err:
        print( str(err), file=sys.stderr )
        return EXIT_FAILURE
    except ValueError as err:
        print( "Invalid parameters: %s" % err, file=sys.stderr )
        return EXIT_FAILURE

    if stats:
        stepper = handles["stepper"]
        err = np.max( np.abs( ww - airy_solution(tt, kind=ic) ) )
        print( "Output steps: %d" % tt.shape[0] )
        print( "Internal steps: %d" % stepper.get_num_steps() )
        print( "RHS evaluations: %d" % stepper.get_num_rhs_evals() )
        print( "Max abs error vs. exact solution: %g" % err )

    return EXIT_SUCCESS


############################################################################################################
# Command line parser
############################################################################################################

def parse_args(argv=None):
    """Parse command-line arguments into a kwargs dict for main()."""
    import argparse
    parser = argparse.ArgumentParser(description="""Integrate the Airy equation u'' = t u, as the first-order system u1' = u2, u2' = t u1.

The initial condition is taken from the Airy function Ai (or Bi) and its derivative at the start time. The state is printed at every output time t0 + dt, t0 + 2 dt, ... until tf is reached; the last output time may slightly exceed tf.""", formatter_class=argparse.RawDescriptionHelpFormatter)

    parser.add_argument( '-v', '--version', action='version', version=('%(prog)s ' + __version__) )

    group_time = parser.add_argument_group('time', 'Time span and output interval.')

    group_time.add_argument( '--t0', dest='t0', default=T0, type=float, metavar='x',
                             help='Start time. Default %(default)s.' )
    group_time.add_argument( '--tf', dest='tf', default=TF, type=float, metavar='x',
                             help='End time. Must be > t0. Default %(default)s.' )
    group_time.add_argument( '--dt', dest='dt', default=DT, type=float, metavar='x',
                             help='Output interval. Must be > 0. Default %(default)s.' )

    group_solver = parser.add_argument_group('solver', 'Integrator options.')

    group_solver.add_argument( '--rtol', dest='rtol', default=RTOL, type=float, metavar='x',
                               help='Relative tolerance. Default %(default)s.' )
    group_solver.add_argument( '--atol', dest='atol', default=ATOL, type=float, metavar='x',
                               help='Absolute tolerance. Default %(default)s.' )
    group_solver.add_argument( '--method', dest='method', default=METHOD, choices=sorted(METHODS),
                               help='Integration method. Default %(default)s.' )
    group_solver.add_argument( '--max-steps', dest='max_steps', default=DEFAULT_MAX_NUM_STEPS, type=int, metavar='n',
                               help='Maximum number of internal steps per output step. Default %(default)s.' )

    group_behavior = parser.add_argument_group('behavior', 'Other options.')

    group_behavior.add_argument( '--ic', dest='ic', default=IC, choices=["ai", "bi"],
                                 help='Airy function for the initial condition. Default %(default)s.' )
    group_behavior.add_argument( '--stats', dest='stats', action='store_true', default=False,
                                 help='Print a summary and integrator statistics, and the error against the exact solution.' )

    return vars( parser.parse_args(argv) )


if __name__ == '__main__':
    sys.exit( main(**parse_args()) )
