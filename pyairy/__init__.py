# -*- coding: utf-8 -*-
#
"""Integrate the Airy equation  u'' = t u  with an adaptive-step ODE integrator.

The equation is reduced to the first-order system  u1' = u2,  u2' = t u1
(see pyairy.solver.builtin_kernels), seeded with Airy function values
(see pyairy.utils.special), and integrated by the driver loop ivp()
on top of an adaptive stepper (see pyairy.solver.integrator_interface).

For running the example from the command line, run the module pyairy.main
as the main program.

When this module is imported, it imports all symbols from pyairy.solver.driver
into the local namespace.
"""

__version__ = '0.1.0'

from .solver.driver import *
