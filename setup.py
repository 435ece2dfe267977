# -*- coding: utf-8 -*-
#
"""Setuptools-based setup script for pyairy."""

#########################################################
# Init
#########################################################

# check for Python 3.8 or later
# http://stackoverflow.com/questions/19534896/enforcing-python-version-in-setup-py
import sys
if sys.version_info < (3,8):
    sys.exit('Sorry, Python < 3.8 is not supported')

import os

from setuptools import setup


#########################################################
# Long description
#########################################################

DESC="""Integrate the Airy equation  u'' = t u  with an adaptive ODE integrator.

The equation is reduced to the first-order system

    u1' = u2
    u2' = t u1

and integrated from the Airy function values Ai(t0), Ai'(t0)
by an adaptive-step Runge-Kutta method (scipy.integrate),
reporting the solution at fixed output intervals.

The initial values and the exact reference solution are computed
in arbitrary precision using mpmath.
"""


#########################################################
# Helpers
#########################################################

# http://stackoverflow.com/questions/13628979/setuptools-how-to-make-package-contain-extra-data-folder-and-all-folders-inside
datadirs  = ("test",)
dataexts  = (".py",)
datafiles = []
getext = lambda filename: os.path.splitext(filename)[1]
for datadir in datadirs:
    datafiles.extend( [(root, [os.path.join(root, f) for f in files if getext(f) in dataexts])
                       for root, dirs, files in os.walk(datadir)] )


#########################################################

# Extract __version__ from the package __init__.py
# (since it's not a good idea to actually run __init__.py during the build process).
#
# http://stackoverflow.com/questions/2058802/how-can-i-get-the-version-defined-in-setup-py-setuptools-in-my-package
#
import ast
with open(os.path.join('pyairy', '__init__.py')) as f:
    for line in f:
        if line.startswith('__version__'):
            version = ast.literal_eval(line.split('=', 1)[1].strip())
            break
    else:
        version = '0.0.unknown'
        print( "WARNING: Version information not found, using placeholder '%s'" % (version) )


setup(
    name = "pyairy",
    version = version,

    description = "Airy equation integrated with an adaptive-step ODE solver (scipy.integrate, mpmath)",
    long_description = DESC,

    license = "BSD",
    platforms = ["any"],

    classifiers = [ "Development Status :: 4 - Beta",
                    "Environment :: Console",
                    "Intended Audience :: Developers",
                    "Intended Audience :: Science/Research",
                    "License :: OSI Approved :: BSD License",
                    "Operating System :: OS Independent",
                    "Programming Language :: Python",
                    "Programming Language :: Python :: 3",
                    "Topic :: Scientific/Engineering",
                    "Topic :: Scientific/Engineering :: Mathematics",
                    "Topic :: Software Development :: Libraries",
                    "Topic :: Software Development :: Libraries :: Python Modules"
                  ],

    python_requires = ">=3.8",
    install_requires = ["numpy", "scipy>=1.4", "mpmath"],
    extras_require = { "test"     : ["pytest"],
                       "examples" : ["matplotlib"] },
    provides = ["pyairy"],

    keywords = ["numerical integration ordinary-differential-equations ode ivp ode-solver airy adaptive runge-kutta scipy numpy"],

    # Declare packages so that  python -m setup build  will copy .py files (especially __init__.py).
    packages = ["pyairy", "pyairy.solver", "pyairy.utils"],

    zip_safe = True,

    # Usage examples; not in a package
    data_files = datafiles
)
