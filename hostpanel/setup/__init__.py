"""
hostpanel setup

    SetupRunner  — full setup sequence
    PhaseDriver  — PreInstall/Install/PostInstall across servers and packages
    Step         — labelled step run by run_steps()
"""

from .phases import DriverState, PhaseDriver
from .runner import SetupRunner
from .stepper import Step, run_step, run_steps

__all__ = ["DriverState", "PhaseDriver", "SetupRunner", "Step", "run_step", "run_steps"]
