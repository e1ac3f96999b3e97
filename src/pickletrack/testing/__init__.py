"""Simulation tools for exercising the scoring engines end to end."""

from pickletrack.testing.simulator import (
    RallySimulator,
    RoundRobinSimulator,
    SimulatedTeam,
    SimulationConfig,
    TeamFactory,
)

__all__ = [
    "RallySimulator",
    "RoundRobinSimulator",
    "SimulatedTeam",
    "SimulationConfig",
    "TeamFactory",
]
