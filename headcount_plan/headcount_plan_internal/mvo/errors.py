"""
Error taxonomy for the MVO sizing engine.

Structural problems abort a run and propagate to the caller. Statistical
infeasibility is not an error: it is reported with NoFeasibleCandidateWarning
and the MVOResult.fallback flag.
"""


class MVOError(Exception):
    """Base class for errors raised by the MVO engine."""


class InvalidSpecError(MVOError, ValueError):
    """A required workload range is missing from the WorkloadSpec."""


class UnknownPolicyError(MVOError, KeyError):
    """A planning-type or operation-size key is not present in the policy table."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class SimulationCancelledError(MVOError):
    """The caller cancelled the run between two candidates."""


class NoFeasibleCandidateWarning(UserWarning):
    """No candidate in the tested window met the risk and budget constraints."""
