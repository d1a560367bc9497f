"""Run orchestration."""

from ricer.workflow.materialize import (
    EXIT_CONFIG_FAILURE,
    EXIT_RENDER_FAILURE,
    EXIT_SUCCESS,
    RunSummary,
    materialize,
    run_materialize,
)

__all__ = [
    "EXIT_CONFIG_FAILURE",
    "EXIT_RENDER_FAILURE",
    "EXIT_SUCCESS",
    "RunSummary",
    "materialize",
    "run_materialize",
]
