from .core import StepStatus, StepResult, ReportEntry, Report
from .outcome import (
    COMPLETED, SIMULATED, Completed, DeclinedToRun, SimulatedOnly, StepOutcome, skip
)
from .errors import UpkeepError, PromptError, RunAborted, CommandFailed, DuplicateStepError
from .config import RunConfig, load_config
from .context import ExecutionContext
from .interrupt import InterruptFlag, handle_interrupts
from .runner import Runner, format_failure
from .step import Step
from .terminal import Terminal

__all__ = [
    "StepStatus", "StepResult", "ReportEntry", "Report",
    "COMPLETED", "SIMULATED", "Completed", "DeclinedToRun", "SimulatedOnly", "StepOutcome", "skip",
    "UpkeepError", "PromptError", "RunAborted", "CommandFailed", "DuplicateStepError",
    "RunConfig", "load_config", "ExecutionContext", "InterruptFlag", "handle_interrupts",
    "Runner", "format_failure", "Step", "Terminal",
]
