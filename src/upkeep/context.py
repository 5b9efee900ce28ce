from __future__ import annotations
from dataclasses import dataclass, field

from .config import RunConfig
from .interrupt import InterruptFlag
from .terminal import Presenter, Terminal


@dataclass
class ExecutionContext:
    """Everything one run shares: policy, the terminal and the interrupt flag."""
    config: RunConfig = field(default_factory=RunConfig)
    terminal: Presenter = field(default_factory=Terminal)
    interrupts: InterruptFlag = field(default_factory=InterruptFlag)
