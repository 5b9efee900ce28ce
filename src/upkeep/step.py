"""Step identities.

A :class:`Step` names the policy category a step belongs to. Run policy
(``only``, ``disable``, ``ignore_failures``) is expressed in terms of these
values. The display key shown in the report is chosen separately by whoever
calls :meth:`upkeep.runner.Runner.execute`, so one identity can back several
keys (e.g. every custom command runs as ``CUSTOM_COMMANDS``).
"""
from __future__ import annotations
from enum import auto

from .core import LowerStrEnum


class Step(LowerStrEnum):
    SYSTEM = auto()
    FIRMWARE = auto()
    BREW = auto()
    FLATPAK = auto()
    SNAP = auto()
    PIP = auto()
    PIPX = auto()
    NPM = auto()
    CARGO = auto()
    RUSTUP = auto()
    GEM = auto()
    CONTAINERS = auto()
    CUSTOM_COMMANDS = auto()
