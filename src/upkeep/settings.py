# settings.py
"""
Runner settings and context management for upkeep.

This module defines an immutable :class:`RunnerSettings` dataclass and a small
context-management layer that controls how the runner behaves internally
(invariant checking, how much failure detail is shown). Settings are stored in
a :class:`contextvars.ContextVar`, so overrides are **per logical context**
(safe for threads and nested calls).

These are developer-facing knobs. User-facing run policy (which steps run,
retry behavior, verbosity) lives in :class:`upkeep.config.RunConfig`.

The precedence model (highest → lowest) is:

1. Explicit overrides passed to a local context (:class:`use_settings`)
2. Process-wide overrides (:func:`set_global_settings`)
3. Module defaults

Examples
--------
Disable duplicate-key detection for a block::

    from upkeep.settings import use_settings

    with use_settings(check_invariants=False):
        report.push(("brew", StepResult.success()))
        report.push(("brew", StepResult.success()))  # tolerated

Creating a derived settings object (without changing context)::

    from upkeep.settings import current_settings, with_overrides
    terse = with_overrides(current_settings(), store_traceback=False)
"""
from __future__ import annotations
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from typing import Optional


__all__ = [
    "RunnerSettings",
    "current_settings",
    "use_settings",
    "with_overrides",
    "set_global_settings",
]


@dataclass(frozen=True)
class RunnerSettings:
    """
    Immutable settings controlling runner behavior.

    Parameters
    ----------
    check_invariants : bool, default ``__debug__``
        If ``True``, contract violations by callers (e.g. reporting the same
        step key twice) raise :class:`~upkeep.errors.DuplicateStepError`.
        If ``False``, they are tolerated silently. Follows the interpreter's
        ``__debug__`` flag, so it is off under ``python -O``.
    store_traceback : bool, default True
        If ``True``, the error text shown for a failed step is the full
        formatted traceback. If ``False``, only ``"{Type}: {message}"``.
    traceback_limit : int or None, default None
        If set, limit the traceback to ``N`` frames. ``None`` keeps the full
        traceback.

    Notes
    -----
    Prefer layering settings with :class:`use_settings` or
    :func:`with_overrides` rather than mutating state.
    """

    check_invariants: bool = __debug__
    store_traceback: bool = True
    traceback_limit: Optional[int] = None


#: Module-level default settings used when no overrides are active.
_default_settings = RunnerSettings()


#: Context-local settings for the current logical flow.
_settings_var: ContextVar[RunnerSettings] = ContextVar("runner_settings")


def current_settings() -> RunnerSettings:
    """
    Return the effective :class:`RunnerSettings` for the current context.

    Returns
    -------
    RunnerSettings
        The settings object currently active for this context.

    Examples
    --------
    >>> from upkeep.settings import current_settings
    >>> s = current_settings()
    >>> isinstance(s, RunnerSettings)
    True
    """
    return _settings_var.get(_default_settings)


class use_settings:
    """
    Context manager to apply temporary settings overrides.

    Keyword arguments correspond to fields on :class:`RunnerSettings` and
    replace the current context's settings immutably for the duration of
    the ``with`` block.

    Parameters
    ----------
    **overrides
        Field-value pairs to override in the current context.

    Returns
    -------
    RunnerSettings
        The effective settings object installed for the context.

    Notes
    -----
    - Overrides are **stackable**; inner contexts take precedence.
    - On exit, the previous settings are restored.
    - This context manager never suppresses exceptions raised inside it.
    """

    def __init__(self, **overrides):
        self._overrides = overrides
        self._token: Optional[Token] = None
        self._effective: Optional[RunnerSettings] = None

    def __enter__(self) -> RunnerSettings:
        base = current_settings()

        # No-op reader path: return current settings without pushing a value
        if not self._overrides:
            self._effective = base
            self._token = None
            return base

        eff = replace(base, **self._overrides)
        self._effective = eff
        self._token = _settings_var.set(eff)
        return eff

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._token is not None:
            _settings_var.reset(self._token)
        return False


def with_overrides(base: RunnerSettings, **overrides) -> RunnerSettings:
    """
    Return a new :class:`RunnerSettings` with selected fields replaced.

    Parameters
    ----------
    base : RunnerSettings
        The base settings object to copy.
    **overrides
        Field-value pairs to override on the returned object.

    Returns
    -------
    RunnerSettings
        A new immutable settings instance with the requested overrides applied.
    """
    return replace(base, **overrides)


def set_global_settings(**overrides) -> RunnerSettings:
    """
    Permanently replace the process-wide default settings.

    Notes
    -----
    - Intended for top-level scripts (e.g. the ``upkeep`` CLI).
    - Subsequent calls to :func:`current_settings` or :class:`use_settings`
      will inherit from this new base.
    - This affects the entire interpreter process.
    """
    global _default_settings
    new = replace(_default_settings, **overrides)
    _default_settings = new
    _settings_var.set(new)
    return new
