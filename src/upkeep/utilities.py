from __future__ import annotations
import re


def _norm_text(s: str | None) -> str:
    """Normalize a text fragment for comparisons.

    Collapses internal whitespace, strips leading/trailing space,
    and lowercases the result. ``None`` becomes an empty string.

    Parameters
    ----------
    s
        Input string (or ``None``).

    Returns
    -------
    str
        Normalized, lowercased text.

    Examples
    --------
    >>> _norm_text("  Hello   World  ")
    'hello world'
    >>> _norm_text(None)
    ''
    """
    return "" if s is None else " ".join(str(s).strip().split()).lower()


def _norm_step_name(s: str | None) -> str:
    """Turn a user-typed step name into its canonical identifier.

    Spaces and dashes become underscores and anything outside
    ``[a-z0-9_]`` is dropped, so ``"Custom Commands"``, ``"custom-commands"``
    and ``"custom_commands"`` all name the same step.

    Examples
    --------
    >>> _norm_step_name("  Custom-Commands ")
    'custom_commands'
    """
    s = re.sub(r"[\s\-]+", "_", _norm_text(s))
    return re.sub(r"[^a-z0-9_]+", "", s)
