from __future__ import annotations

import os


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {raw!r}")
    return value


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    s = raw.strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


# Relative cancellation tolerance: a sum k*a + b is stored as 0.0 when
# |k*a + b| <= ZERO_TOL * max(|k*a|, |b|).
ZERO_TOL = _env_float("RREFTOOLS_ZERO_TOL", 1e-10)

# Display-only snap used by the human-readable dumps.
DISPLAY_EPS = _env_float("RREFTOOLS_DISPLAY_EPS", 1e-3)

LENIENT_PARSE = _env_flag("RREFTOOLS_LENIENT_PARSE", False)


def check_tol(zero_tol: float | None) -> float:
    """Resolve an optional tolerance override against ZERO_TOL."""
    if zero_tol is None:
        return ZERO_TOL
    if zero_tol < 0:
        raise ValueError(f"zero_tol must be non-negative, got {zero_tol}")
    return float(zero_tol)
