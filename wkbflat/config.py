"""Process-wide bounds policy and its loading from the environment."""

from __future__ import annotations

import os
import warnings
from contextlib import contextmanager
from pathlib import Path
from typing import Final, Iterator, Sequence

from dotenv import load_dotenv

from .models import BoundsPolicy

_ENV_MAX_ELEMENTS: Final[str] = "WKBFLAT_MAX_ELEMENTS"
_ENV_DOTENV_PATH: Final[str] = "WKBFLAT_DOTENV_PATH"

_POLICY: BoundsPolicy = BoundsPolicy()
_LOADED_POLICY: BoundsPolicy | None = None


def parse_max_elements(raw: str) -> BoundsPolicy:
    """Parse ``"a,b,c,d"`` into a :class:`BoundsPolicy`."""
    parts = [part.strip() for part in raw.split(",")]
    if len(parts) != 4 or not all(parts):
        raise ValueError(
            f"Expected four comma-separated limits for levels 0..3, got {raw!r}."
        )
    try:
        limits = tuple(int(part, 0) for part in parts)
    except ValueError as exc:
        raise ValueError(f"Element limits must be integers, got {raw!r}.") from exc
    return BoundsPolicy(limits)


def get_bounds_policy() -> BoundsPolicy:
    """Return the policy consulted by codec calls that are not given one."""
    return _POLICY


def set_bounds_policy(policy: BoundsPolicy | Sequence[int]) -> BoundsPolicy:
    """Replace the process-wide policy and return the previous one."""
    global _POLICY  # noqa: PLW0603
    new_policy = BoundsPolicy.coerce(policy)
    if new_policy.limits[0] != 0:
        warnings.warn(
            f"Level-0 element limit ({new_policy.limits[0]}) is ignored; "
            "fixed-size tuples carry no count prefix.",
            UserWarning,
            stacklevel=2,
        )
    previous = _POLICY
    _POLICY = new_policy
    return previous


@contextmanager
def bounds_policy(policy: BoundsPolicy | Sequence[int]) -> Iterator[BoundsPolicy]:
    """Temporarily install ``policy`` as the process-wide policy."""
    previous = set_bounds_policy(policy)
    try:
        yield get_bounds_policy()
    finally:
        set_bounds_policy(previous)


def load_bounds_policy(*, force_reload: bool = False) -> BoundsPolicy:
    """
    Build a policy from ``WKBFLAT_MAX_ELEMENTS``, reading a ``.env`` file first.

    The result is cached; it is not installed process-wide, callers pass it
    to :func:`set_bounds_policy` or to a codec explicitly.
    """
    global _LOADED_POLICY  # noqa: PLW0603
    if not force_reload and _LOADED_POLICY is not None:
        return _LOADED_POLICY

    dotenv_override = os.getenv(_ENV_DOTENV_PATH)
    if dotenv_override:
        load_dotenv(dotenv_override, override=True)
    else:
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path=dotenv_path)

    raw = os.getenv(_ENV_MAX_ELEMENTS)
    if raw is None or not raw.strip():
        policy = BoundsPolicy()
    else:
        policy = parse_max_elements(raw)

    _LOADED_POLICY = policy
    return _LOADED_POLICY
