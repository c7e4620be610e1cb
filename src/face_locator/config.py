"""Global configuration for face-locator queries.

This module provides a package-wide configuration surface for the tolerances
used by the containment test, plus logging level control. Tolerances default
to the values the ground-snapping queries were tuned with and can be
overridden through environment variables, programmatically, or temporarily
with the `use` context manager.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import contextlib
import logging
import math
import os
from typing import ContextManager, Iterator, Optional


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
_LOGGER = logging.getLogger("face_locator.config")
_PACKAGE_LOGGER = logging.getLogger("face_locator")


def _parse_log_level(val: str | int | None, default: int = logging.WARNING) -> int:
    """Parse a logging level string or int into a `logging` level constant.

    Args:
        val: The desired level (e.g., "DEBUG", 10). May be None.
        default: Fallback level if `val` cannot be parsed.

    Returns:
        An integer logging level (e.g., logging.DEBUG).
    """
    if val is None:
        return default
    if isinstance(val, int):
        return val
    lvl = getattr(logging, str(val).strip().upper(), None)
    if isinstance(lvl, int):
        return lvl
    return default


def set_log_level(level: str | int = "WARNING") -> None:
    """Set the package logger level programmatically.

    Args:
        level: A standard logging level name or integer.
    """
    _PACKAGE_LOGGER.setLevel(_parse_log_level(level))


def _apply_env_log_level() -> None:
    """Apply FACE_LOCATOR_LOGLEVEL if set; otherwise leave the level to the host."""
    level = os.getenv("FACE_LOCATOR_LOGLEVEL")
    if level:
        set_log_level(level)


_apply_env_log_level()


# -----------------------------------------------------------------------------
# Env helpers
# -----------------------------------------------------------------------------
def float_env(varname: str, default: float) -> float:
    """Read an environment variable and interpret it as a float.

    Args:
        varname: The name of the environment variable.
        default: The default value if the variable is unset.

    Returns:
        The float value parsed from the environment.
    """
    return float(os.getenv(varname, str(default)))


# -----------------------------------------------------------------------------
# Tolerances
# -----------------------------------------------------------------------------
DEFAULT_PLANE_SLACK = 0.1
DEFAULT_EPSILON = 0.01


@dataclass(frozen=True)
class Tolerances:
    """Tolerances applied by the containment test.

    Attributes:
        plane_slack: How far below a face's plane (along the face normal) a
            point may sit and still count as above it. Points above the plane
            are never rejected.
        epsilon: Slack on each barycentric weight; a weight is accepted in
            ``[-epsilon, 1 + epsilon]``.
    """

    plane_slack: float = DEFAULT_PLANE_SLACK
    epsilon: float = DEFAULT_EPSILON

    def __post_init__(self) -> None:
        for name in ("plane_slack", "epsilon"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                _LOGGER.error("Invalid tolerance %s=%r", name, value)
                raise ValueError(f"{name} must be a finite value >= 0, got {value!r}")


def _tolerances_env() -> Tolerances:
    """Build tolerances from FACE_LOCATOR_PLANE_SLACK / FACE_LOCATOR_EPSILON."""
    tol = Tolerances(
        plane_slack=float_env("FACE_LOCATOR_PLANE_SLACK", DEFAULT_PLANE_SLACK),
        epsilon=float_env("FACE_LOCATOR_EPSILON", DEFAULT_EPSILON),
    )
    _LOGGER.debug(
        "Env tolerances -> plane_slack=%g epsilon=%g", tol.plane_slack, tol.epsilon
    )
    return tol


# -----------------------------------------------------------------------------
# Config singleton
# -----------------------------------------------------------------------------
class Config:
    """Global configuration for face-locator queries.

    Holds the tolerances used whenever a query is not given explicit ones.
    """

    def __init__(self) -> None:
        """Initialize config using environment defaults."""
        self._tolerances: Tolerances = _tolerances_env()
        _LOGGER.info(
            "Config initialized: plane_slack=%g epsilon=%g",
            self._tolerances.plane_slack,
            self._tolerances.epsilon,
        )

    @property
    def tolerances(self) -> Tolerances:
        """Return the active tolerances."""
        return self._tolerances

    def resolve(self, tolerances: Optional[Tolerances] = None) -> Tolerances:
        """Return `tolerances` if given, otherwise the active ones."""
        return self._tolerances if tolerances is None else tolerances

    def configure(
        self,
        *,
        plane_slack: Optional[float] = None,
        epsilon: Optional[float] = None,
        log_level: str | int | None = None,
    ) -> Config:
        """Update the active tolerances and/or log level.

        Args:
            plane_slack: New plane slack (unchanged if None).
            epsilon: New barycentric epsilon (unchanged if None).
            log_level: New package log level (unchanged if None).

        Returns:
            The `Config` instance (for chaining).
        """
        changes = {}
        if plane_slack is not None:
            changes["plane_slack"] = float(plane_slack)
        if epsilon is not None:
            changes["epsilon"] = float(epsilon)
        if changes:
            self._tolerances = replace(self._tolerances, **changes)
        if log_level is not None:
            set_log_level(log_level)
        _LOGGER.info(
            "Reconfigured: plane_slack=%g epsilon=%g",
            self._tolerances.plane_slack,
            self._tolerances.epsilon,
        )
        return self

    @contextlib.contextmanager
    def use(
        self,
        *,
        plane_slack: Optional[float] = None,
        epsilon: Optional[float] = None,
    ) -> Iterator[Tolerances]:
        """Temporarily switch tolerances within a context manager.

        Yields:
            The tolerances active inside the block. The previous tolerances
            are restored on exit.
        """
        prev = self._tolerances
        try:
            self.configure(plane_slack=plane_slack, epsilon=epsilon)
            yield self._tolerances
        finally:
            self._tolerances = prev
            _LOGGER.info(
                "Restored previous tolerances: plane_slack=%g epsilon=%g",
                prev.plane_slack,
                prev.epsilon,
            )


# Singleton & forwards
config = Config()


def tolerances() -> Tolerances:
    """Return the active tolerances (module-level)."""
    return config.tolerances


def configure(
    *,
    plane_slack: Optional[float] = None,
    epsilon: Optional[float] = None,
    log_level: str | int | None = None,
) -> Config:
    """Update the active configuration (module-level)."""
    return config.configure(
        plane_slack=plane_slack, epsilon=epsilon, log_level=log_level
    )


def use(
    *,
    plane_slack: Optional[float] = None,
    epsilon: Optional[float] = None,
) -> ContextManager[Tolerances]:
    """Temporarily switch tolerances within a context manager (module-level)."""
    return config.use(plane_slack=plane_slack, epsilon=epsilon)
