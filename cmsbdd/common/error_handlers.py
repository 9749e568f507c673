"""Centralized mapping of step exceptions to step outcomes."""

import functools
import logging
from dataclasses import dataclass

from . import status
from .errors import ConfigurationError, PendingStepError, StepAssertionError

logger = logging.getLogger("cmsbdd")


@dataclass(frozen=True)
class StepOutcome:
    """Result of running one step operation"""

    status: str
    message: str = ""
    error: BaseException | None = None

    @property
    def passed(self) -> bool:
        return self.status == status.PASSED

    @property
    def pending(self) -> bool:
        return self.status == status.PENDING


def _message_from_selector(error) -> str | None:
    """Extract a message that names the selector of a DOM failure."""
    selector = getattr(error, "selector", None)
    if selector is None:
        return None
    text = str(error)
    if str(selector) in text:
        return text
    return f"{text} [{getattr(error, 'subject', 'element')}: {selector}]"


def _extract_message(error) -> str:
    """Return a human-friendly message for the given error."""
    resolvers = (
        _message_from_selector,
        lambda err: err.args[0] if getattr(err, "args", None) else None,
        lambda err: getattr(err, "message", None),
    )
    for resolver in resolvers:
        message = resolver(error)
        if message:
            return str(message)
    return str(error) or type(error).__name__


def _outcome(code: str, error, *, log_as_error: bool = False) -> StepOutcome:
    """Build and log a step outcome."""
    message = _extract_message(error)
    log = logger.error if log_as_error else logger.warning
    log("%s: %s", code.upper(), message)
    return StepOutcome(code, message, error)


def handle_pending(error: PendingStepError) -> StepOutcome:
    """Pending steps are reported apart from failures."""
    return _outcome(status.PENDING, error)


def handle_assertion_error(error: AssertionError) -> StepOutcome:
    """DOM assertions that did not hold."""
    return _outcome(status.FAILED, error)


def handle_configuration_error(error: ConfigurationError) -> StepOutcome:
    """Authoring bugs in the suite configuration halt the scenario."""
    return _outcome(status.FAILED, error, log_as_error=True)


def handle_step_error(error: BaseException) -> StepOutcome:
    """Map any exception raised by a step operation to its outcome."""
    if isinstance(error, PendingStepError):
        return handle_pending(error)
    if isinstance(error, (StepAssertionError, AssertionError)):
        return handle_assertion_error(error)
    if isinstance(error, ConfigurationError):
        return handle_configuration_error(error)
    logger.exception("Unhandled exception: %s", error)
    return StepOutcome(status.FAILED, _extract_message(error), error)


def run_step(func, *args, **kwargs) -> StepOutcome:
    """Run a step operation and report how it ended."""
    try:
        func(*args, **kwargs)
    except Exception as error:  # pylint: disable=broad-except
        return handle_step_error(error)
    return StepOutcome(status.PASSED)


def catalog_step(func):
    """Run a behave step body and report pending steps as skipped scenarios.

    Failures are raised again unchanged so behave reports them as usual.
    """

    @functools.wraps(func)
    def wrapper(context, *args, **kwargs):
        outcome = run_step(func, context, *args, **kwargs)
        if outcome.pending:
            context.scenario.skip(reason=outcome.message)
            return
        if not outcome.passed:
            raise outcome.error

    return wrapper


__all__ = [
    "StepOutcome",
    "catalog_step",
    "handle_assertion_error",
    "handle_configuration_error",
    "handle_pending",
    "handle_step_error",
    "run_step",
]
