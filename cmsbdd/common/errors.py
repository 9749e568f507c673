"""
Exceptions raised by the step library.

Assertion-style failures derive from AssertionError so behave reports them as
failed steps. Pending conditions derive from NotImplementedError and are
reported as pending (skipped) instead of failed.
"""


class ConfigurationError(Exception):
    """The test suite itself is misconfigured (unknown page, missing block...)"""


class UnknownPageIdentifierError(ConfigurationError):
    """A step referenced a page identifier missing from the page map"""

    def __init__(self, identifier: str):
        super().__init__(f"Unknown page identifier '{identifier}'.")
        self.identifier = identifier


class StepAssertionError(AssertionError):
    """Base class for every DOM assertion failure"""


class ElementNotFoundError(StepAssertionError):
    """A query returned no element where at least one was required"""

    def __init__(self, selector, subject: str = "element", message: str | None = None):
        super().__init__(message or f"Couldn't find {subject} matching '{selector}'")
        self.selector = selector
        self.subject = subject


class ElementUnexpectedlyFoundError(StepAssertionError):
    """A query returned elements where none were allowed"""

    def __init__(self, selector, subject: str = "element", message: str | None = None):
        super().__init__(message or f"Unexpected {subject} found matching '{selector}'")
        self.selector = selector
        self.subject = subject


class OrderingViolationError(StepAssertionError):
    """An expected item was not found after the previously matched one"""

    def __init__(self, name: str, previous: str):
        super().__init__(f"Couldn't find '{name}' after '{previous}'")
        self.name = name
        self.previous = previous


class CountMismatchError(StepAssertionError):
    """An exact count check failed"""

    def __init__(self, expected: int, actual: int, subject: str = "elements"):
        super().__init__(f"Expected {expected} {subject}, found {actual}")
        self.expected = expected
        self.actual = actual
        self.subject = subject


class UnexpectedPageError(StepAssertionError):
    """The browser is not on the expected URL"""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f"Unexpected URL of the current site. Expected: '{expected}'. Actual: '{actual}'."
        )
        self.expected = expected
        self.actual = actual


class MissingFileError(StepAssertionError):
    """A file to attach does not exist on disk"""

    def __init__(self, path: str):
        super().__init__(f"File '{path}' to attach does not exist")
        self.path = path


class PendingStepError(NotImplementedError):
    """The step (or part of it) is not implemented yet"""


class UnsupportedTypeError(PendingStepError):
    """No mapping is defined for a semantic type"""

    def __init__(self, type_name: str, message: str | None = None):
        super().__init__(message or f"Tags for '{type_name}' type not defined")
        self.type_name = type_name


class UnsupportedCapabilityError(Exception):
    """The browser driver cannot perform the requested action (e.g. run script)"""
