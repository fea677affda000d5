class E2EPipelineError(Exception):
    """Base class for failures of the automation run."""


class WebDriverStartError(E2EPipelineError):
    """The browser driver process could not be started."""


class TestRunError(E2EPipelineError):
    """The browser suites could not be executed at all."""

    __test__ = False  # Not a pytest test class
