from abc import ABC, abstractmethod


class AbstractTestRunner(ABC):
    """Abstract base class for browser automation runners."""

    __test__ = False  # Not a pytest test class

    @abstractmethod
    def setup(self) -> None:
        """Prepare the run: validate folders, create report directories."""
        pass

    @abstractmethod
    def start_webdriver(self) -> None:
        """Start the browser driver process."""
        pass

    @abstractmethod
    def run_tests(self) -> bool:
        """
        Execute the browser suites.

        Returns:
            True if the suites passed, False if they failed
        """
        pass

    def stop_webdriver(self) -> None:
        """Stop the browser driver process if one was started."""
        pass
