from .runner_abstractions import AbstractTestRunner
from .run_config import AutomationConfig, TestRunConfig
from .pytest_runner import PytestSeleniumRunner

__all__ = ["AbstractTestRunner", "AutomationConfig", "TestRunConfig", "PytestSeleniumRunner"]
