from e2e_pipeline.server.config import DEFAULT_PORT, ServerConfig
from e2e_pipeline.server.static_server import StaticServer
from e2e_pipeline.runner.run_config import AutomationConfig, TestRunConfig
from e2e_pipeline.runner.pytest_runner import PytestSeleniumRunner
from e2e_pipeline.launcher import TestLauncher
from e2e_pipeline.exceptions import E2EPipelineError, TestRunError, WebDriverStartError
