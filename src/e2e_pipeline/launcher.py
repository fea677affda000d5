"""
Test launcher: starts the static server and drives the browser suites.

The launcher owns the server. It waits for the server's one-shot
readiness future, runs the automation steps against the bound port and
always closes the listener before returning the process exit code.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from .runner.pytest_runner import PytestSeleniumRunner
from .runner.run_config import DEFAULT_SUITE_RETRIES, TestRunConfig, resolve_config_path
from .runner.runner_abstractions import AbstractTestRunner
from .server.config import ServerConfig
from .server.static_server import StaticServer

logger = logging.getLogger(__name__)

BANNER = "===Heroku Nightwatch Pipeline Demo==="
EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class TestLauncher:
    """Starts a StaticServer and runs the automation suites once it listens."""

    __test__ = False  # Not a pytest test class

    def __init__(
        self,
        server_config: Optional[ServerConfig] = None,
        config_path: Union[str, Path, None] = None,
        suite_retries: int = DEFAULT_SUITE_RETRIES,
        runner_factory: Callable[[TestRunConfig], AbstractTestRunner] = PytestSeleniumRunner,
        ready_timeout: Optional[float] = None,
        server_factory: Callable[[ServerConfig], StaticServer] = StaticServer,
    ):
        """
        Initialize the launcher.

        Args:
            server_config: Static server settings, defaults to the environment
            config_path: Automation config file, defaults to ``E2E_CONFIG``
                or ``e2e/e2e_config.json`` under the working directory
            suite_retries: Number of reruns of a failing suite
            runner_factory: Builds the runner from the run configuration
            ready_timeout: Seconds to wait for the server to listen, None waits forever
            server_factory: Builds the static server from its settings
        """
        self.server_config = server_config if server_config is not None else ServerConfig.from_env()
        self.config_path = Path(config_path) if config_path is not None else resolve_config_path()
        self.suite_retries = suite_retries
        self.runner_factory = runner_factory
        self.ready_timeout = ready_timeout
        self.server_factory = server_factory
        self.server: Optional[StaticServer] = None

    def run(self) -> int:
        """
        Serve the static root and run the suites against it.

        Bind failures propagate. A readiness timeout and any failure of
        the automation run are logged and reported through the returned exit code.

        Returns:
            EXIT_SUCCESS if the suites passed, EXIT_FAILURE otherwise
        """
        logger.info(BANNER)
        self.server = self.server_factory(self.server_config)
        self.server.start()
        try:
            return self._run_automation()
        finally:
            self.server.close()

    def _run_automation(self) -> int:
        runner = None
        try:
            self.server.listening.result(timeout=self.ready_timeout)
            run_config = TestRunConfig(
                config_path=self.config_path,
                port=self.server.port,
                suite_retries=self.suite_retries,
            )
            runner = self.runner_factory(run_config)
            runner.setup()
            runner.start_webdriver()
            passed = runner.run_tests()
        except Exception:
            logger.exception("Automation run failed")
            return EXIT_FAILURE
        finally:
            if runner is not None:
                runner.stop_webdriver()

        if not passed:
            logger.error("Browser suites failed after %d attempt(s)", self.suite_retries + 1)
            return EXIT_FAILURE
        return EXIT_SUCCESS

