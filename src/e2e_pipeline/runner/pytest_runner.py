import logging
import os
import warnings
from typing import List, Optional

import pytest
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.service import Service

from ..exceptions import TestRunError, WebDriverStartError
from .plugin import BrowserSuitePlugin
from .run_config import TestRunConfig
from .runner_abstractions import AbstractTestRunner

logger = logging.getLogger(__name__)

# pytest exit codes after which rerunning the suite cannot help
_FATAL_EXIT_CODES = {
    pytest.ExitCode.INTERRUPTED,
    pytest.ExitCode.INTERNAL_ERROR,
    pytest.ExitCode.USAGE_ERROR,
    pytest.ExitCode.NO_TESTS_COLLECTED,
}


class PytestSeleniumRunner(AbstractTestRunner):
    """
    Runs browser suites with pytest against a selenium-managed chromedriver.

    The whole suite is rerun up to ``suite_retries`` times after a failed
    attempt; the run passes as soon as one attempt passes.
    """

    def __init__(self, run_config: TestRunConfig):
        self.run_config = run_config
        self._service: Optional[Service] = None
        self._driver_url: Optional[str] = None
        self.attempts = 0

    @property
    def automation(self):
        return self.run_config.automation

    def setup(self) -> None:
        for folder in self.automation.src_folders:
            if not folder.exists():
                raise FileNotFoundError(f"Suite folder {folder} not found")

        if self.automation.output_folder is not None:
            self.automation.output_folder.mkdir(parents=True, exist_ok=True)

        chrome = self.automation.desired_capabilities.chrome_options
        if chrome.binary is None:
            warnings.warn(
                "GOOGLE_CHROME_SHIM is not set, chromedriver will look up Chrome itself",
                UserWarning,
            )

    def start_webdriver(self) -> None:
        settings = self.automation.webdriver
        if not settings.start_process:
            self._driver_url = settings.url
            logger.info("Using running webdriver at %s", self._driver_url)
            return

        if self._service is not None:
            raise RuntimeError("Webdriver already started")

        path = settings.server_path
        if not os.path.isfile(path):
            raise WebDriverStartError(f"Webdriver binary {path} not found")

        service = Service(
            executable_path=path,
            port=settings.port,
            service_args=settings.service_args(),
        )
        try:
            service.start()
        except (OSError, WebDriverException) as err:
            raise WebDriverStartError(f"Could not start webdriver {path}: {err}") from err

        self._service = service
        self._driver_url = service.service_url
        logger.info("Started webdriver at %s", self._driver_url)

    def _pytest_args(self) -> List[str]:
        args = [str(folder) for folder in self.automation.src_folders]
        args += ["-p", "no:cacheprovider", "--import-mode=importlib"]
        if self.automation.output_folder is not None:
            report = self.automation.output_folder / f"report-{self.attempts}.xml"
            args.append(f"--junitxml={report}")
        return args

    def run_tests(self) -> bool:
        if self._driver_url is None:
            raise RuntimeError("Webdriver must be started before running tests")

        max_attempts = self.run_config.suite_retries + 1
        while self.attempts < max_attempts:
            self.attempts += 1
            plugin = BrowserSuitePlugin(self.run_config, self._driver_url)
            exit_code = pytest.main(self._pytest_args(), plugins=[plugin])

            if exit_code == pytest.ExitCode.OK:
                logger.info("Suites passed on attempt %d", self.attempts)
                return True
            if exit_code in _FATAL_EXIT_CODES:
                raise TestRunError(f"pytest could not run the suites (exit code {int(exit_code)})")

            logger.warning("Suites failed on attempt %d of %d", self.attempts, max_attempts)

        return False

    def stop_webdriver(self) -> None:
        if self._service is None:
            return
        service, self._service = self._service, None
        service.stop()
        logger.info("Stopped webdriver")
