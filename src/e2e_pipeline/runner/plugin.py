import logging

import pytest
from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions

from .run_config import DesiredCapabilities, TestRunConfig

logger = logging.getLogger(__name__)


def build_chrome_options(capabilities: DesiredCapabilities) -> ChromeOptions:
    """Translate configured capabilities into selenium Chrome options."""
    options = ChromeOptions()
    chrome = capabilities.chrome_options
    if chrome.binary:
        options.binary_location = chrome.binary
    for arg in chrome.args:
        options.add_argument(arg)
    options.accept_insecure_certs = capabilities.accept_insecure_certs
    return options


class BrowserSuitePlugin:
    """
    pytest plugin registered for a single suite run.

    Provides the fixtures browser suites rely on: the run configuration,
    the launch URLs of the static server and a ``browser`` session
    connected to the running driver.
    """

    def __init__(self, run_config: TestRunConfig, driver_url: str):
        self._run_config = run_config
        self._driver_url = driver_url

    @pytest.fixture(scope="session")
    def run_config(self) -> TestRunConfig:
        return self._run_config

    @pytest.fixture(scope="session")
    def launch_url(self) -> str:
        return self._run_config.launch_url

    @pytest.fixture(scope="session")
    def launch_https_url(self) -> str:
        return self._run_config.launch_https_url

    @pytest.fixture
    def browser(self):
        """Fresh browser session per test, quit on teardown."""
        options = build_chrome_options(self._run_config.automation.desired_capabilities)
        driver = webdriver.Remote(command_executor=self._driver_url, options=options)
        logger.debug("Opened browser session %s", driver.session_id)
        yield driver
        driver.quit()
