"""
Configuration handed to the browser automation run.

``AutomationConfig`` mirrors the static configuration file (suite folders,
report folder, driver process and browser capabilities). ``TestRunConfig``
binds that file to a concrete server port and suite retry count for a
single run.
"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

# Relative to the working directory, the app root on the hosting platform
DEFAULT_CONFIG_PATH = Path("e2e") / "e2e_config.json"
DEFAULT_SUITE_RETRIES = 3

USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 7.0; SM-G930VC Build/NRD90M; wv) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Version/4.0 "
    "Chrome/58.0.3029.83 Mobile Safari/537.36"
)
CHROME_ARGS = (
    "headless",
    "disable-gpu",
    "disable-dev-shm-usage",
    "no-sandbox",
    "window-size=1200,900",
    f"--user-agent={USER_AGENT}",
)


def _from_mapping(cls, data: Mapping[str, Any], section: str) -> Dict[str, Any]:
    """Check ``data`` only names fields of ``cls`` and return it as kwargs."""
    if not isinstance(data, Mapping):
        raise ValueError(f"'{section}' must be an object, got {type(data).__name__}")

    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {sorted(unknown)}")
    return dict(data)


@dataclass(frozen=True)
class WebDriverSettings:
    """Chromedriver process settings."""

    start_process: bool = True
    server_path: str = "/app/.chromedriver/bin/chromedriver"
    port: int = 4242
    cli_args: Tuple[str, ...] = ("--port=4242", "--verbose")

    def __post_init__(self):
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ValueError(f"Webdriver port must be an integer, got {self.port!r}")
        if not 0 < self.port <= 65535:
            raise ValueError(f"Webdriver port must be in range [1, 65535], got {self.port}")
        object.__setattr__(self, "cli_args", tuple(self.cli_args))

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}"

    def service_args(self) -> List[str]:
        """CLI args minus ``--port``, which the selenium Service passes itself."""
        return [arg for arg in self.cli_args if not arg.startswith("--port=")]


@dataclass(frozen=True)
class ChromeOptionsConfig:
    """Chrome launch options. ``binary`` falls back to ``GOOGLE_CHROME_SHIM``."""

    binary: Optional[str] = None
    args: Tuple[str, ...] = CHROME_ARGS

    def __post_init__(self):
        if self.binary is None:
            object.__setattr__(self, "binary", os.environ.get("GOOGLE_CHROME_SHIM") or None)
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class DesiredCapabilities:
    """Browser capabilities requested from the driver."""

    browser_name: str = "chrome"
    accept_insecure_certs: bool = True
    chrome_options: ChromeOptionsConfig = field(default_factory=ChromeOptionsConfig)

    def __post_init__(self):
        if not isinstance(self.browser_name, str):
            raise ValueError(f"Browser name must be a string, got {self.browser_name!r}")
        if self.browser_name.lower() != "chrome":
            raise ValueError(f"Unsupported browser: {self.browser_name}")


@dataclass(frozen=True)
class AutomationConfig:
    """Static configuration object read from the automation config file."""

    src_folders: Tuple[Path, ...] = (Path("tests"),)
    output_folder: Optional[Path] = None  # None disables reports
    webdriver: WebDriverSettings = field(default_factory=WebDriverSettings)
    desired_capabilities: DesiredCapabilities = field(default_factory=DesiredCapabilities)

    def __post_init__(self):
        if not self.src_folders:
            raise ValueError("At least one source folder is required")
        object.__setattr__(self, "src_folders", tuple(Path(p) for p in self.src_folders))
        if self.output_folder is not None:
            object.__setattr__(self, "output_folder", Path(self.output_folder))

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], base_dir: Union[str, Path, None] = None
    ) -> "AutomationConfig":
        """
        Build a config from parsed JSON.

        Args:
            data: Parsed configuration object
            base_dir: Directory relative folder paths are resolved against

        Returns:
            AutomationConfig with absolute folder paths when base_dir is given
        """
        kwargs = _from_mapping(cls, data, "config")
        base = Path(base_dir) if base_dir is not None else None

        def resolve(path: Union[str, Path]) -> Path:
            path = Path(path)
            return base / path if base is not None and not path.is_absolute() else path

        if "src_folders" in kwargs:
            folders = kwargs["src_folders"]
            if isinstance(folders, str):
                folders = [folders]
            kwargs["src_folders"] = tuple(resolve(p) for p in folders)

        if "output_folder" in kwargs:
            output = kwargs["output_folder"]
            # false/null in the file disables the output folder
            kwargs["output_folder"] = resolve(output) if output else None

        if "webdriver" in kwargs:
            kwargs["webdriver"] = WebDriverSettings(
                **_from_mapping(WebDriverSettings, kwargs["webdriver"], "webdriver")
            )

        if "desired_capabilities" in kwargs:
            caps = _from_mapping(
                DesiredCapabilities, kwargs["desired_capabilities"], "desired_capabilities"
            )
            if "chrome_options" in caps:
                caps["chrome_options"] = ChromeOptionsConfig(
                    **_from_mapping(ChromeOptionsConfig, caps["chrome_options"], "chrome_options")
                )
            kwargs["desired_capabilities"] = DesiredCapabilities(**caps)

        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "AutomationConfig":
        """Load a JSON config file, resolving folders relative to its directory."""
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file {path} not found")

        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data, base_dir=path.resolve().parent)


@dataclass(frozen=True)
class TestRunConfig:
    """One automation run: config file, retry count and target URLs."""

    __test__ = False  # Not a pytest test class

    config_path: Path
    port: int
    suite_retries: int = DEFAULT_SUITE_RETRIES
    automation: Optional[AutomationConfig] = None

    def __post_init__(self):
        if self.suite_retries < 0:
            raise ValueError(f"Suite retries must be non-negative, got {self.suite_retries}")
        object.__setattr__(self, "config_path", Path(self.config_path))
        if self.automation is None:
            object.__setattr__(
                self, "automation", AutomationConfig.from_file(self.config_path)
            )

    @property
    def launch_url(self) -> str:
        return f"http://localhost:{self.port}/"

    @property
    def launch_https_url(self) -> str:
        # Placeholder, the static server only speaks plain HTTP
        return f"http://localhost:{self.port}/"


def resolve_config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """Config file from ``E2E_CONFIG``, else DEFAULT_CONFIG_PATH under the working directory."""
    if env is None:
        env = os.environ
    return Path.cwd() / (env.get("E2E_CONFIG") or DEFAULT_CONFIG_PATH)
