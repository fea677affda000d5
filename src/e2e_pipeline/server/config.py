import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Union

DEFAULT_PORT = 9080  # Local development port when the platform sets no PORT
STATIC_ROOT = Path(__file__).resolve().parent.parent / "static"


def resolve_port(env: Optional[Mapping[str, str]] = None) -> int:
    """
    Read the listening port from the environment.

    Args:
        env: Mapping to read from, defaults to ``os.environ``

    Returns:
        Value of ``PORT``, or DEFAULT_PORT when it is absent or empty
    """
    if env is None:
        env = os.environ

    raw = env.get("PORT", "").strip()
    if not raw:
        return DEFAULT_PORT

    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class ServerConfig:
    """Immutable static server settings with validation."""

    port: int = DEFAULT_PORT
    static_root: Path = field(default=STATIC_ROOT)
    host: str = ""  # All interfaces

    def __post_init__(self):
        """Validate settings after initialization."""
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ValueError(f"Port must be an integer, got {self.port!r}")
        if not 0 <= self.port <= 65535:
            raise ValueError(f"Port must be in range [0, 65535], got {self.port}")

        # Frozen dataclass, so normalise through object.__setattr__
        object.__setattr__(self, "static_root", Path(self.static_root).resolve())
        if not self.static_root.is_dir():
            raise FileNotFoundError(
                f"Static root {self.static_root} is not a directory"
            )

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        static_root: Union[str, Path, None] = None,
    ) -> "ServerConfig":
        """Build a config from ``PORT`` and an optional static root override."""
        return cls(
            port=resolve_port(env),
            static_root=STATIC_ROOT if static_root is None else static_root,
        )
