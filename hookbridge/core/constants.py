"""Core constants and paths for HookBridge.

Single source of truth for config locations. All modules should import from
here instead of hardcoding paths like `Path.cwd() / ".hookbridge"`.
"""

from pathlib import Path

HOOKBRIDGE_DIR_NAME = ".hookbridge"


def get_defaults_dir() -> Path:
    """Get package defaults directory (shipped with package)."""
    import hookbridge
    return Path(hookbridge.__file__).parent / "defaults"


def get_local_config_path(cwd: Path) -> Path:
    """Get the project-local config override path for a working directory."""
    return cwd / HOOKBRIDGE_DIR_NAME / "config.json"


def get_default_log_dir() -> Path:
    """Get default log directory (relative to the working directory)."""
    return Path(HOOKBRIDGE_DIR_NAME) / "logs"
