"""
Configuration for leftover_junk.

ScanConfig holds the fixed locations and name tables the scanners use. Settings
holds per-run options resolved from the environment and an optional .env file.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .roots import MirroredRoot, default_roots

KEY_BLACKLIST = frozenset(
    {"Microsoft", "Wow6432Node", "Windows", "Classes", "Clients", "RegisteredApplications"}
)

# Always point to the program's directory
INSTALL_DIR_VALUE_NAMES = frozenset(
    {
        "InstallDir",
        "Install_Dir",
        "Install Directory",
        "InstDir",
        "ApplicationPath",
        "Install folder",
        "Last Stable Install Path",
        "TARGETDIR",
        "JavaHome",
    }
)

# Always point to the program's main executable
EXE_PATH_VALUE_NAMES = frozenset({"exe64", "exe32", "Executable", "PathToExe", "ExePath"})

# Can point to either
EXE_OR_DIR_VALUE_NAMES = frozenset({"Path", "Path64", "pth", "PlayerPath", "AppPath"})

FIREWALL_RULES_KEY = (
    r"HKEY_LOCAL_MACHINE\SYSTEM\CurrentControlSet\Services\SharedAccess\Parameters\FirewallPolicy\FirewallRules"
)
TRACING_KEY = r"HKEY_LOCAL_MACHINE\SOFTWARE\Microsoft\Tracing"
CLSID_KEYS = (
    r"HKEY_LOCAL_MACHINE\SOFTWARE\Classes\CLSID",
    r"HKEY_LOCAL_MACHINE\SOFTWARE\Classes\WOW6432Node\CLSID",
    r"HKEY_CURRENT_USER\SOFTWARE\Classes\CLSID",
    r"HKEY_CURRENT_USER\SOFTWARE\Classes\WOW6432Node\CLSID",
)

ENV_FILE_VARIABLE = "LEFTOVER_ENV_FILE"
_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"0", "false", "no", "n", "off"}


class ConfigurationError(RuntimeError):
    """Raised when configuration values are missing or invalid."""


def _folded(names: frozenset[str]) -> frozenset[str]:
    return frozenset(name.casefold() for name in names)


@dataclass(frozen=True)
class ScanConfig:
    """Locations and name tables used by one engine instance."""

    roots: tuple[MirroredRoot, ...]
    key_blacklist: frozenset[str] = field(default_factory=lambda: _folded(KEY_BLACKLIST))
    install_dir_value_names: frozenset[str] = field(default_factory=lambda: _folded(INSTALL_DIR_VALUE_NAMES))
    exe_path_value_names: frozenset[str] = field(default_factory=lambda: _folded(EXE_PATH_VALUE_NAMES))
    exe_or_dir_value_names: frozenset[str] = field(default_factory=lambda: _folded(EXE_OR_DIR_VALUE_NAMES))
    firewall_rules_key: str = FIREWALL_RULES_KEY
    tracing_key: str = TRACING_KEY
    clsid_keys: tuple[str, ...] = CLSID_KEYS

    def is_blacklisted(self, key_name: str) -> bool:
        return key_name.casefold() in self.key_blacklist


def is_64bit_host() -> bool:
    return sys.maxsize > 2**32


def build_scan_config(include_secondary_bitness: Optional[bool] = None) -> ScanConfig:
    """Build the default ScanConfig; Wow6432Node mirrors follow the host bitness unless overridden."""
    if include_secondary_bitness is None:
        include_secondary_bitness = is_64bit_host()
    return ScanConfig(roots=default_roots(include_secondary_bitness))


@dataclass(frozen=True)
class Settings:
    """Per-run options resolved from the environment."""

    snapshot_path: Path | None
    include_wow64: bool | None
    report_dir: Path | None


def _resolve_env_path(env_path: Optional[str] = None) -> str:
    """
    Determine which .env file should be read.

    Priority order:
      1. Explicit parameter
      2. LEFTOVER_ENV_FILE environment variable
      3. ~/.env
    """
    if env_path:
        return env_path
    env_file = os.environ.get(ENV_FILE_VARIABLE)
    if env_file:
        return env_file
    return str(Path.home() / ".env")


def parse_bool(name: str, raw: str | None) -> bool | None:
    """Parse a boolean environment value; None when unset.

    Raises:
        ConfigurationError: If the value is not a recognised boolean string.
    """
    if raw is None or not raw.strip():
        return None
    text = raw.strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ConfigurationError(f"{name} must be true/false, got {raw!r}")


def _optional_path(raw: str | None) -> Path | None:
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


def load_settings(env_path: Optional[str] = None) -> Settings:
    """Load settings from the process environment after reading the .env file."""
    load_dotenv(_resolve_env_path(env_path))
    return Settings(
        snapshot_path=_optional_path(os.getenv("LEFTOVER_SNAPSHOT")),
        include_wow64=parse_bool("LEFTOVER_INCLUDE_WOW64", os.getenv("LEFTOVER_INCLUDE_WOW64")),
        report_dir=_optional_path(os.getenv("LEFTOVER_REPORT_DIR")),
    )
