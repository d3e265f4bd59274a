"""Version and system information for annotation-validator.

This module provides version information and system diagnostics useful for:
- Bug reports and error reporting
- Debugging environment issues

Usage:
    from annotation_validator import __version__
    from annotation_validator._version import get_version_info, print_version_info

    print(__version__)  # "0.1.0"
    print_version_info()

CLI Usage:
    python -m annotation_validator --version
    python -m annotation_validator info
"""

from __future__ import annotations

import importlib
import importlib.metadata
import importlib.util
import platform
import sys
from typing import Any, Dict, Optional

# Version components
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0
VERSION_SUFFIX = ""  # e.g., "alpha", "beta", "rc1"

__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}{'-' + VERSION_SUFFIX if VERSION_SUFFIX else ''}"


def get_python_info() -> Dict[str, str]:
    """Get Python interpreter information.

    Returns:
        Dict with Python version, implementation, and path.
    """
    return {
        "version": platform.python_version(),
        "implementation": platform.python_implementation(),
        "executable": sys.executable,
    }


def get_platform_info() -> Dict[str, str]:
    """Get platform/OS information."""
    return {
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
    }


def _get_package_version(
    module_name: str, package_name: Optional[str] = None
) -> Optional[str]:
    """Get package version, trying ``__version__`` first, then distribution metadata.

    Args:
        module_name: Name of the module to import.
        package_name: Distribution name (defaults to module_name).

    Returns:
        Version string or None if not installed.
    """
    if importlib.util.find_spec(module_name) is None:
        return None

    module = importlib.import_module(module_name)
    version = getattr(module, "__version__", None)
    if version:
        return str(version)

    try:
        return importlib.metadata.version(package_name or module_name)
    except importlib.metadata.PackageNotFoundError:
        return None


def get_dependency_versions() -> Dict[str, Optional[str]]:
    """Get versions of the runtime dependencies."""
    return {
        "pydantic": _get_package_version("pydantic"),
        "pydantic_core": _get_package_version("pydantic_core", "pydantic-core"),
        "typing_extensions": _get_package_version("typing_extensions", "typing-extensions"),
    }


def get_version_info() -> Dict[str, Any]:
    """Get comprehensive version and system information.

    Example:
        >>> info = get_version_info()
        >>> info["annotation_validator"]
        '0.1.0'
    """
    return {
        "annotation_validator": __version__,
        "python": get_python_info(),
        "platform": get_platform_info(),
        "dependencies": get_dependency_versions(),
    }


def format_version_info(info: Optional[Dict[str, Any]] = None) -> str:
    """Format version info as a human-readable string with aligned colons."""
    if info is None:
        info = get_version_info()

    sections = [
        ("Python", [(k.capitalize(), v) for k, v in info["python"].items()]),
        ("Platform", [(k.capitalize(), v) for k, v in info["platform"].items()]),
        (
            "Dependencies",
            [(pkg, ver if ver else "not installed") for pkg, ver in info["dependencies"].items()],
        ),
    ]
    width = max(len(label) for _, fields in sections for label, _ in fields)

    lines = [f"annotation-validator: {info['annotation_validator']}"]
    for title, fields in sections:
        lines.append("")
        lines.append(f"{title}:")
        for label, value in fields:
            lines.append(f"  {label:>{width}} : {value}")

    return "\n".join(lines)


def print_version_info() -> None:
    """Print version and system information to stdout."""
    print(format_version_info())
