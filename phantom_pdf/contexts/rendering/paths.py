"""
Platform-aware path handling for renderer input paths.

Windows builds of the renderer only open local documents given as file URIs,
so input paths are rewritten there and passed through unchanged elsewhere.
"""

import platform
from enum import Enum
from pathlib import PurePath
from typing import Optional, Union

WINDOWS_FILE_PREFIX = "file:///"


class PlatformFamily(Enum):
    WINDOWS = "windows"
    OTHER = "other"


def platform_family_of(os_name: str) -> PlatformFamily:
    """
    Classify an OS name ('Windows', 'WIN32', 'Linux', 'Darwin', ...).

    Anything starting with 'win', case-insensitively, is the Windows family.
    """
    return PlatformFamily.WINDOWS if os_name[:3].upper() == "WIN" else PlatformFamily.OTHER


def current_platform_family() -> PlatformFamily:
    return platform_family_of(platform.system())


def normalize_path(
    path: Union[str, PurePath], platform_family: Optional[PlatformFamily] = None
) -> str:
    """
    Convert a filesystem path into the form the renderer expects as its input argument.

    Args:
        path: Local path to the input document
        platform_family: Target platform (default: the running platform)

    Returns:
        ``file:///`` URI with forward slashes on Windows, the path unchanged otherwise

    Examples:
        normalize_path("C:\\a\\b.html", PlatformFamily.WINDOWS)  # "file:///C:/a/b.html"
        normalize_path("C:\\a\\b.html", PlatformFamily.OTHER)    # "C:\\a\\b.html"
    """
    if platform_family is None:
        platform_family = current_platform_family()

    path = str(path)
    if platform_family is PlatformFamily.WINDOWS:
        return WINDOWS_FILE_PREFIX + path.replace("\\", "/")
    return path
