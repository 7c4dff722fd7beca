"""
Renderer binary location.

The export pipeline receives a BinaryLocator at construction time instead of
looking the renderer up itself.
"""

import os
import shutil
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from typing_extensions import Protocol, runtime_checkable

from phantom_pdf.contexts.rendering.exceptions import RendererNotFoundError

load_dotenv()

BINARY_ENV_VAR = "PHANTOMJS_BIN"
DEFAULT_BINARY_NAME = "phantomjs"


@runtime_checkable
class BinaryLocator(Protocol):
    def locate(self) -> Path: ...


class StaticBinaryLocator:
    """Always returns the same, explicitly configured renderer path."""

    def __init__(self, binary_path: Union[str, Path]):
        self.binary_path = Path(binary_path)

    def locate(self) -> Path:
        return self.binary_path


class EnvironmentBinaryLocator:
    """
    Finds the renderer from the environment.

    Lookup order:
    1. The PHANTOMJS_BIN environment variable (.env is honored)
    2. ``phantomjs`` on PATH
    """

    def __init__(self, env_var: str = BINARY_ENV_VAR, binary_name: str = DEFAULT_BINARY_NAME):
        self.env_var = env_var
        self.binary_name = binary_name

    def locate(self) -> Path:
        """
        Raises:
            RendererNotFoundError: If neither lookup yields an executable
        """
        configured: Optional[str] = os.getenv(self.env_var)
        if configured:
            path = Path(configured).expanduser()
            if not path.exists():
                raise RendererNotFoundError(f"{self.env_var} points to a missing file: {path}")
            return path

        found = shutil.which(self.binary_name)
        if found is None:
            raise RendererNotFoundError(
                f"Renderer '{self.binary_name}' not found on PATH; set {self.env_var} to its location"
            )
        return Path(found)
