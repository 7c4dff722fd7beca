"""
Scoped ownership of an export job's temporary files.

Every temporary file created for a job (body HTML, layout script) is tracked
here and deleted when the scope exits, whether the job succeeded, failed or
timed out. Each path is released at most once, so nested scopes over the same
artifacts are safe.
"""

from pathlib import Path
from typing import List, Optional, Union

from phantom_pdf.contexts.rendering.logger import _log_debug


class TemporaryArtifacts:
    """
    Context manager that deletes tracked files on exit.

    Deletion is best effort: a file that is already gone or cannot be removed
    is logged at debug level and otherwise ignored.

    Example:
        with TemporaryArtifacts() as artifacts:
            body = artifacts.track(writer.persist(html))
            script = artifacts.track(generate_layout_script(layout, document))
            runner.run(job, artifacts)
        # body and script are gone here
    """

    def __init__(self, paths: Optional[List[Union[str, Path]]] = None):
        self._paths: List[Path] = [Path(p) for p in paths or []]

    def track(self, path: Union[str, Path]) -> Path:
        """Register a file for deletion and hand the path back."""
        path = Path(path)
        if path not in self._paths:
            self._paths.append(path)
        return path

    @property
    def paths(self) -> List[Path]:
        return list(self._paths)

    def release(self) -> None:
        """Delete every tracked file, forgetting each path as it goes."""
        while self._paths:
            path = self._paths.pop()
            try:
                path.unlink()
                _log_debug(f"Removed temporary file: {path}")
            except FileNotFoundError:
                _log_debug(f"Temporary file already gone: {path}")
            except OSError as e:
                _log_debug(f"Could not remove temporary file {path}: {e}")

    def __enter__(self) -> "TemporaryArtifacts":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False
