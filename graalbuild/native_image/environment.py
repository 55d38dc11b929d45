"""Platform queries used by the native-image step.

Everything that depends on the host machine goes through Environment so tests
can substitute a deterministic fake.
"""

import os
import platform
import shutil
from pathlib import Path


class Environment:
    """Access to the operating system the build runs on."""

    def os_name(self) -> str:
        """Return the operating system name (e.g. 'Linux', 'Windows')."""
        return platform.system()

    def is_windows(self) -> bool:
        return "Windows" in self.os_name()

    def home(self) -> Path:
        """Return the current user's home directory."""
        return Path.home()

    def java_home(self) -> Path | None:
        """Locate the GraalVM home.

        Checks GRAALVM_HOME, then JAVA_HOME, then the installation that owns
        the ``java`` launcher on PATH.
        """
        for variable in ("GRAALVM_HOME", "JAVA_HOME"):
            value = os.environ.get(variable)
            if value:
                return Path(value)

        java = shutil.which("java")
        if java:
            return Path(java).resolve().parent.parent
        return None

    def exists(self, path: str) -> bool:
        """Check whether ``path`` exists.

        Raises:
            ValueError: If ``path`` is not a valid path on this platform.
            OSError: If ``path`` cannot be inspected (permissions, length).
        """
        try:
            os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True

    def is_executable(self, path: Path) -> bool:
        return path.is_file() and os.access(path, os.X_OK)

    def owner_ids(self, path: Path) -> tuple[int, int]:
        """Return the (uid, gid) owning ``path``.

        Raises:
            OSError: If the attributes cannot be read.
        """
        stat = os.stat(path)
        return stat.st_uid, stat.st_gid
