"""Workspace sandboxing for file resources.

Edit tools address files by workspace-relative (or absolute, in-workspace)
paths. Anything that resolves outside the workspace root, including through
symlinks, is refused.
"""

from pathlib import Path

from patchrunner.core.exceptions import E_PERMISSIONS, E_VALIDATION, WorkspaceSecurityError


class Workspace:
    """Root directory that all file resources must live under."""

    def __init__(self, root_path: str) -> None:
        """Initialize workspace with root path.

        Args:
            root_path: Absolute path to workspace root directory (created if missing)

        Raises:
            WorkspaceSecurityError: If root_path is not absolute
        """
        path_obj = Path(root_path)
        if not path_obj.is_absolute():
            raise WorkspaceSecurityError(
                f"Workspace root must be absolute: {root_path}",
                path=root_path,
                reason="not_absolute",
                error_code=E_VALIDATION,
            )

        self.root_path = path_obj.resolve()
        self.root_path.mkdir(parents=True, exist_ok=True)
        self._real_root = self.root_path.resolve()

    def resolve_path(self, path: str) -> Path:
        """Resolve a resource path to an absolute path inside the workspace.

        Args:
            path: Relative (to the root) or absolute path

        Returns:
            Resolved absolute path

        Raises:
            WorkspaceSecurityError: If the path is empty, uses ``~``, or escapes the root
        """
        if not path:
            raise WorkspaceSecurityError(
                "Empty path not allowed", path=path, reason="empty", error_code=E_VALIDATION
            )

        if path.startswith("~"):
            raise WorkspaceSecurityError(
                "Home directory paths not allowed",
                path=path,
                reason="home_expansion",
                error_code=E_PERMISSIONS,
            )

        path_obj = Path(path)
        if path_obj.is_absolute():
            resolved = path_obj.resolve()
        else:
            resolved = (self.root_path / path_obj).resolve()

        if not self.is_path_safe(resolved):
            raise WorkspaceSecurityError(
                f"Path outside workspace: {path} -> {resolved}",
                path=path,
                reason="outside_workspace",
                error_code=E_PERMISSIONS,
            )

        return resolved

    def is_path_safe(self, abs_path: str | Path) -> bool:
        """Return True if the path resolves to somewhere under the workspace root."""
        if not abs_path:
            return False

        try:
            Path(abs_path).resolve().relative_to(self._real_root)
        except (OSError, ValueError):
            return False
        return True
