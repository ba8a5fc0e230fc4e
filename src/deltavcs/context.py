"""Repository context: the root path and its resolved .delta subpaths."""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from deltavcs.constants import DELTA_DIR, HEAD_FILE, INDEX_FILE, OBJECTS_DIR
from deltavcs.errors import NotARepository, PathOutsideRepository


@dataclass(frozen=True)
class RepositoryContext:
    """Resolved locations of one repository.

    Built once per command and handed to every component, so nothing in the
    core depends on the process working directory.

    Example:
        >>> ctx = RepositoryContext.at(Path("/work/project"))
        >>> ctx.objects_dir
        PosixPath('/work/project/.delta/objects')
    """

    root: Path
    delta_dir: Path
    objects_dir: Path
    index_path: Path
    head_path: Path

    @classmethod
    def at(cls, root: Union[str, Path]) -> "RepositoryContext":
        """Build a context rooted at ``root`` without touching the disk."""
        root = Path(root).resolve()
        delta_dir = root / DELTA_DIR
        return cls(
            root=root,
            delta_dir=delta_dir,
            objects_dir=delta_dir / OBJECTS_DIR,
            index_path=delta_dir / INDEX_FILE,
            head_path=delta_dir / HEAD_FILE,
        )

    @classmethod
    def open(cls, root: Union[str, Path]) -> "RepositoryContext":
        """Build a context for an initialized repository.

        Raises:
            NotARepository: If ``root`` has no .delta directory
        """
        ctx = cls.at(root)
        if not ctx.is_initialized():
            raise NotARepository(
                f"Not a delta repository (no {DELTA_DIR}/ found in {ctx.root})"
            )
        return ctx

    def is_initialized(self) -> bool:
        return self.delta_dir.is_dir()

    def is_metadata_path(self, rel_path: str) -> bool:
        """Check whether a root-relative POSIX path lies within .delta."""
        return rel_path == DELTA_DIR or rel_path.startswith(DELTA_DIR + "/")

    def relative_path(self, path: Union[str, Path]) -> str:
        """Return ``path`` relative to the root in POSIX form.

        Relative paths are taken relative to the repository root.

        Raises:
            PathOutsideRepository: If ``path`` resolves outside the root
        """
        path = Path(path)
        abs_path = path if path.is_absolute() else self.root / path
        # resolve() keeps symlinked roots (e.g. /tmp on macOS) comparable
        try:
            return abs_path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            raise PathOutsideRepository(
                f"Path {path} is outside repository root {self.root}"
            ) from None
