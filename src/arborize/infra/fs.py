from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the filesystem-access collaborator of the tree builder: listing a
directory's children as FsEntry values and composing that listing into pure
or effectful expansion functions. Also hosts the cross-platform path helpers
used by configuration and output persistence.
"""

import logging
import os
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from arborize.core.effects import in_thread, with_timeout
from arborize.domain.tree_models import FsEntry

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Arborize"
UNIX_APP_DIR_NAME = ".arborize"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/Arborize
    - Linux/Mac: ~/.arborize

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables and the user home shortcut. Reverts to
    ``fallback`` when the input is empty.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)

# -----------------------------------------------------------------------------
# DIRECTORY LISTING API
# -----------------------------------------------------------------------------

def root_entry(path: str) -> FsEntry:
    """
    Create the depth-0 entry for a scan root.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    abs_path = os.path.abspath(path)
    if not os.path.exists(abs_path):
        raise FileNotFoundError(f"Path does not exist: {abs_path}")

    name = os.path.basename(abs_path.rstrip(os.sep)) or abs_path
    return FsEntry(path=abs_path, name=name, depth=0, is_dir=os.path.isdir(abs_path))


def list_entries(
        entry: FsEntry,
        *,
        show_hidden: bool = False,
        follow_symlinks: bool = False,
        dirs_first: bool = False,
) -> List[FsEntry]:
    """
    List the children of a directory entry, sorted by name.

    Files are leaves. Symbolic links to directories are only treated as
    directories when ``follow_symlinks`` is set; cycles introduced by doing
    so are not detected.

    Args:
        entry: Entry to list. Non-directories have no children.
        show_hidden: Include names starting with a dot.
        follow_symlinks: Treat symlinked directories as expandable.
        dirs_first: Place directories before files.

    Returns:
        List[FsEntry]: Children at ``entry.depth + 1``.

    Raises:
        OSError: Propagated unchanged from the underlying scan.
    """
    if not entry.is_dir:
        return []

    children: List[FsEntry] = []
    with os.scandir(entry.path) as it:
        for item in it:
            if not show_hidden and item.name.startswith("."):
                continue
            children.append(FsEntry(
                path=item.path,
                name=item.name,
                depth=entry.depth + 1,
                is_dir=item.is_dir(follow_symlinks=follow_symlinks),
            ))

    children.sort(key=lambda e: e.name)
    if dirs_first:
        children.sort(key=lambda e: not e.is_dir)

    logger.debug(f"Listed {len(children)} entries under {entry.path}")
    return children


# -----------------------------------------------------------------------------
# EXPANSION FUNCTIONS
# -----------------------------------------------------------------------------

def make_fs_expand(
        *,
        show_hidden: bool = False,
        follow_symlinks: bool = False,
        dirs_first: bool = False,
        max_depth: Optional[int] = None,
) -> Callable[[FsEntry], Sequence[FsEntry]]:
    """
    Compose list_entries into a pure expansion function.

    Args:
        max_depth: Entries at this depth are not expanded. ``None`` means
            unlimited.
    """
    def _expand(entry: FsEntry) -> Sequence[FsEntry]:
        if max_depth is not None and entry.depth >= max_depth:
            return []
        return list_entries(
            entry,
            show_hidden=show_hidden,
            follow_symlinks=follow_symlinks,
            dirs_first=dirs_first,
        )

    return _expand


def make_fs_expand_async(
        *,
        show_hidden: bool = False,
        follow_symlinks: bool = False,
        dirs_first: bool = False,
        max_depth: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
) -> Callable[[FsEntry], Awaitable[Sequence[FsEntry]]]:
    """
    Compose list_entries into an effectful expansion function.

    Each listing runs in a worker thread; ``timeout_seconds`` bounds every
    individual listing and surfaces as ``asyncio.TimeoutError``.
    """
    expand = make_fs_expand(
        show_hidden=show_hidden,
        follow_symlinks=follow_symlinks,
        dirs_first=dirs_first,
        max_depth=max_depth,
    )
    return with_timeout(in_thread(expand), timeout_seconds)
