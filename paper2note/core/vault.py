"""
Filesystem-backed note vault - the host document store
"""
from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Dict, Union

from .errors import DocumentError, DuplicateFileError
from .frontmatter import join_frontmatter, split_frontmatter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Vault:
    """
    A directory of markdown notes addressed by vault-relative posix paths

    Every read goes to disk; nothing is cached between calls, so callers
    always see the current content right before they write.
    """

    def __init__(self, root: PathLike):
        self.root = Path(root).expanduser().resolve()

    def path(self, relative: PathLike) -> Path:
        """Absolute filesystem path of a vault-relative path"""
        candidate = Path(relative)
        if candidate.is_absolute():
            return candidate
        return self.root / candidate

    def relative(self, path: PathLike) -> str:
        absolute = self.path(path).resolve()
        try:
            return absolute.relative_to(self.root).as_posix()
        except ValueError:
            return absolute.as_posix()

    def exists(self, relative: PathLike) -> bool:
        return self.path(relative).exists()

    def create(self, relative: PathLike, content: str = "") -> str:
        """
        Create a new text file

        Raises:
            DuplicateFileError: if a file already exists at ``relative``
            DocumentError: on any other filesystem failure
        """
        target = self.path(relative)
        if target.exists():
            raise DuplicateFileError(self.relative(target))
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("x", encoding="utf-8") as f:
                f.write(content)
        except FileExistsError as exc:
            raise DuplicateFileError(self.relative(target)) from exc
        except OSError as exc:
            raise DocumentError(f"Unable to create {relative}: {exc}") from exc
        logger.debug("Created %s", target)
        return self.relative(target)

    def read(self, relative: PathLike) -> str:
        try:
            return self.path(relative).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentError(f"Unable to read {relative}: {exc}") from exc

    def modify(self, relative: PathLike, content: str) -> None:
        target = self.path(relative)
        if not target.is_file():
            raise DocumentError(f"Note not found: {relative}")
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise DocumentError(f"Unable to write {relative}: {exc}") from exc

    def rename(self, relative: PathLike, new_relative: PathLike) -> str:
        """
        Move a file to ``new_relative`` and return its new vault path

        Renaming onto itself is a no-op; renaming onto another existing file
        raises DuplicateFileError.
        """
        source = self.path(relative)
        target = self.path(new_relative)
        if source.resolve() == target.resolve():
            return self.relative(source)
        if target.exists():
            raise DuplicateFileError(self.relative(target))
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            source.rename(target)
        except OSError as exc:
            raise DocumentError(f"Unable to rename {relative} to {new_relative}: {exc}") from exc
        logger.debug("Renamed %s -> %s", source, target)
        return self.relative(target)

    def read_binary(self, relative: PathLike) -> bytes:
        try:
            return self.path(relative).read_bytes()
        except OSError as exc:
            raise DocumentError(f"Unable to read {relative}: {exc}") from exc

    def write_binary(self, relative: PathLike, data: bytes) -> str:
        target = self.path(relative)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise DocumentError(f"Unable to write {relative}: {exc}") from exc
        return self.relative(target)

    def mkdir(self, relative: PathLike) -> None:
        """Create a folder; an existing folder is fine"""
        try:
            self.path(relative).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DocumentError(f"Unable to create folder {relative}: {exc}") from exc

    def read_frontmatter(self, relative: PathLike) -> Dict[str, Any]:
        """Parsed frontmatter of a note, or an empty mapping if it has none"""
        frontmatter, _ = split_frontmatter(self.read(relative))
        return dict(frontmatter or {})

    def process_frontmatter(
        self,
        relative: PathLike,
        update: Callable[[Dict[str, Any]], None],
    ) -> None:
        """
        Apply ``update`` to the note's frontmatter mapping in place

        Keys that ``update`` leaves alone are written back untouched. A note
        without frontmatter gains a block in front of its existing body.
        """
        frontmatter, body = split_frontmatter(self.read(relative))
        mapping = dict(frontmatter or {})
        update(mapping)
        self.modify(relative, join_frontmatter(mapping, body))

    @staticmethod
    def parent_of(relative: str) -> str:
        parent = PurePosixPath(relative).parent.as_posix()
        return "" if parent == "." else parent

    @staticmethod
    def join(folder: str, name: str) -> str:
        return f"{folder}/{name}" if folder else name
