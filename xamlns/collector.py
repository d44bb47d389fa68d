import logging
import os
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


class FileCollector:
    """
    Recursively gathers files with a given extension below a root directory.
    Directories that cannot be read are logged and skipped.
    """

    @staticmethod
    def collect(root: Union[str, os.PathLike], extension: str = ".xaml") -> List[str]:
        root = os.fspath(root)
        if not os.path.isdir(root):
            logger.error(f"Could not find a part of the path '{root}'")
            return []

        files: List[str] = []
        FileCollector._collect_directory(root, extension.lower(), files)
        return files

    @staticmethod
    def _collect_directory(directory: str, extension: str, files: List[str]) -> None:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            logger.error(f"Unable to read directory '{directory}': {e}")
            return

        subdirectories: List[str] = []
        for entry in entries:
            kind = FileCollector._entry_kind(entry)
            if kind == "dir":
                subdirectories.append(entry.path)
            elif kind == "file" and entry.name.lower().endswith(extension):
                files.append(entry.path)

        for subdirectory in subdirectories:
            FileCollector._collect_directory(subdirectory, extension, files)

    @staticmethod
    def _entry_kind(entry: os.DirEntry) -> Optional[str]:
        try:
            if entry.is_dir(follow_symlinks=False):
                return "dir"
            if entry.is_file():
                return "file"
        except OSError as e:
            logger.error(f"Unable to inspect '{entry.path}': {e}")
        return None
