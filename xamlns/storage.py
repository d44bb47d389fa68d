import os
from typing import Optional, Union


def create_path_for_application_file(
    file_name: str,
    folder_name: Optional[str] = None,
    base_directory: Optional[Union[str, os.PathLike]] = None,
) -> str:
    """
    Builds a path for `file_name` inside `folder_name` under the application's
    base directory, creating the folder if it does not exist yet.

    Returns an empty string when a folder name is given but blank. Without a
    folder name the file is placed directly in the base directory.
    """
    base = os.fspath(base_directory) if base_directory is not None else os.getcwd()

    if folder_name is None:
        return os.path.join(base, file_name)

    if not folder_name.strip():
        return ""

    folder_path = os.path.join(base, folder_name)
    os.makedirs(folder_path, exist_ok=True)

    return os.path.join(folder_path, file_name)
