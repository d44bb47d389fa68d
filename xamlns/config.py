from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRESENTATION_PREFIX = "def"
PRESENTATION_NAMESPACE = "http://schemas.microsoft.com/winfx/2006/xaml/presentation"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

DEFAULT_REFERENCE_FOLDER = "Reference"
DEFAULT_LOG_FOLDER = "Logs"


class ScanConfig(BaseModel):
    """
    Settings for a missing-namespace scan.

    `root_directory` defaults to a `Reference` folder under the current
    working directory; `base_directory` is where the `Logs` folder is created.
    """

    model_config = ConfigDict(frozen=True)

    root_directory: Path = Field(default_factory=lambda: Path.cwd() / DEFAULT_REFERENCE_FOLDER)
    extension: str = ".xaml"
    base_directory: Path = Field(default_factory=Path.cwd)
    log_folder: str = DEFAULT_LOG_FOLDER
    default_prefix: str = PRESENTATION_PREFIX
    default_namespace: str = PRESENTATION_NAMESPACE
    pause_on_exit: bool = True

    @field_validator("extension")
    @classmethod
    def _normalise_extension(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("extension must not be blank")
        return value if value.startswith(".") else f".{value}"

    @field_validator("default_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not value.strip() or ":" in value:
            raise ValueError(f"'{value}' is not a valid namespace prefix")
        return value

    @field_validator("default_namespace")
    @classmethod
    def _check_namespace(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("default_namespace must not be blank")
        return value
