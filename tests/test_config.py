from pathlib import Path

import pytest
from pydantic import ValidationError

from xamlns.config import PRESENTATION_NAMESPACE, ScanConfig


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = ScanConfig()

    assert config.root_directory == Path.cwd() / "Reference"
    assert config.base_directory == Path.cwd()
    assert config.extension == ".xaml"
    assert config.log_folder == "Logs"
    assert config.default_prefix == "def"
    assert config.default_namespace == PRESENTATION_NAMESPACE
    assert config.pause_on_exit is True


@pytest.mark.parametrize("value", ["XAML", ".Xaml", " xaml "])
def test_extension_is_normalised(value):
    assert ScanConfig(extension=value).extension == ".xaml"


@pytest.mark.parametrize(
    "field, value",
    [
        ("extension", "  "),
        ("default_prefix", "a:b"),
        ("default_prefix", ""),
        ("default_namespace", ""),
        ("default_namespace", "   "),
    ],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        ScanConfig(**{field: value})


def test_config_is_frozen():
    config = ScanConfig()
    with pytest.raises(ValidationError):
        config.extension = ".xml"


def test_root_directory_accepts_strings(tmp_path):
    config = ScanConfig(root_directory=str(tmp_path))
    assert config.root_directory == tmp_path
