from pathlib import Path

import pytest
import yaml

from utf8conv import config as config_module
from utf8conv.config import AppConfig, dump_default_config, load_config
from utf8conv.converter import Converter
from utf8conv.models import ByteOrder
from utf8conv.transcoder import PureTranscoder


@pytest.fixture(autouse=True)
def _isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(config_module, "runtime_config_dir", lambda: tmp_path / "user")


def test_defaults_without_config_files() -> None:
    config = load_config()
    assert config == AppConfig()
    assert config.transcoder.backend == "auto"
    assert config.cli.byte_order is ByteOrder.LITTLE
    assert config.logging.normalized_level() == "INFO"


def test_explicit_config_file(tmp_path: Path) -> None:
    target = tmp_path / "custom.yaml"
    target.write_text(
        yaml.safe_dump({"transcoder": {"backend": "Pure"}, "cli": {"byte_order": "big"}}),
        encoding="utf-8",
    )
    config = load_config(target)
    assert config.transcoder.backend == "pure"
    assert config.cli.byte_order is ByteOrder.BIG
    assert isinstance(Converter.from_config(config).transcoder, PureTranscoder)


def test_project_config_is_discovered() -> None:
    project = Path.cwd() / ".utf8conv" / "config.yaml"
    project.parent.mkdir()
    project.write_text("logging:\n  level: debug\n", encoding="utf-8")
    assert load_config().logging.normalized_level() == "DEBUG"


def test_user_config_is_discovered(tmp_path: Path) -> None:
    user = tmp_path / "user" / "config.yaml"
    user.parent.mkdir()
    user.write_text("transcoder:\n  backend: codecs\n", encoding="utf-8")
    assert load_config().transcoder.backend == "codecs"


def test_unknown_backend_is_invalid(tmp_path: Path) -> None:
    target = tmp_path / "bad.yaml"
    target.write_text("transcoder:\n  backend: lossy\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(target)


def test_missing_explicit_config(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="not found"):
        load_config(tmp_path / "absent.yaml")


def test_dump_default_config_round_trips(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "config.yaml"
    dump_default_config(target)
    assert load_config(target) == AppConfig()
