"""Tests for configuration loading and the CLI."""

import json
from pathlib import Path

import pytest

from cyberguard.config import DetectorConfig, load_config
from cyberguard.inference import main

ROOT = Path(__file__).resolve().parents[1]


def test_defaults():
    config = DetectorConfig()
    assert config.max_length == 128
    assert config.pattern_cache_size == 1000
    assert config.recommendation_ttl_seconds == 300.0
    assert config.preferred_backend == "heuristic"
    assert config.vocab_path is None


@pytest.mark.parametrize("kwargs", [
    dict(preferred_backend="gpu"),
    dict(max_length=1),
    dict(pattern_cache_size=0),
    dict(recommendation_ttl_seconds=0),
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        DetectorConfig(**kwargs)


def test_unknown_keys_rejected():
    with pytest.raises(ValueError, match="Unknown config keys"):
        DetectorConfig.from_dict({"max_lenght": 64})


def test_relative_paths_resolve_against_config(tmp_path):
    path = tmp_path / "detector.yaml"
    path.write_text(
        "max_length: 64\n"
        "vocab_path: models/vocab.txt\n"
        "model_path: /abs/model.onnx\n",
        encoding="utf-8",
    )
    config = load_config(str(path))
    assert config.max_length == 64
    assert config.vocab_path == str(tmp_path.resolve() / "models" / "vocab.txt")
    assert config.model_path == "/abs/model.onnx"


def test_empty_config_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == DetectorConfig()


def test_non_mapping_config(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_shipped_config_loads():
    config = load_config(str(ROOT / "configs" / "detector.yaml"))
    assert config.preferred_backend == "heuristic"
    assert Path(config.vocab_path).name == "vocab.txt"
    assert Path(config.vocab_path).is_absolute()


def test_cli_single_text(capsys):
    main(["--text", "I will kill you"])
    out = capsys.readouterr().out
    assert '"is_cyberbullying": true' in out


def test_cli_file_output(tmp_path, capsys):
    texts = tmp_path / "texts.txt"
    texts.write_text("I will kill you\n\nHave a great day!\n", encoding="utf-8")
    output = tmp_path / "out.json"

    main(["--file", str(texts), "--output", str(output)])

    results = json.loads(output.read_text(encoding="utf-8"))
    assert [r["is_cyberbullying"] for r in results] == [True, False]
    assert "Flagged 1/2 texts" in capsys.readouterr().out


def test_cli_missing_file(tmp_path):
    with pytest.raises(SystemExit):
        main(["--file", str(tmp_path / "missing.txt")])
