import dataclasses

import pytest

from songtag.config import DEFAULT_SUPPORTED_FORMATS, ProcessorConfig
from songtag.errors import ConfigError


def test_from_env_defaults():
    cfg = ProcessorConfig.from_env({})

    assert cfg.temp_dir == "/tmp_songs/"
    assert cfg.trim_audio is True
    assert cfg.trim_offset == 55
    assert cfg.trim_length == 45
    assert cfg.supported_formats == DEFAULT_SUPPORTED_FORMATS == (".mp3", ".ogg")
    assert cfg.tag_writer == "kid3"
    assert cfg.recognition_codec == "base64"
    assert cfg.kid3_bin == "kid3-cli"


def test_from_env_overrides():
    cfg = ProcessorConfig.from_env(
        {
            "TEMP_PATH": "/scratch",
            "TRIM_AUDIO": "FALSE",
            "TRIM_OFFSET": "10",
            "TRIM_LENGTH": "20",
            "SUPPORTED_FORMATS": "mp3, .FLAC ,",
            "TAG_WRITER": "music_tag",
            "RECOGNITION_CODEC": "Identity",
            "SONGREC_BIN": "/opt/songrec",
        }
    )

    assert cfg.temp_dir == "/scratch"
    assert cfg.trim_audio is False
    assert cfg.trim_offset == 10
    assert cfg.trim_length == 20
    assert cfg.supported_formats == (".mp3", ".flac")
    assert cfg.tag_writer == "music_tag"
    assert cfg.recognition_codec == "identity"
    assert cfg.songrec_bin == "/opt/songrec"


@pytest.mark.parametrize("raw", ["1", "true", "Yes", " on "])
def test_trim_audio_truthy_values(raw):
    assert ProcessorConfig.from_env({"TRIM_AUDIO": raw}).trim_audio is True


@pytest.mark.parametrize(
    "env",
    [
        {"TRIM_AUDIO": "maybe"},
        {"TRIM_OFFSET": "fifty"},
        {"TRIM_LENGTH": "-1"},
        {"TRIM_LENGTH": "0"},
        {"TAG_WRITER": "id3v2"},
        {"RECOGNITION_CODEC": "hex"},
    ],
)
def test_from_env_rejects_bad_values(env):
    with pytest.raises(ConfigError):
        ProcessorConfig.from_env(env)


def test_config_is_immutable():
    cfg = ProcessorConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.trim_length = 10  # type: ignore[misc]


def test_supported_formats_are_lowercased():
    assert ProcessorConfig(supported_formats=(".MP3",)).supported_formats == (".mp3",)
