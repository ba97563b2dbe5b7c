import pytest
import json

import config_loader
import constants

MINIMAL_CONFIG = {
    "cache_dir": "cache",
    "pictures_dir": "pictures",
    "log_file": "migration.log",
}


def write_config(tmp_path, data):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(data), encoding='utf-8')
    return str(config_file)


def test_load_config_valid(tmp_path):
    """Tests loading a configuration where every key is given."""
    full_config = dict(MINIMAL_CONFIG,
        start_url="https://web.archive.org/web/20170923015827/http://glazelki.ru:80/",
        avatars_dir="avatars_test",
        notes_dump_file="out/notes.sql",
        tags_dump_file="out/tags.sql",
        comments_dump_file="out/comments.sql",
        user_agent="TestAgent/1.0",
        request_timeout_seconds=10,
        source_timezone="Europe/Moscow",
    )
    loaded_config = config_loader.load_config(write_config(tmp_path, full_config))
    for key, value in full_config.items():
        assert loaded_config[key] == value


def test_load_config_defaults(tmp_path):
    loaded_config = config_loader.load_config(write_config(tmp_path, MINIMAL_CONFIG))
    assert loaded_config['start_url'] == constants.DEFAULT_START_URL
    assert loaded_config['avatars_dir'] == constants.DEFAULT_AVATARS_DIR
    assert loaded_config['notes_dump_file'] == constants.DEFAULT_NOTES_DUMP_FILE
    assert loaded_config['tags_dump_file'] == constants.DEFAULT_TAGS_DUMP_FILE
    assert loaded_config['comments_dump_file'] == constants.DEFAULT_COMMENTS_DUMP_FILE
    assert loaded_config['user_agent'] == constants.DEFAULT_USER_AGENT
    assert loaded_config['request_timeout_seconds'] == constants.DEFAULT_TIMEOUT
    assert loaded_config['source_timezone'] == constants.DEFAULT_SOURCE_TIMEZONE


def test_load_config_missing_keys(tmp_path):
    with pytest.raises(ValueError, match="missing required keys: pictures_dir, log_file"):
        config_loader.load_config(write_config(tmp_path, {"cache_dir": "cache"}))


def test_load_config_file_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        config_loader.load_config(str(tmp_path / "absent.json"))


def test_load_config_invalid_json(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json", encoding='utf-8')
    with pytest.raises(ValueError, match="Error decoding JSON"):
        config_loader.load_config(str(config_file))


@pytest.mark.parametrize("timeout", [0, -5, "60", True])
def test_load_config_invalid_timeout(tmp_path, timeout):
    data = dict(MINIMAL_CONFIG, request_timeout_seconds=timeout)
    with pytest.raises(ValueError, match="request_timeout_seconds"):
        config_loader.load_config(write_config(tmp_path, data))


def test_load_config_invalid_timezone(tmp_path):
    data = dict(MINIMAL_CONFIG, source_timezone="Mars/Olympus_Mons")
    with pytest.raises(ValueError, match="source_timezone"):
        config_loader.load_config(write_config(tmp_path, data))


def test_load_config_non_archive_start_url_falls_back(tmp_path, capsys):
    data = dict(MINIMAL_CONFIG, start_url="http://glazelki.ru/")
    loaded_config = config_loader.load_config(write_config(tmp_path, data))
    assert loaded_config['start_url'] == constants.DEFAULT_START_URL
    assert "is not an archive URL" in capsys.readouterr().err


def test_repository_config_file_is_valid():
    import os
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
    loaded_config = config_loader.load_config(os.path.join(root, "config.json"))
    assert loaded_config['cache_dir'] == "cache"
