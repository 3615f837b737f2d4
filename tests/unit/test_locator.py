"""Unit tests for ConfigLocator."""
from pathlib import Path

import pytest

from configor.exceptions import ConfigNotFoundError
from configor.locator import ConfigLocator, find_config_paths, with_suffix_name


def test_with_suffix_name_inserts_before_extension():
    """Should insert the suffix before the extension."""
    assert with_suffix_name("config/app.yml", "production") == Path("config/app.production.yml")
    assert with_suffix_name("config/app.tar.json", "test") == Path("config/app.tar.test.json")


def test_with_suffix_name_appends_without_extension():
    """Should append the suffix when there is no extension."""
    assert with_suffix_name("config/app", "test") == Path("config/app.test")


def test_base_file_only(write_config):
    """Should return just the base file."""
    base = write_config("app.yml", "workers: 1\n")

    assert ConfigLocator("development").find_config_paths(base) == [base]


def test_env_file_follows_base(write_config):
    """Should load the environment file after the base file."""
    base = write_config("app.yml", "workers: 1\n")
    env_file = write_config("app.production.yml", "workers: 2\n")

    assert ConfigLocator("production").find_config_paths(base) == [base, env_file]


def test_env_file_without_base(write_config, tmp_path):
    """Should accept an environment file even if the base file is missing."""
    env_file = write_config("app.production.yml", "workers: 2\n")

    assert ConfigLocator("production").find_config_paths(tmp_path / "app.yml") == [env_file]


def test_example_fallback(write_config, tmp_path):
    """Should fall back to the example file when nothing else exists."""
    example = write_config("app.example.yml", "workers: 3\n")

    assert ConfigLocator("development").find_config_paths(tmp_path / "app.yml") == [example]


def test_example_ignored_when_base_exists(write_config):
    """Should not load the example file next to a real one."""
    base = write_config("app.yml", "workers: 1\n")
    write_config("app.example.yml", "workers: 3\n")

    assert ConfigLocator("development").find_config_paths(base) == [base]


def test_missing_everything_raises(tmp_path):
    """Should fail with the searched paths when no variant exists."""
    with pytest.raises(ConfigNotFoundError) as exc_info:
        ConfigLocator("development").find_config_paths(tmp_path / "app.yml")

    error = exc_info.value
    assert error.error_code == "CONFIG_NOT_FOUND"
    assert str(tmp_path / "app.development.yml") in error.searched_paths
    assert str(tmp_path / "app.example.yml") in error.searched_paths


def test_directory_is_not_a_config_file(tmp_path):
    """Should only accept regular files."""
    (tmp_path / "app.yml").mkdir()

    with pytest.raises(ConfigNotFoundError):
        ConfigLocator("development").find_config_paths(tmp_path / "app.yml")


def test_resolve_orders_references_in_reverse(write_config):
    """Should put the first reference last so it wins the merge."""
    first = write_config("first.yml", "a: 1\n")
    first_env = write_config("first.test.yml", "a: 2\n")
    second = write_config("second.yml", "b: 1\n")

    paths = ConfigLocator("test").resolve(first, second)

    assert paths == [second, first, first_env]


def test_resolve_stops_at_first_missing_reference(write_config, tmp_path):
    """Should raise even if other references exist."""
    present = write_config("present.yml", "a: 1\n")

    with pytest.raises(ConfigNotFoundError):
        ConfigLocator("test").resolve(present, tmp_path / "missing.yml")


def test_find_config_paths_convenience(write_config):
    """Should resolve with an explicit environment."""
    base = write_config("db.json", "{}")
    env_file = write_config("db.staging.json", "{}")

    assert find_config_paths(base, environment="staging") == [base, env_file]


def test_with_suffix_name_dotfile():
    """Should treat a dotfile name as all extension."""
    assert with_suffix_name("config/.env", "production") == Path("config/.production.env")
    assert with_suffix_name(".env", "example") == Path(".example.env")


def test_dotfile_env_variant(write_config):
    """Should find the environment variant of a dotfile."""
    base = write_config(".env", "workers: 1\n")
    env_file = write_config(".production.env", "workers: 2\n")

    assert ConfigLocator("production").find_config_paths(base) == [base, env_file]
