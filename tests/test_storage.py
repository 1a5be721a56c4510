import stat

import pytest

from duckduckgone.base import Configuration, DuckError, ErrorKind
from duckduckgone.storage import ConfigStore


def test_save_then_load_round_trip(store):
    config = Configuration(
        api_key="AbC123xyz",
        clipboard_enabled=False,
        auto_generate_on_launch=True,
        setup_complete=True,
    )
    store.save(config)

    loaded, found = store.load()

    assert found is True
    assert loaded == config


def test_resave_is_byte_identical(store):
    store.save(Configuration(api_key="key", clipboard_enabled=True, setup_complete=True))
    first = store.config_file.read_bytes()

    loaded, _ = store.load()
    store.save(loaded)
    loaded, _ = store.load()
    store.save(loaded)

    assert store.config_file.read_bytes() == first


def test_serialized_layout(store):
    store.save(Configuration(api_key="k", clipboard_enabled=True, setup_complete=True))

    assert store.config_file.read_text() == (
        "api = k\nclipboard = yes\nddggen = \nsetupcomplete = true\n"
    )


def test_saved_file_is_owner_only(store):
    store.config_file.write_text("api = old\n")
    store.config_file.chmod(0o644)

    store.save(Configuration(api_key="k"))

    assert stat.S_IMODE(store.config_file.stat().st_mode) == 0o600


def test_load_missing_file_signals_not_found(store):
    config, found = store.load()

    assert found is False
    assert config == Configuration()


def test_load_undecodable_file_signals_not_found(store):
    store.config_file.write_bytes(b"api = \xff\xfe\n")

    config, found = store.load()

    assert found is False
    assert config == Configuration()


@pytest.mark.parametrize("key", ["api", "API", "Api", "aPI"])
def test_keys_match_case_insensitively(key):
    config = ConfigStore.parse(f"{key} = SecretKey\n")

    assert config.api_key == "SecretKey"


def test_parse_skips_malformed_and_unknown_lines():
    text = "\n".join(
        [
            "# a comment",
            "api = key1   # trailing comment",
            "no separator here",
            "clipboard = no = maybe",
            "colour = blue",
            "   ",
            "ddggen = NO",
            "setupcomplete = True",
        ]
    )

    config = ConfigStore.parse(text)

    assert config == Configuration(
        api_key="key1",
        clipboard_enabled=None,
        auto_generate_on_launch=False,
        setup_complete=True,
    )


def test_parse_trims_quotes_and_whitespace():
    config = ConfigStore.parse("api =   \"quoted\"  \nclipboard = 'yes'\n")

    assert config.api_key == "quoted"
    assert config.clipboard_enabled is True


def test_update_merges_only_supplied_fields(ready_store):
    merged = ready_store.update(clipboard_enabled=False, api_key=None)

    expected = Configuration(
        api_key="A",
        clipboard_enabled=False,
        auto_generate_on_launch=True,
        setup_complete=True,
    )
    assert merged == expected
    assert ready_store.load() == (expected, True)


def test_save_into_missing_directory_fails(tmp_path):
    store = ConfigStore(tmp_path / "missing" / ".ddg.conf")

    with pytest.raises(DuckError) as excinfo:
        store.save(Configuration())

    assert excinfo.value.kind is ErrorKind.CONFIG_WRITE_FAILED
    assert not (tmp_path / "missing").exists()


def test_config_file_env_override(monkeypatch, tmp_path):
    target = tmp_path / "custom.conf"
    monkeypatch.setenv("DDG_CONFIG_FILE", str(target))

    ConfigStore().save(Configuration(api_key="k"))

    assert target.read_text().startswith("api = k\n")


@pytest.mark.parametrize(
    "api_key", ["abc#def", "a=b", " spaced ", "'q'", '"dq"', "two\nlines"]
)
def test_save_refuses_keys_that_would_not_reload(ready_store, api_key):
    before = ready_store.config_file.read_bytes()

    with pytest.raises(DuckError) as excinfo:
        ready_store.save(Configuration(api_key=api_key, setup_complete=True))

    assert excinfo.value.kind is ErrorKind.CONFIG_WRITE_FAILED
    assert "API key" in str(excinfo.value)
    assert ready_store.config_file.read_bytes() == before


@pytest.mark.parametrize("api_key", ["abc123XYZ", "with inner space", "it's"])
def test_storable_keys_round_trip(store, api_key):
    config = Configuration(api_key=api_key, setup_complete=True)
    store.save(config)

    assert store.load() == (config, True)
