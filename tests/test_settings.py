from pathlib import Path

from boggle_pl.settings import Settings, EDITABLE_FIELDS, update_settings, get_editable_settings


def _fresh_settings() -> Settings:
    """Create a fresh Settings instance for testing."""
    return Settings()


def test_defaults():
    cfg = _fresh_settings()
    assert cfg.MIN_WORD_LENGTH == 3
    assert cfg.DICT_MIN_WORD_LENGTH == 2
    assert (cfg.BOARD_ROWS, cfg.BOARD_COLS) == (4, 4)
    assert cfg.FACES_PER_DIE == 6
    assert cfg.COUNTDOWN_SECONDS == 180
    assert cfg.DICTIONARY_PATH == cfg.BASE_DIR / "pl_sjp.pl.txt"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("MIN_WORD_LENGTH", "4")
    monkeypatch.setenv("CACHE_ENABLED", "no")
    monkeypatch.setenv("DEBUG", "yes")
    monkeypatch.setenv("NTFY_TOPIC", "boggle-test")
    monkeypatch.setenv("DICTIONARY_PATH", "/tmp/words.txt")
    cfg = _fresh_settings()
    assert cfg.MIN_WORD_LENGTH == 4
    assert cfg.CACHE_ENABLED is False
    assert cfg.DEBUG is True
    assert cfg.NTFY_TOPIC == "boggle-test"
    assert cfg.DICTIONARY_PATH == Path("/tmp/words.txt")


def test_editable_fields_exist_on_settings():
    """All editable fields must be actual attributes on Settings."""
    cfg = _fresh_settings()
    for field_name in EDITABLE_FIELDS:
        assert hasattr(cfg, field_name), f"{field_name} not found on Settings"


def test_get_editable_settings():
    cfg = _fresh_settings()
    result = get_editable_settings(cfg)
    assert set(result.keys()) == set(EDITABLE_FIELDS.keys())
    assert result["MIN_WORD_LENGTH"] == cfg.MIN_WORD_LENGTH
    assert result["MAX_RESULTS"] == cfg.MAX_RESULTS


def test_update_int_field():
    cfg = _fresh_settings()
    errors = update_settings(cfg, NOTIFY_WORDS_PER_GROUP=7)
    assert errors == {}
    assert cfg.NOTIFY_WORDS_PER_GROUP == 7


def test_update_int_from_string():
    cfg = _fresh_settings()
    errors = update_settings(cfg, BOARD_ROWS="5")
    assert errors == {}
    assert cfg.BOARD_ROWS == 5


def test_update_bool_field():
    cfg = _fresh_settings()
    original = cfg.DEBUG
    errors = update_settings(cfg, DEBUG=not original)
    assert errors == {}
    assert cfg.DEBUG is (not original)


def test_update_bool_from_string():
    cfg = _fresh_settings()
    errors = update_settings(cfg, DEBUG="true")
    assert errors == {}
    assert cfg.DEBUG is True

    errors = update_settings(cfg, DEBUG="false")
    assert errors == {}
    assert cfg.DEBUG is False


def test_update_string_field():
    cfg = _fresh_settings()
    errors = update_settings(cfg, NTFY_TOPIC="test-topic")
    assert errors == {}
    assert cfg.NTFY_TOPIC == "test-topic"


def test_update_multiple_fields():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MAX_RESULTS=10, MIN_WORD_LENGTH=4, NTFY_TOPIC="multi")
    assert errors == {}
    assert cfg.MAX_RESULTS == 10
    assert cfg.MIN_WORD_LENGTH == 4
    assert cfg.NTFY_TOPIC == "multi"


def test_update_invalid_value_returns_error():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MIN_WORD_LENGTH="three", BOARD_COLS=0, MAX_RESULTS=-1, DEBUG=3)
    assert set(errors) == {"MIN_WORD_LENGTH", "BOARD_COLS", "MAX_RESULTS", "DEBUG"}
    assert cfg.MIN_WORD_LENGTH == 3
    assert cfg.BOARD_COLS == 4


def test_update_non_editable_field_returns_error():
    cfg = _fresh_settings()
    errors = update_settings(cfg, FACES_PER_DIE=8)
    assert "FACES_PER_DIE" in errors
    assert cfg.FACES_PER_DIE == 6


def test_update_unknown_field_returns_error():
    cfg = _fresh_settings()
    errors = update_settings(cfg, NONEXISTENT_FIELD=42)
    assert "NONEXISTENT_FIELD" in errors


def test_update_partial_error():
    """Valid fields update even when invalid fields are present."""
    cfg = _fresh_settings()
    errors = update_settings(cfg, MAX_RESULTS=25, BAD_FIELD="nope")
    assert "BAD_FIELD" in errors
    assert cfg.MAX_RESULTS == 25


def test_update_int_rejects_fractional_float():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MIN_WORD_LENGTH=2.7)
    assert "MIN_WORD_LENGTH" in errors
    assert cfg.MIN_WORD_LENGTH == 3

    errors = update_settings(cfg, MIN_WORD_LENGTH=4.0)
    assert errors == {}
    assert cfg.MIN_WORD_LENGTH == 4


def test_update_board_size_is_bounded():
    cfg = _fresh_settings()
    errors = update_settings(cfg, BOARD_ROWS=cfg.MAX_BOARD_SIDE + 1, BOARD_COLS=cfg.MAX_BOARD_SIDE)
    assert set(errors) == {"BOARD_ROWS"}
    assert cfg.BOARD_ROWS == 4
    assert cfg.BOARD_COLS == cfg.MAX_BOARD_SIDE
