import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    MIN_WORD_LENGTH: int = 3
    DICT_MIN_WORD_LENGTH: int = 2
    MAX_RESULTS: int = 0

    BOARD_ROWS: int = 4
    BOARD_COLS: int = 4
    MAX_BOARD_SIDE: int = 20
    FACES_PER_DIE: int = 6

    COUNTDOWN_SECONDS: int = 180
    CACHE_ENABLED: bool = True
    LINK_URL_TEMPLATE: str = "http://sjp.pl/{word}"

    NTFY_TOPIC: str = ""
    NTFY_URL: str = "https://ntfy.sh"
    NOTIFY_WORDS_PER_GROUP: int = 10

    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "pl_sjp.pl.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(getattr(self, fld), env_val))


def _coerce(current, value):
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected bool, got {value!r}")
    if isinstance(current, int):
        if isinstance(value, bool):
            raise ValueError(f"expected int, got {value!r}")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"expected a whole number, got {value!r}")
        return int(value)
    if isinstance(current, float):
        return float(value)
    if isinstance(current, Path):
        return Path(value)
    return str(value)


# Fields that may be changed at runtime through the settings API
EDITABLE_FIELDS: dict[str, type] = {
    "MIN_WORD_LENGTH": int,
    "MAX_RESULTS": int,
    "BOARD_ROWS": int,
    "BOARD_COLS": int,
    "NTFY_TOPIC": str,
    "NOTIFY_WORDS_PER_GROUP": int,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values to ``cfg``. Returns {field: error} for rejected ones."""
    errors: dict[str, str] = {}
    for name, value in values.items():
        if name not in EDITABLE_FIELDS:
            errors[name] = "unknown field" if not hasattr(cfg, name) else "field is not editable"
            continue
        try:
            coerced = _coerce(getattr(cfg, name), value)
        except (TypeError, ValueError) as e:
            errors[name] = f"invalid value: {e}"
            continue
        minimum = 0 if name == "MAX_RESULTS" else 1
        if EDITABLE_FIELDS[name] is int and coerced < minimum:
            errors[name] = f"must be an integer >= {minimum}"
            continue
        if name in ("BOARD_ROWS", "BOARD_COLS") and coerced > cfg.MAX_BOARD_SIDE:
            errors[name] = f"must be <= {cfg.MAX_BOARD_SIDE}"
            continue
        setattr(cfg, name, coerced)
    return errors


settings = Settings()
