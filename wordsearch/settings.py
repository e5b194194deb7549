import os
from dataclasses import dataclass


@dataclass
class Settings:
    LOG_LEVEL: str = "WARNING"
    LOG_TIMINGS: bool = False
    INPUT_ENCODING: str = "utf-8"

    MAX_UPLOAD_BYTES: int = 1_000_000
    MAX_WORD_LENGTH: int = 0  # 0 = unlimited
    DEBUG: bool = False

    def __post_init__(self):
        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(getattr(self, fld), env_val))


def _coerce(current, value):
    """Convert `value` to the type of `current` (bools accept 1/true/yes)."""
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("1", "true", "yes")
    if isinstance(current, int):
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return str(value)


# Fields that may be changed at runtime through the settings API
EDITABLE_FIELDS: dict[str, type] = {
    "LOG_TIMINGS": bool,
    "MAX_UPLOAD_BYTES": int,
    "MAX_WORD_LENGTH": int,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values to `cfg`, returning an error message per rejected field.

    Valid fields are applied even when others in the same call are rejected.
    """
    errors: dict[str, str] = {}
    for name, value in values.items():
        if name not in EDITABLE_FIELDS:
            if hasattr(cfg, name):
                errors[name] = "not editable"
            else:
                errors[name] = "unknown setting"
            continue
        try:
            coerced = _coerce(getattr(cfg, name), value)
        except (TypeError, ValueError) as e:
            errors[name] = f"invalid value: {e}"
            continue
        if isinstance(coerced, int) and not isinstance(coerced, bool) and coerced < 0:
            errors[name] = "must not be negative"
            continue
        setattr(cfg, name, coerced)
    return errors


settings = Settings()
