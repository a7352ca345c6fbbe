"""Session settings loaded from the environment and CLI options."""

from __future__ import annotations

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vz_common.config.env import parse_bool_env, parse_int_env, parse_str_env
from vz_common.errors import ConfigurationError

_INT_ENV = {
    "page_size": "VZ_PAGE_SIZE",
    "read_length": "VZ_READ_LENGTH",
    "view_size": "VZ_VIEW_SIZE",
}


class ShellSettings(BaseModel):
    """Tunables for an interactive inspection session."""

    page_size: int = Field(default=50, ge=1)
    read_length: int = Field(default=16, ge=1)
    view_size: int = Field(default=256, ge=1)
    prompt_label: str = Field(default="vzshell", min_length=1)
    history: bool = True

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ShellSettings":
        """Build settings from ``VZ_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for field_name, var in _INT_ENV.items():
            raw = env.get(var)
            if raw is None:
                continue
            parsed = parse_int_env(raw)
            if parsed is None:
                raise ConfigurationError(
                    f"{var} must be an integer, got {raw!r}",
                    context={"variable": var},
                )
            data[field_name] = parsed
        label = parse_str_env(env.get("VZ_PROMPT"))
        if label is not None:
            data["prompt_label"] = label
        history = parse_bool_env(env.get("VZ_HISTORY"))
        if history is not None:
            data["history"] = history
        return cls.validated(data)

    @classmethod
    def validated(cls, data: Mapping[str, Any]) -> "ShellSettings":
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid shell settings", context={"errors": str(exc)}, cause=exc
            ) from exc

    def with_overrides(self, **overrides: Any) -> "ShellSettings":
        """Return a validated copy with non-None overrides applied."""
        updates = {key: val for key, val in overrides.items() if val is not None}
        if not updates:
            return self
        return self.validated({**self.model_dump(), **updates})
