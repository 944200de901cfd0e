import os

from pydantic import BaseModel, Field


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_provider_specs(specs: list[str]) -> dict[str, str]:
    """Parse ``.ext=path/to/schema.json`` entries into a suffix -> schema path mapping."""
    providers: dict[str, str] = {}
    for spec in specs:
        suffix, sep, schema_path = spec.partition("=")
        if not sep or not suffix.strip() or not schema_path.strip():
            raise ValueError(f"Invalid schema provider '{spec}'. Expected '.ext=path/to/schema.json'.")
        providers[suffix.strip()] = schema_path.strip()
    return providers


class Settings(BaseModel):
    log_level: str = "WARNING"
    schema_providers: dict[str, str] = Field(default_factory=dict)
    syntax_checked: list[str] = Field(default_factory=list)


def get_settings() -> Settings:
    return Settings(
        log_level=os.getenv("SCHEMAWATCH_LOG_LEVEL", "WARNING").upper(),
        schema_providers=parse_provider_specs(_split(os.getenv("SCHEMAWATCH_SCHEMA_PROVIDERS", ""))),
        syntax_checked=_split(os.getenv("SCHEMAWATCH_SYNTAX_CHECKED", "")),
    )
