from typing import Annotated

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from argwire.bootstrap.config.loader import get_configfile
from argwire.core.models.scheme import ArgScheme


class JsonCodecSettings(BaseModel):
    sort_keys: Annotated[
        bool,
        Field(
            description=(
                "Sort object keys when encoding.\n"
                "Keeps header payloads byte-identical regardless of insertion order."
            ),
            default=True
        )
    ]

    ensure_ascii: Annotated[
        bool,
        Field(
            description="Escape non-ASCII characters instead of emitting UTF-8.",
            default=False
        )
    ]


class ArgwireConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ARGWIRE_",
        env_nested_delimiter="__",
        extra="allow"
    )

    default_scheme: Annotated[
        ArgScheme,
        Field(
            description=(
                "Argument scheme used when a request does not carry an `as`\n"
                "transport header. Must be one of the registered schemes."
            ),
            default=ArgScheme.json
        )
    ]

    schemes: Annotated[
        list[ArgScheme],
        Field(
            description=(
                "Argument schemes registered in the process-wide SchemeRegistry.\n"
                "Each scheme needs a codec implementation (raw, json, msgpack)."
            ),
            default_factory=lambda: [ArgScheme.raw, ArgScheme.json, ArgScheme.msgpack]
        )
    ]

    json_codec: Annotated[
        JsonCodecSettings,
        Field(
            description="Options of the JSON codec.",
            default_factory=JsonCodecSettings
        )
    ]

    log_level: Annotated[
        str,
        Field(
            description="Logging verbosity: DEBUG, INFO, WARNING, ERROR or CRITICAL.",
            default="INFO",
            pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$"
        )
    ]

    @model_validator(mode="after")
    def check_default_scheme(self) -> "ArgwireConfig":
        if self.default_scheme not in self.schemes:
            raise ValueError(
                f"default_scheme '{self.default_scheme}' is not one of the registered schemes"
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        configfile = get_configfile()
        if configfile is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)
        return sources
