from typing import Annotated, Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from pickleseal.bootstrap.config.loader import get_configfile


class PickleSealConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PICKLESEAL_",
        populate_by_name=True,
        extra="ignore"
    )

    secret: Annotated[
        SecretStr,
        Field(
            description=(
                "Shared secret of the legacy platform.\n"
                "It keys the HMAC-SHA256 signature and is the PBKDF2 password the\n"
                "AES key is derived from. It must be byte-for-byte the value the\n"
                "legacy side uses, otherwise nothing verifies.\n\n"
                "Read from PICKLESEAL_SECRET, or from ENCRYPT_COLUMN_SECRET for\n"
                "deployments that still carry the legacy variable name."
            ),
            validation_alias=AliasChoices("PICKLESEAL_SECRET", "ENCRYPT_COLUMN_SECRET"),
        )
    ]

    cache_derived_key: Annotated[
        bool,
        Field(
            description=(
                "Memoize the PBKDF2 derivation per secret.\n"
                "The legacy scheme derives the key on every call (30,000 iterations).\n"
                "Caching gives identical output at a fraction of the CPU cost."
            ),
            default=False
        )
    ]

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        Field(
            description="Logging verbosity used by bootstrap().",
            default="INFO"
        )
    ]

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("secret must not be empty")
        return v

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
