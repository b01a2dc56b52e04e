import os
from functools import lru_cache
from pathlib import Path

CONFIG_ENV = "PICKLESEALCONFIG"
DEFAULT_FILENAME = "pickleseal.yaml"


@lru_cache
def get_configfile() -> Path | None:
    """
    Locate the optional YAML configuration file.

    Priority: PICKLESEALCONFIG > 'pickleseal.yaml' in the current working
    directory. The file is optional, settings may come from the
    environment alone, but a file named explicitly must exist.
    """
    raw = os.getenv(CONFIG_ENV)

    if raw is None:
        file = Path.cwd() / DEFAULT_FILENAME
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            f"  - Fix or unset the {CONFIG_ENV} environment variable\n"
            f"  - Or place a '{DEFAULT_FILENAME}' file in the current working directory\n"
            "  - Or provide every setting through PICKLESEAL_* environment variables."
        )

    return file
