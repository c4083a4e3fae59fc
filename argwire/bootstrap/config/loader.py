import os
from functools import lru_cache
from pathlib import Path


@lru_cache
def get_configfile() -> Path | None:
    """
    Locate the optional YAML configuration file.

    Priority: ARGWIRECONFIG env var > 'argwire.yaml' in the current
    working directory. A file named explicitly through the environment
    must exist; the default file is simply skipped when absent.
    """
    raw = os.getenv("ARGWIRECONFIG")

    if raw is None:
        file = Path.cwd() / "argwire.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Fix or unset the ARGWIRECONFIG environment variable\n"
            "  - Or place an 'argwire.yaml' file in the current working directory."
        )

    return file
