from pathlib import Path

import tomllib


def _get_version() -> str:
    current_file = Path(__file__)
    pyproject_path = current_file.parent.parent / "pyproject.toml"

    try:
        with open(pyproject_path, "rb") as f:
            pyproject_data = tomllib.load(f)
        return str(pyproject_data["project"]["version"])
    except (FileNotFoundError, KeyError, tomllib.TOMLDecodeError):
        raise ValueError("Failed to read version from pyproject.toml")


LOCKMINT_VERSION = _get_version()
