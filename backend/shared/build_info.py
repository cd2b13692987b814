"""Build metadata exposed at runtime.

APP_VERSION can be pinned through the environment in CI; otherwise it is
read from the installed distribution, falling back to "dev" for a source
checkout that was never installed.
"""

import os
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "scrabble-server"


def _installed_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "dev"


APP_VERSION: str = os.environ.get("APP_VERSION") or _installed_version()
