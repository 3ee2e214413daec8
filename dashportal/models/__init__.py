"""Domain models package."""

from dashportal.models.domain import *  # noqa: F401,F403
from dashportal.models.domain import __all__  # noqa: F401
