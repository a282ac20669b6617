"""Client identification headers."""

import platform
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from typing import Callable

DISTRIBUTION_NAME = "scs-client"


@dataclass(frozen=True)
class UserAgent:
    agent: str
    runtime_version: str

    def headers(self) -> dict:
        return {"agent": self.agent, "runtime-version": self.runtime_version}


UserAgentProvider = Callable[[str], UserAgent]


def sdk_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "unknown"


def default_user_agent(client_type: str) -> UserAgent:
    """``python:<client type>:<sdk version>`` plus the interpreter version."""
    return UserAgent(
        agent=f"python:{client_type}:{sdk_version()}",
        runtime_version=f"{platform.python_implementation().lower()}:{platform.python_version()}",
    )
