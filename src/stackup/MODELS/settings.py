"""
Runtime settings, read from the environment and an optional .env file.
"""
import os
from typing import Optional
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


class Settings(BaseModel):
    """
    Knobs for the external commands and the reported URL.
    """
    docker_bin: str = "docker"
    shell: str = "bash"
    command_timeout: Optional[float] = None
    web_host: str = "localhost"
    web_scheme: str = "http"
    log_level: str = "INFO"


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Builds settings from STACKUP_* environment variables.

    :param dotenv_path: .env file to load first, default: the nearest one
        above the current directory. Variables already present in the
        environment win over the file.
    :return: The resolved settings.
    """
    load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True), override=False)
    return Settings(
        docker_bin=os.getenv("STACKUP_DOCKER_BIN", "docker"),
        shell=os.getenv("STACKUP_SHELL", "bash"),
        command_timeout=_env_float("STACKUP_COMMAND_TIMEOUT", None),
        web_host=os.getenv("STACKUP_WEB_HOST", "localhost"),
        web_scheme=os.getenv("STACKUP_WEB_SCHEME", "http"),
        log_level=os.getenv("STACKUP_LOG_LEVEL", "INFO").upper(),
    )
