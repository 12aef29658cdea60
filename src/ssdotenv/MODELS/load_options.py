"""
Models for configuring how a .env file is loaded.
"""
from pydantic import BaseModel

DEFAULT_ENV_FILE = ".env"
DEFAULT_ENCODING = "utf-8-sig"

class LoadOptions(BaseModel):
    """
    Settings for reading a .env file and merging it into an environment.
    """
    path: str = DEFAULT_ENV_FILE
    # Whether parsed values replace variables that are already defined.
    override: bool = True
    # Raise SimpleEnvError when any line had to be skipped.
    strict: bool = False
    encoding: str = DEFAULT_ENCODING
