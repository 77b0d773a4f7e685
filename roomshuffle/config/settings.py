# roomshuffle/config/settings.py

from typing import List, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    ENV: str = "development"
    discord_token: str = ""  # read from .env or DISCORD_TOKEN
    guild_ids: List[int] = []  # empty -> register commands globally

    AUTHORIZED_ROLE_IDS: List[int] = [
        672308385517142017,  # CCSS BoD
        672298881194786837,  # CCSS Mod
        858020772966170635,  # WiCS Exec
        370243283244417024,  # LameJam organizer
        927950534986571847,  # COMP 1501
        927292635943677974,  # Dev Day Admin
        360856758098329610,  # Testing
    ]
    DEFAULT_GROUP_NAME: str = "speed friending"
    LOBBY_ROOM_NAME: str = "lobby"
    RELOCATION_DELAY_SECONDS: float = 0.7
    LOG_LEVEL: LogLevel = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    class Config:
        env_file = ".env"

settings = Settings()
