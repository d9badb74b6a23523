import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """
    Service configuration.
    Values come from the process environment, optionally seeded from a .env file.
    """

    IGDB_ID: str = os.getenv("IGDB_ID", "")
    IGDB_SECRET: str = os.getenv("IGDB_SECRET", "")
    IGDB_TOKEN_URL: str = os.getenv("IGDB_TOKEN_URL", "https://id.twitch.tv/oauth2/token")
    IGDB_API_URL: str = os.getenv("IGDB_API_URL", "https://api.igdb.com/v4")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8000))
    RELOAD: bool = os.getenv("RELOAD", "False").lower() == "true"
    CORS_ORIGINS: list[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]


settings = Settings()
