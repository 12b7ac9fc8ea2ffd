from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Material Volume Calculator"
    LOG_LEVEL: str = "INFO"

    # Path the calculator page lives at; reset() returns the URL here
    BASE_PATH: str = "/"
    # Absolute origin used to build share links, e.g. "https://fill.example.com"
    PUBLIC_URL: str = ""

    # Quiet period before the query string is rewritten after an edit
    URL_DEBOUNCE_MS: int = 300

    model_config = SettingsConfigDict(env_file=".env")


settings = Settings()
