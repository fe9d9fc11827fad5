from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./canteen.db"
    sql_echo: bool = False

    session_secret: str = "change-me"  # 🔐 override in every deployment
    timezone: str = "Asia/Manila"
    log_level: str = "INFO"

    upload_dir: str = ""  # defaults to canteen/static/uploads/menu_items
    notification_feed_limit: int = 50


settings = Settings()
