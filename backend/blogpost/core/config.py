from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    database_url: str = "sqlite:///./blogpost.db"
    jwt_secret: str = "devsecret"
    jwt_alg: str = "HS256"
    jwt_expires_min: int = 120
    cors_origins: str = "http://localhost:5173"

    session_cookie_name: str = "blogpost_session"
    session_cookie_secure: bool = False

    public_page_size: int = 10
    api_page_size: int = 15
    user_posts_page_size: int = 100
    max_page_size: int = 100

    log_level: str = "INFO"

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"

settings = Settings()
