from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 3000
    secret_key: str = "dev-secret-key"
    tau_min: int = 75
    tau_max: int = 120
    temperature_step: float = 10.0
    max_datasheets: int = 256
    log_level: str = "INFO"

    class Config:
        env_prefix = "REACTORLAB_"
        env_file = ".env"


settings = Settings()
