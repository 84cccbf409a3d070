# openstack_gateway/config/settings.py
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # 일반
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # OpenStack (clouds.yaml 경로와 사용할 cloud 이름)
    OS_CLIENT_CONFIG_FILE: str = "clouds.yaml"
    OS_CLOUD: str = "openstack"

    # 업스트림 호출 타임아웃 (초)
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # InfluxDB 내보내기 (선택). OS_URL 은 이 게이트웨이의 주소
    INFLUXDB_URL: str = "http://localhost:8086"
    INFLUXDB_TOKEN: str = ""
    INFLUXDB_ORG: str = ""
    INFLUXDB_BUCKET: str = ""
    OS_URL: str = "http://localhost:8000"

    CORS_ORIGINS: str = "http://localhost:8080,http://localhost:5173,http://localhost:3000"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
