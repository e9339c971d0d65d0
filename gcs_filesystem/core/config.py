import os
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import field_validator

from gcs_filesystem.core.constants import STORAGE_API_URI_DEFAULT

project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
env_path = os.path.join(project_root, '.env')
load_dotenv(env_path)


class Settings(BaseSettings):
    # 基本设置
    PROJECT_NAME: str = "gcs-filesystem"

    # Google Cloud Storage 配置
    GCS_PROJECT_ID: Optional[str] = os.getenv("GCS_PROJECT_ID", None)
    GCS_BUCKET: str = os.getenv("GCS_BUCKET", "default-bucket")
    # 未配置时沿用 ADC 标准环境变量
    GCS_KEY_FILE_PATH: Optional[str] = os.getenv("GCS_KEY_FILE_PATH", os.getenv("GOOGLE_APPLICATION_CREDENTIALS"))
    GCS_PATH_PREFIX: Optional[str] = os.getenv("GCS_PATH_PREFIX", None)
    GCS_STORAGE_API_URI: str = os.getenv("GCS_STORAGE_API_URI", STORAGE_API_URI_DEFAULT)

    # 复制时的ACL策略: visibility(按可见性使用预定义ACL) / replicate(逐条复制ACL)
    GCS_ACL_STRATEGY: str = os.getenv("GCS_ACL_STRATEGY", "visibility")

    # 适配器类型: gcs(当前接口) / gcs-legacy(旧版返回记录的接口)
    GCS_ADAPTER: str = os.getenv("GCS_ADAPTER", "gcs")
    GCS_SUPPORTS_STREAMS: bool = True

    # 日志配置
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: Optional[str] = os.getenv("LOG_DIR", None)

    @field_validator("GCS_PATH_PREFIX", "GCS_KEY_FILE_PATH", "GCS_PROJECT_ID", mode="before")
    @classmethod
    def empty_string_to_none(cls, v: Optional[str]) -> Optional[str]:
        # .env 中的空值视为未配置
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("GCS_ACL_STRATEGY", "GCS_ADAPTER", mode="before")
    @classmethod
    def lower_case(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    class Config:
        case_sensitive = True
        env_file = ".env"


# 创建设置实例
settings = Settings()
