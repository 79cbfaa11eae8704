"""
应用配置
从环境变量 / .env 读取
"""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "Hotel Nova"
    DEBUG: bool = False

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./hotel_nova.db"
    SQL_ECHO: bool = False

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# 全局设置实例
settings = Settings()
