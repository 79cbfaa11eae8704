"""
数据库配置 - 关系型持久化层
数据库只作为持久化层，业务操作通过领域对象与仓储进行
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from hotel_nova.config import settings

Base = declarative_base()


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """创建引擎；SQLite 需要关闭同线程检查"""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args, echo=echo)


engine = create_db_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = None):
    """初始化数据库表"""
    from hotel_nova.models import ontology  # noqa
    Base.metadata.create_all(bind=bind or engine)
