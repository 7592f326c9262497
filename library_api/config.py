import os


def _database_uri():
    user = os.getenv("DB_USER", "user")
    password = os.getenv("DB_PASSWORD", "Password")
    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "3306")
    name = os.getenv("DB_NAME", "db")
    return f"mysql+pymysql://{user}:{password}@{host}:{port}/{name}?charset=utf8mb4"


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", _database_uri())

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # 25 open connections at most: 5 kept idle in the pool + 20 overflow
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 20,
        "pool_recycle": 300,
        "connect_args": {"init_command": "SET time_zone = '+00:00'"},
    }

    PORT = int(os.getenv("PORT", "8080"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "info")

    API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
    AUTO_CREATE_SCHEMA = os.getenv("AUTO_CREATE_SCHEMA", "1") == "1"
