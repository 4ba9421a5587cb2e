import os
import mysql.connector
from mysql.connector import pooling
from dotenv import load_dotenv

from storage import Storage

load_dotenv()

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY')
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'memory')
    MYSQL_HOST = os.getenv('MYSQL_HOST')
    MYSQL_USER = os.getenv('MYSQL_USER')
    MYSQL_PASSWORD = os.getenv('MYSQL_PASSWORD')
    MYSQL_DATABASE = os.getenv('MYSQL_DATABASE', 'finance_db')
    MYSQL_POOL_SIZE = int(os.getenv('MYSQL_POOL_SIZE', '5'))
    DEFAULT_CURRENCY = os.getenv('DEFAULT_CURRENCY', 'USD')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    @staticmethod
    def init_db(app):
        backend = app.config.get('STORAGE_BACKEND', 'memory')
        if backend == 'memory':
            app.storage = Storage.in_memory()
        elif backend == 'mysql':
            app.db_pool = mysql.connector.pooling.MySQLConnectionPool(
                pool_name="finance_pool",
                pool_size=Config.MYSQL_POOL_SIZE,
                host=Config.MYSQL_HOST,
                user=Config.MYSQL_USER,
                password=Config.MYSQL_PASSWORD,
                database=Config.MYSQL_DATABASE
            )
            app.storage = Storage.mysql(app.db_pool)
        else:
            raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")
