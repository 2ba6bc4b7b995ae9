import os
import logging
from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url
from models import db

load_dotenv()

VERSION = '0.1.0'

logger = logging.getLogger(__name__)


def database_uri():
    """Resolve the storage URL: DATABASE_URL, then MySQL settings, then the SQLite file."""
    if os.getenv('DATABASE_URL'):
        return os.getenv('DATABASE_URL')
    if os.getenv('MYSQL_HOST'):
        return URL.create(
            'mysql+mysqlconnector',
            username=os.getenv('MYSQL_USER'),
            password=os.getenv('MYSQL_PASSWORD'),
            host=os.getenv('MYSQL_HOST'),
            database=os.getenv('MYSQL_DATABASE', 'condo_db'),
        ).render_as_string(hide_password=False)
    return 'sqlite:///' + os.path.abspath(os.getenv('CONDO_DB', 'condo.db'))


class Config:
    SQLALCHEMY_DATABASE_URI = database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024
    IMPORT_FILE_FIELD = 'importFile'
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '8080'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    @staticmethod
    def init_db(app):
        url = make_url(app.config['SQLALCHEMY_DATABASE_URI'])
        if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
            os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)

        db.init_app(app)
        with app.app_context():
            db.create_all()
        logger.info("Database ready at %s", url.render_as_string(hide_password=True))
