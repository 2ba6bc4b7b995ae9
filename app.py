import logging
import sys
import click
from flask import Flask, send_from_directory, abort
from sqlalchemy.exc import SQLAlchemyError
from config import Config, VERSION
from errors import register_error_handlers
from models import db
from routes.residents import residents_bp
from routes.payments import payments_bp
from routes.expenses import expenses_bp
from routes.transfer import transfer_bp
from routes.search import search_bp
from routes.reports import reports_bp
from sample_data import load_sample_data

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    config_class.init_db(app)
    register_error_handlers(app)

    app.register_blueprint(residents_bp)
    app.register_blueprint(payments_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(transfer_bp)
    app.register_blueprint(search_bp)
    app.register_blueprint(reports_bp)

    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def index(path):
        if path == 'api' or path.startswith('api/'):
            abort(404)
        return send_from_directory(app.static_folder, 'index.html')

    return app


@click.command()
@click.option('--sample', is_flag=True, help='Replace all data with the demo dataset before serving.')
@click.option('--version', 'show_version', is_flag=True, help='Show version information and exit.')
@click.option('--host', default=Config.HOST, show_default=True)
@click.option('--port', default=Config.PORT, show_default=True, type=int)
def main(sample, show_version, host, port):
    """Run the Condo Manager server."""
    if show_version:
        click.echo(f"Condo Manager {VERSION}")
        return

    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        app = create_app()
    except (SQLAlchemyError, OSError) as e:
        logger.critical("Failed to initialize database: %s", e)
        sys.exit(1)

    if sample:
        with app.app_context():
            try:
                load_sample_data(db.session)
            except SQLAlchemyError as e:
                logger.warning("Failed to load sample data: %s", e)
            else:
                logger.info("Sample data loaded successfully")

    logger.info("Server is running on http://%s:%d", host, port)
    app.run(host=host, port=port)


if __name__ == '__main__':
    main()
