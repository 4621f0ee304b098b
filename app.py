import importlib
import os
import pkgutil

from flask import Blueprint, Flask

from config import settings
from config.database import bootstrap_indexes
from config.logging_config import setup_logging


def create_app() -> Flask:
    """Flask application factory."""
    setup_logging()

    app = Flask(__name__)
    app.secret_key = settings.SECRET_KEY
    app.json.sort_keys = False

    """Registration of error handlers."""
    from middleware.handlers import register_error_handlers
    register_error_handlers(app)

    # Allow test suites to bypass authentication without modifying middleware.
    if os.getenv("PYTEST_CURRENT_TEST"):
        app.config.setdefault("LOGIN_DISABLED", True)

    # Auto-register all blueprints defined in routes/*.py
    from routes import __path__ as routes_path

    for _, module_name, _ in pkgutil.iter_modules(routes_path):
        module = importlib.import_module(f"routes.{module_name}")
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, Blueprint) and obj.name not in app.blueprints:
                app.register_blueprint(obj)

    try:
        bootstrap_indexes()
    except Exception as exc:
        app.logger.warning("Index bootstrap skipped: %s", exc)

    return app


if __name__ == "__main__":
    from os import getenv

    app = create_app()
    app.run(
        host="0.0.0.0",
        port=int(getenv("PORT", 5000)),
        debug=getenv("FLASK_DEBUG", "0") == "1",
        use_reloader=False,
    )
