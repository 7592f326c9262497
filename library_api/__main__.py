import signal
import sys

from library_api import create_app
from library_api.extensions import db


def _stop(signum, _frame):
    # unwinds app.run so the pool is disposed below
    sys.exit(128 + signum)


def main():
    app = create_app()
    port = app.config["PORT"]
    signal.signal(signal.SIGTERM, _stop)
    app.logger.info(f"[server] listening on :{port}")
    try:
        app.run(host="0.0.0.0", port=port)
    except KeyboardInterrupt:
        pass
    finally:
        with app.app_context():
            db.engine.dispose()
        app.logger.info("[server] stopped")


if __name__ == "__main__":
    main()
