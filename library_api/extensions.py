from flask_sqlalchemy import SQLAlchemy

# Engine options come from Config; see create_app.
db = SQLAlchemy()
