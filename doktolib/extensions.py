from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Shared database and migration instances, bound per app in create_app()
db = SQLAlchemy()
migrate = Migrate()
