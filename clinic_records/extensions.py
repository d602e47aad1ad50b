from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_bcrypt import Bcrypt

# Shared database and migration instances
db = SQLAlchemy()
migrate = Migrate()
bcrypt = Bcrypt()
