# rentalhub/extensions.py
from flask_jwt_extended import JWTManager
from flask_mail import Mail
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
jwt = JWTManager()
mail = Mail()


def init_extensions(app):
    for ext in (db, jwt, mail):
        ext.init_app(app)
