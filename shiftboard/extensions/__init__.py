from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from shiftboard.extensions.yelp import YelpClient

db = SQLAlchemy()
jwt = JWTManager()
yelp = YelpClient()
