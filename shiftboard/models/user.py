from shiftboard.extensions import db
from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime

OWNER = 'OWNER'
MANAGER = 'MANAGER'


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.Enum(OWNER, MANAGER, name='user_role'), nullable=False, default=MANAGER)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owned_stores = db.relationship('Store', back_populates='owner', lazy='dynamic')
    assignments = db.relationship('StoreManager', back_populates='manager', lazy='dynamic')
    reports = db.relationship('DailyReport', back_populates='manager', lazy='dynamic')

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def is_owner(self):
        return self.role == OWNER

    @property
    def is_manager(self):
        return self.role == MANAGER

    def get_jwt_claims(self):
        """Return additional claims for JWT token"""
        return {
            'role': self.role,
            'name': self.name,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
