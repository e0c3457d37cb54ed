from shiftboard.extensions import db
from shiftboard.models.store import ACTIVE, INACTIVE
from datetime import datetime


class StoreManager(db.Model):
    __tablename__ = 'store_managers'

    id = db.Column(db.Integer, primary_key=True)
    store_id = db.Column(db.Integer, db.ForeignKey('stores.id'), nullable=False)
    manager_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    status = db.Column(db.Enum(ACTIVE, INACTIVE, name='assignment_status'), nullable=False, default=ACTIVE)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    store = db.relationship('Store', back_populates='assignments')
    manager = db.relationship('User', back_populates='assignments')

    __table_args__ = (
        db.UniqueConstraint('store_id', 'manager_id', name='uq_store_manager'),
    )

    @classmethod
    def visible(cls):
        return cls.status == ACTIVE

    @property
    def is_active(self):
        return self.status == ACTIVE

    def __repr__(self):
        return f"<StoreManager store={self.store_id} manager={self.manager_id} {self.status}>"

    def to_dict(self):
        return {
            "assignment_id": self.id,
            "assigned_at": self.created_at.isoformat() if self.created_at else None,
            "status": self.status,
            "store": {"id": self.store.id, "name": self.store.name},
            "manager": {"id": self.manager.id, "name": self.manager.name, "email": self.manager.email},
        }
