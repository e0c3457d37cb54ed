from shiftboard.extensions import db
from datetime import datetime

ACTIVE = 'Active'
INACTIVE = 'Inactive'


class Store(db.Model):
    __tablename__ = 'stores'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    address = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(20), nullable=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    status = db.Column(db.Enum(ACTIVE, INACTIVE, name='store_status'), nullable=False, default=ACTIVE)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Yelp review sync
    yelp_business_id = db.Column(db.String(100), nullable=True)
    yelp_rating = db.Column(db.Float, nullable=True)
    yelp_review_count = db.Column(db.Integer, nullable=True)
    yelp_url = db.Column(db.String(500), nullable=True)
    yelp_updated_at = db.Column(db.DateTime, nullable=True)
    yelp_search_term = db.Column(db.String(300), nullable=True)
    yelp_last_search = db.Column(db.DateTime, nullable=True)

    owner = db.relationship('User', back_populates='owned_stores')
    assignments = db.relationship('StoreManager', back_populates='store', lazy='dynamic')
    reports = db.relationship('DailyReport', back_populates='store', lazy='dynamic')

    @classmethod
    def visible(cls):
        """The one predicate deciding whether a store shows up in listings and analytics."""
        return cls.status == ACTIVE

    @property
    def is_active(self):
        return self.status == ACTIVE

    def active_managers(self):
        from shiftboard.models.store_manager import StoreManager
        return [a.manager for a in self.assignments.filter(StoreManager.visible()).all()]

    def to_dict(self, with_counts=False):
        data = {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "owner_id": self.owner_id,
            "status": self.status,
            "is_active": self.is_active,
            "yelp_business_id": self.yelp_business_id,
            "yelp_rating": self.yelp_rating,
            "yelp_review_count": self.yelp_review_count,
            "yelp_url": self.yelp_url,
            "yelp_updated_at": self.yelp_updated_at.isoformat() if self.yelp_updated_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if with_counts:
            data["manager_count"] = len(self.active_managers())
            data["report_count"] = self.reports.count()
        return data
