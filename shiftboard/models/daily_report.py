from shiftboard.extensions import db
from datetime import datetime

MORNING = 'MORNING'
EVENING = 'EVENING'
BOTH = 'BOTH'
SHIFTS = (MORNING, EVENING, BOTH)

PREP_TASKS = (
    ('prep_meat', 'Meat'),
    ('prep_sauce', 'Sauce'),
    ('prep_onions_sliced', 'Onions (Sliced)'),
    ('prep_onions_diced', 'Onions (Diced)'),
    ('prep_tomatoes_sliced', 'Tomatoes'),
    ('prep_lettuce', 'Lettuce'),
)


class DailyReport(db.Model):
    __tablename__ = 'daily_reports'

    id = db.Column(db.Integer, primary_key=True)
    store_id = db.Column(db.Integer, db.ForeignKey('stores.id'), nullable=False)
    manager_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    date = db.Column(db.Date, nullable=False)
    shift = db.Column(db.Enum(*SHIFTS, name='shift_types'), nullable=False)

    # Till
    starting_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    ending_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    # Sales and tips
    total_sales = db.Column(db.Numeric(10, 2), nullable=True)
    cash_sales = db.Column(db.Numeric(10, 2), nullable=True)
    card_sales = db.Column(db.Numeric(10, 2), nullable=True)
    tip_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    cash_tips = db.Column(db.Numeric(10, 2), nullable=True)
    customer_count = db.Column(db.Integer, nullable=True)

    # Prep checklist
    morning_prep_completed = db.Column(db.Integer, nullable=False, default=0)
    evening_prep_completed = db.Column(db.Integer, nullable=False, default=0)
    prep_meat = db.Column(db.Boolean, nullable=False, default=False)
    prep_sauce = db.Column(db.Boolean, nullable=False, default=False)
    prep_onions_sliced = db.Column(db.Boolean, nullable=False, default=False)
    prep_onions_diced = db.Column(db.Boolean, nullable=False, default=False)
    prep_tomatoes_sliced = db.Column(db.Boolean, nullable=False, default=False)
    prep_lettuce = db.Column(db.Boolean, nullable=False, default=False)

    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    store = db.relationship('Store', back_populates='reports')
    manager = db.relationship('User', back_populates='reports')

    __table_args__ = (
        db.UniqueConstraint('store_id', 'date', 'shift', name='uq_report_store_date_shift'),
        db.CheckConstraint('morning_prep_completed BETWEEN 0 AND 100', name='valid_morning_prep'),
        db.CheckConstraint('evening_prep_completed BETWEEN 0 AND 100', name='valid_evening_prep'),
    )

    def __repr__(self):
        return f"<DailyReport {self.store_id} {self.date} {self.shift}>"

    def to_dict(self):
        def money(value):
            return float(value) if value is not None else None

        data = {
            "id": self.id,
            "store_id": self.store_id,
            "store_name": self.store.name if self.store else None,
            "manager_id": self.manager_id,
            "manager_name": self.manager.name if self.manager else None,
            "date": self.date.strftime('%Y-%m-%d'),
            "shift": self.shift,
            "starting_amount": money(self.starting_amount),
            "ending_amount": money(self.ending_amount),
            "total_sales": money(self.total_sales),
            "cash_sales": money(self.cash_sales),
            "card_sales": money(self.card_sales),
            "tip_amount": money(self.tip_amount),
            "cash_tips": money(self.cash_tips),
            "customer_count": self.customer_count,
            "morning_prep_completed": self.morning_prep_completed,
            "evening_prep_completed": self.evening_prep_completed,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        for key, _label in PREP_TASKS:
            data[key] = getattr(self, key)
        return data
