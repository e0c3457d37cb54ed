from datetime import date, datetime
from decimal import Decimal

import pytest
from flask_jwt_extended import create_access_token

from shiftboard import create_app
from shiftboard.config.config import TestConfig
from shiftboard.extensions import db
from shiftboard.models.daily_report import DailyReport, PREP_TASKS
from shiftboard.models.store import Store, ACTIVE
from shiftboard.models.store_manager import StoreManager
from shiftboard.models.user import User, OWNER, MANAGER
from shiftboard.services.report_record import ReportRecord


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(email, role=MANAGER, name=None, password='secret123'):
        user = User(email=email, name=name or email.split('@')[0].title(), role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def owner(make_user):
    return make_user('owner@example.com', role=OWNER, name='Olivia Owner')


@pytest.fixture
def manager(make_user):
    return make_user('manager@example.com', role=MANAGER, name='Max Manager')


@pytest.fixture
def make_store(app):
    def _make_store(owner, name, address='100 Main St', phone=None, status=ACTIVE):
        store = Store(name=name, address=address, phone=phone, owner_id=owner.id, status=status)
        db.session.add(store)
        db.session.commit()
        return store
    return _make_store


@pytest.fixture
def assign(app):
    def _assign(store, manager):
        assignment = StoreManager(store_id=store.id, manager_id=manager.id, status=ACTIVE)
        db.session.add(assignment)
        db.session.commit()
        return assignment
    return _assign


@pytest.fixture
def make_report(app):
    def _make_report(store, manager, report_date, shift='MORNING', created_at=None, **fields):
        values = {
            'starting_amount': Decimal('200.00'),
            'ending_amount': Decimal('200.00'),
            'total_sales': Decimal('1000.00'),
            'cash_sales': Decimal('300.00'),
            'card_sales': Decimal('700.00'),
            'tip_amount': Decimal('50.00'),
            'morning_prep_completed': 100,
            'evening_prep_completed': 100,
        }
        values.update(fields)
        report = DailyReport(
            store_id=store.id,
            manager_id=manager.id,
            date=report_date,
            shift=shift,
            created_at=created_at or datetime.utcnow(),
            **values
        )
        db.session.add(report)
        db.session.commit()
        return report
    return _make_report


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        token = create_access_token(identity=str(user.id), additional_claims=user.get_jwt_claims())
        return {'Authorization': f'Bearer {token}'}
    return _auth_headers


@pytest.fixture
def make_record():
    """Builds normalized report records without touching the database."""
    counter = {'id': 0}

    def _make_record(report_date=date(2024, 1, 1), shift='MORNING', store_id=1, store_name='Downtown',
                     manager_id=1, manager_name='Max', prep=(100, 100), tasks=None, **fields):
        counter['id'] += 1
        values = dict(
            id=counter['id'],
            store_id=store_id,
            store_name=store_name,
            manager_id=manager_id,
            manager_name=manager_name,
            manager_email=f"{manager_name.lower()}@example.com",
            date=report_date,
            shift=shift,
            morning_prep_completed=prep[0],
            evening_prep_completed=prep[1],
            prep_tasks={key: key in (tasks or ()) for key, _label in PREP_TASKS},
        )
        values.update(fields)
        return ReportRecord(**values)
    return _make_record
