import pytest

from clinic_records import create_app
from clinic_records.extensions import db
from clinic_records.services import VisitStore, VisitQueryService, VisitMutationService


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return VisitStore(db.session)


@pytest.fixture
def queries(store):
    return VisitQueryService(store)


@pytest.fixture
def mutations(store):
    return VisitMutationService(store)


@pytest.fixture
def make_visit(store):
    """Insert a visit for Asha Rao unless other fields are given."""
    def _make(**fields):
        data = {'name': 'Asha Rao', 'phone': '9876543210', 'visitDate': '2024-05-10T10:00:00'}
        data.update(fields)
        result = store.insert(data)
        assert result.ok, result.error
        return result.value
    return _make
