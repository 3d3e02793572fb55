import pytest

from airline_reservation.models import Role
from airline_reservation.payments import GCashPayment
from airline_reservation.services import ReservationSystem
from airline_reservation.storage import FlatFileStore


@pytest.fixture
def store(tmp_path):
    """Flat-file store rooted in a per-test temporary directory"""
    store = FlatFileStore(tmp_path / 'data')
    store.initialize()
    return store


@pytest.fixture
def system(store):
    system = ReservationSystem(store, ticket_price=500.00)
    system.load()
    return system


@pytest.fixture
def admin(system):
    return system.sign_up('admin', 'secret', 'secret', 'Ada Admin', Role.ADMIN)


@pytest.fixture
def customer(system):
    return system.sign_up('juan', 'pass123', 'pass123', 'Juan Dela Cruz')


@pytest.fixture
def flight(system):
    return system.create_flight('Cebu Pacific', 'RP-C3240', 60, 'Tokyo', '08:00 AM', '01:30 PM')


@pytest.fixture
def payment():
    return GCashPayment('09171234567')


@pytest.fixture
def reload(store):
    """Build a fresh system over the same data directory"""
    def _reload():
        reloaded = ReservationSystem(store)
        reloaded.load()
        return reloaded
    return _reload
