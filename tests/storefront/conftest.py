import pytest
from protean.integrations.pytest import DomainFixture

from storefront.scheduling import ManualClock, ManualTimer

# Item A mirrors the end-to-end scenario: price 25, two units in stock
SMALL_CATALOG = [
    {"id": "A", "name": "Vada Pao", "price": 25, "stock": 2, "category": "snacks"},
    {"id": "B", "name": "Filter Coffee", "price": 30, "stock": 10, "category": "beverages"},
    {"id": "C", "name": "Masala Dosa", "price": 60, "stock": 0, "category": "meals"},
]


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        # Every test starts from an empty catalog, cart and history
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def clock():
    return ManualClock()


@pytest.fixture()
def timer(clock):
    return ManualTimer(clock)


@pytest.fixture()
def shop(clock, timer):
    from storefront.session import Storefront

    return Storefront(clock=clock, timer=timer, catalog=SMALL_CATALOG, session_id="sess-001")


@pytest.fixture()
def small_catalog():
    return [dict(entry) for entry in SMALL_CATALOG]
