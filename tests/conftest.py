import pytest

from serabutan.catalog.repository import CatalogRepository
from serabutan.domain.models import Location, MarketplaceSnapshot, Service, User, Worker

# Around Monas, Jakarta. Distances from MONAS:
#   budi  ~1.0 km north
#   citra ~4.3 km south-west
#   eka   ~118 km (Bandung)
#   dedi  has no saved location
MONAS = (-6.1751, 106.8650)


@pytest.fixture
def snapshot() -> MarketplaceSnapshot:
    users = [
        User(id="u-ani", name="Ani", email="ani@example.com", role="CLIENT"),
        User(id="u-budi", name="Budi", email="budi@example.com", role="WORKER", phone="62812"),
        User(id="u-citra", name="Citra", email="citra@example.com", role="WORKER"),
        User(id="u-dedi", name="Dedi", email="dedi@example.com", role="WORKER"),
        User(id="u-eka", name="Eka", email="eka@example.com", role="WORKER"),
    ]
    locations = [
        Location(id="loc-ani", user_id="u-ani", latitude=-6.1751, longitude=106.8650, address="Monas"),
        Location(id="loc-budi", user_id="u-budi", latitude=-6.1661, longitude=106.8650),
        Location(id="loc-citra", user_id="u-citra", latitude=-6.2088, longitude=106.8456),
        Location(id="loc-eka", user_id="u-eka", latitude=-6.9175, longitude=107.6191, address="Bandung"),
    ]
    workers = [
        Worker(
            id="w-citra",
            user_id="u-citra",
            services=[Service(id="s-bersih", worker_id="w-citra", title="Cleaning", price=200000)],
        ),
        Worker(
            id="w-budi",
            user_id="u-budi",
            skills=["electrical", " electrical ", "ac repair"],
            services=[
                Service(id="s-listrik", worker_id="w-budi", title="Wiring", price=75000),
                Service(id="s-ac", worker_id="w-budi", title="AC service", price=120000),
            ],
        ),
        Worker(
            id="w-dedi",
            user_id="u-dedi",
            services=[Service(id="s-pipa", worker_id="w-dedi", title="Plumbing", price=100000)],
        ),
        Worker(id="w-eka", user_id="u-eka"),
    ]
    return MarketplaceSnapshot(users=users, locations=locations, workers=workers)


@pytest.fixture
def repository(snapshot) -> CatalogRepository:
    return CatalogRepository(snapshot)
