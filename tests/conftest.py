import pytest

from db_adapter import InMemoryPlateRepository
from models import PlateRecord
from search_service import PlateSearchService

PLATE_ROWS = [
    {"code": "B", "city": "Berlin", "region": None, "state": "Berlin"},
    {"code": "BN", "city": "Bonn", "region": None, "state": "Nordrhein-Westfalen"},
    {"code": "M", "city": "München", "region": "Landkreis München", "state": "Bayern"},
    {"code": "K", "city": "Köln", "region": None, "state": "Nordrhein-Westfalen"},
    {"code": "HH", "city": "Hamburg", "region": None, "state": "Hamburg"},
    {"code": "GÖ", "city": "Göttingen", "region": "Landkreis Göttingen", "state": "Niedersachsen"},
    {"code": "TÖL", "city": "Bad Tölz", "region": "Landkreis Bad Tölz-Wolfratshausen", "state": "Bayern"},
    {"code": "BÜS", "city": "Büsingen am Hochrhein", "region": "Landkreis Konstanz", "state": "Baden-Württemberg"},
    {"code": "KA", "city": "Karlsruhe", "region": "Landkreis Karlsruhe", "state": "Baden-Württemberg"},
    {"code": "BA", "city": "Bamberg", "region": "Landkreis Bamberg", "state": "Bayern"},
]


@pytest.fixture
def plate_rows():
    return [dict(row) for row in PLATE_ROWS]


@pytest.fixture
def plates():
    return [PlateRecord(id=i, **row) for i, row in enumerate(PLATE_ROWS, 1)]


@pytest.fixture
def repository(plates):
    return InMemoryPlateRepository(plates)


@pytest.fixture
def service(repository):
    return PlateSearchService(repository)
