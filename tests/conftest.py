import pytest
from fastapi.testclient import TestClient

from app.calculator import RateCalculator
from app.dependencies import get_calculator
from app.tariff_loader import parse
from main import app

TARIFF_TEXT = """Country,Service,Min Weight,Max Weight,Rate,Type
France,EXPRESS,0,0.5,500,DOC
France,EXPRESS,0,1,300,BASE
France,EXPRESS,1,10,50,ADDER
France,EXPRESS,10,30,40,FLAT_SLAB
France,EXPRESS,10,30,99,FLAT_SLAB
France,ECONOMY,0,1,200,BASE
France,ECONOMY,1,5,30,ADDER
"Korea, South",EXPRESS,0,1,400,BASE
"Korea, South",EXPRESS,1,20,60,ADDER
United Kingdom,express,0,1,350,base
United Kingdom,Express,1,10,55,adder
Germany,EXPRESS,0,70,45,FLAT_SLAB
Spain,EXPRESS,abc,1,300,BASE
Spain,EXPRESS,5,1,300,BASE
Spain,EXPRESS,0,1,300
Spain,EXPRESS,0,1,-5,BASE
Spain,EXPRESS,0,1,300,SURCHARGE
"""


@pytest.fixture
def tariff_text():
    return TARIFF_TEXT


@pytest.fixture
def tariff_index(tariff_text):
    return parse(tariff_text)


@pytest.fixture
def calculator(tariff_index):
    return RateCalculator(tariff_index)


@pytest.fixture
def client(calculator):
    app.dependency_overrides[get_calculator] = lambda: calculator
    yield TestClient(app)
    app.dependency_overrides.clear()
