import threading
from app.calculator import RateCalculator
from app.invoice import InvoiceAssembler
from app.tariff_loader import load_tariff_file
from configurations import TARIFF_FILE

_calculator = None
_calculator_lock = threading.Lock()


def init_calculator():
    """Initialize the calculator instance once per process"""
    global _calculator
    if _calculator is None:
        with _calculator_lock:
            if _calculator is None:
                index = load_tariff_file(TARIFF_FILE)
                _calculator = RateCalculator(index)
    return _calculator


def get_calculator():
    """Dependency to get calculator instance"""
    return init_calculator()


def get_assembler():
    """Dependency to get invoice assembler"""
    return InvoiceAssembler()
