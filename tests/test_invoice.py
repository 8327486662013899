import pytest
from datetime import date

from app.invoice import InvoiceAssembler, generate_invoice_number
from app.models import InvoiceCharges, PayMethod, RateResult


@pytest.fixture
def freight():
    return RateResult(total=450, chg_wt=4, rate_per_kg=112.5)


def test_assemble_totals(freight):
    charges = InvoiceCharges(
        vac_qty=2, vac_price=150,
        box_qty=1, box_price=400,
        insurance=250, discount=100,
        pay_method=PayMethod.CARD, amount_paid=1000
    )
    totals = InvoiceAssembler.assemble(freight, charges)

    assert totals['freight'] == 450
    assert totals['packing']['vacuum_bags']['amount'] == 300
    assert totals['packing']['boxes']['amount'] == 400
    assert totals['packing']['total'] == 700
    assert totals['subtotal'] == 1150
    assert totals['grand_total'] == 450 + 700 + 250 - 100
    assert totals['balance_due'] == 1300 - 1000
    assert totals['pay_method'] == "Card"


def test_assemble_without_charges(freight):
    totals = InvoiceAssembler.assemble(freight, InvoiceCharges())
    assert totals['grand_total'] == 450
    assert totals['balance_due'] == 450
    assert totals['pay_method'] == "Cash"


def test_overpayment_gives_negative_balance(freight):
    totals = InvoiceAssembler.assemble(freight, InvoiceCharges(amount_paid=500))
    assert totals['balance_due'] == -50


def test_charges_reject_negative_amounts():
    with pytest.raises(ValueError):
        InvoiceCharges(discount=-10)


def test_invoice_number_format():
    assert generate_invoice_number("10", 1, date(2026, 10, 19)) == "1020261019-001"
    assert generate_invoice_number("20", 42, date(2026, 1, 5)) == "2020260105-042"


@pytest.mark.parametrize("branch, sequence", [("10", 0), ("10", -3), ("  ", 1)])
def test_invoice_number_rejects_bad_input(branch, sequence):
    with pytest.raises(ValueError):
        generate_invoice_number(branch, sequence, date(2026, 10, 19))


def test_invoice_totals_endpoint(client):
    request_data = {
        "quote": {
            "country": "France",
            "service": "EXPRESS",
            "actual_weight": 3.2
        },
        "charges": {
            "vac_qty": 2,
            "vac_price": 150,
            "box_qty": 1,
            "box_price": 400,
            "insurance": 250,
            "discount": 100,
            "pay_method": "Cash",
            "amount_paid": 1000
        }
    }
    response = client.post("/invoice/totals", json=request_data)
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "success"
    assert data["rate"]["total"] == 450
    assert data["totals"]["grand_total"] == 1300
    assert data["totals"]["balance_due"] == 300
    assert data["warnings"] == []


def test_invoice_totals_warns_on_missing_adder(client):
    request_data = {"quote": {"country": "France", "service": "ECONOMY", "actual_weight": 6}}
    response = client.post("/invoice/totals", json=request_data)
    assert response.status_code == 200

    data = response.json()
    assert data["rate"]["adder_missing"] is True
    assert data["totals"]["grand_total"] == 200
    assert len(data["warnings"]) == 1


def test_invoice_totals_warns_without_freight(client):
    request_data = {
        "quote": {"country": "Atlantis", "service": "EXPRESS", "actual_weight": 2},
        "charges": {"discount": 50}
    }
    response = client.post("/invoice/totals", json=request_data)
    assert response.status_code == 200

    data = response.json()
    assert data["totals"]["grand_total"] == -50
    assert len(data["warnings"]) == 2


def test_invoice_number_endpoint(client):
    response = client.post("/invoice/number", json={"branch_code": "10", "sequence": 7})
    assert response.status_code == 200

    number = response.json()["invoice_no"]
    assert number.startswith("10")
    assert number.endswith("-007")
    assert len(number) == len("1020261019-007")


def test_invoice_number_endpoint_rejects_zero_sequence(client):
    response = client.post("/invoice/number", json={"branch_code": "10", "sequence": 0})
    assert response.status_code == 400
