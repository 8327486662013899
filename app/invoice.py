import logging
from datetime import date
from typing import Optional

from .models import InvoiceCharges, RateResult

logger = logging.getLogger(__name__)


class InvoiceAssembler:
    """Combines a freight quote with counter charges into payable totals"""

    @staticmethod
    def assemble(rate: RateResult, charges: InvoiceCharges) -> dict:
        """
        Build the invoice totals:
        1. Freight from the rate result
        2. + packing charges (vacuum bags and boxes)
        3. + insurance
        4. - discount
        Returns the grand total, balance due and breakdown
        """
        freight = rate.total

        vacuum_total = charges.vac_qty * charges.vac_price
        box_total = charges.box_qty * charges.box_price
        packing_total = vacuum_total + box_total

        grand_total = freight + packing_total + charges.insurance - charges.discount
        balance_due = grand_total - charges.amount_paid

        if grand_total < 0:
            logger.warning(f"Discount {charges.discount} exceeds invoice value; grand total is {grand_total}")

        return {
            'freight': freight,
            'chargeable_weight': rate.chg_wt,
            'rate_per_kg': rate.rate_per_kg,
            'packing': {
                'vacuum_bags': {
                    'quantity': charges.vac_qty,
                    'unit_price': charges.vac_price,
                    'amount': vacuum_total
                },
                'boxes': {
                    'quantity': charges.box_qty,
                    'unit_price': charges.box_price,
                    'amount': box_total
                },
                'total': packing_total
            },
            'subtotal': freight + packing_total,
            'insurance': charges.insurance,
            'discount': charges.discount,
            'grand_total': grand_total,
            'pay_method': charges.pay_method.value,
            'amount_paid': charges.amount_paid,
            'balance_due': balance_due
        }


def generate_invoice_number(branch_code: str, sequence: int, on_date: Optional[date] = None) -> str:
    """Invoice number as <branch><YYYYMMDD>-<daily sequence>, e.g. 1020261019-001"""
    if sequence < 1:
        raise ValueError("Invoice sequence starts at 1")
    branch_code = str(branch_code).strip()
    if not branch_code:
        raise ValueError("Branch code is required")
    on_date = on_date or date.today()
    return f"{branch_code}{on_date.strftime('%Y%m%d')}-{sequence:03d}"
