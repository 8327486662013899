from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from app.models import InvoiceRequest, InvoiceResponse, InvoiceNumberRequest
from app.invoice import generate_invoice_number
from app.dependencies import get_calculator, get_assembler
from app.routes.quote_routes import run_quote
from configurations import CURRENCY
import logging

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/invoice",
    tags=["Invoice"]
)


@router.post("/totals", response_model=InvoiceResponse)
async def invoice_totals(request_data: InvoiceRequest, calculator=Depends(get_calculator),
                         assembler=Depends(get_assembler)):
    """Quote the freight and total the invoice with counter charges"""
    try:
        logger.info(f"Received invoice totals request: {request_data}")

        quote = run_quote(request_data.quote, calculator)
        totals = assembler.assemble(quote.result, request_data.charges)

        warnings = []
        if quote.result.chg_wt == 0:
            warnings.append(f"No freight rate for {quote.service} to {quote.country}")
        if quote.result.adder_missing:
            warnings.append(
                f"No per-kg rate covers {quote.result.chg_wt:g}kg; freight includes the first kg only"
            )
        if totals['grand_total'] < 0:
            warnings.append("Discount exceeds the invoice value")

        logger.info(f"Invoice totals complete: grand_total={totals['grand_total']}")
        return InvoiceResponse(
            status="success",
            currency=CURRENCY,
            rate=quote.result,
            totals=totals,
            warnings=warnings
        )

    except ValueError as e:
        logger.error(f"Validation error in invoice totals: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in invoice totals: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/number")
async def invoice_number(request_data: InvoiceNumberRequest):
    """Invoice number for a branch's daily sequence"""
    try:
        number = generate_invoice_number(request_data.branch_code, request_data.sequence, date.today())
        return {
            "status": "success",
            "invoice_no": number
        }
    except ValueError as e:
        logger.error(f"Invalid invoice number request: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
