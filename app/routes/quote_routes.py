from fastapi import APIRouter, Depends, HTTPException
from app.calculator import calculate_volumetric_weight
from app.mapping.country_mapper import CountryMapper
from app.models import QuoteRequest, QuoteResponse
from app.dependencies import get_calculator
from configurations import CURRENCY
import logging

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Quote"]
)


def resolve_country(value: str, calculator) -> str:
    """Tariff destination for a name or ISO code; unknown values pass through unchanged"""
    try:
        return CountryMapper.resolve(value, calculator.list_countries())
    except ValueError as e:
        logger.info(f"Quoting unresolved destination {value!r}: {str(e)}")
        return value.strip()


def run_quote(request: QuoteRequest, calculator) -> QuoteResponse:
    """Resolve destination and volumetric weight, then quote"""
    country = resolve_country(request.country, calculator)

    volumetric_weight = request.volumetric_weight or 0
    if request.length is not None:
        # Dimensions can only raise the volumetric weight the counter entered
        volumetric_weight = max(volumetric_weight, calculate_volumetric_weight(
            length=request.length,
            width=request.width,
            height=request.height,
            num_boxes=request.num_boxes
        ))

    result = calculator.quote(
        country=country,
        service=request.service,
        actual_weight=request.actual_weight,
        volumetric_weight=volumetric_weight
    )

    if not calculator.has_tariff(country, request.service):
        status = "no_tariff"
    elif result.chg_wt > 0:
        status = "success"
    else:
        status = "no_quote"

    return QuoteResponse(
        status=status,
        country=country,
        service=request.service.strip().upper(),
        volumetric_weight=volumetric_weight,
        currency=CURRENCY,
        result=result
    )


@router.get("/countries")
async def list_countries(calculator=Depends(get_calculator)):
    """Destinations available in the tariff"""
    return {"countries": list(calculator.list_countries())}


@router.get("/services")
async def list_services(calculator=Depends(get_calculator)):
    """Service levels available in the tariff"""
    return {"services": list(calculator.list_services())}


@router.post("/quote", response_model=QuoteResponse)
async def quote_shipment(request: QuoteRequest, calculator=Depends(get_calculator)):
    """Quote a shipment; unknown destinations or zero weight give a zero result"""
    try:
        logger.info(f"Received quote request: {request}")
        response = run_quote(request, calculator)
        logger.info(f"Quote complete: {response.result}")
        return response

    except ValueError as e:
        logger.error(f"Validation error: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
