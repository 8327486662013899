from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, Dict, Any, List
from configurations import DEFAULT_SERVICE


class RuleKind(str, Enum):
    BASE = "BASE"
    ADDER = "ADDER"
    FLAT_SLAB = "FLAT_SLAB"
    DOC = "DOC"


class PricingModel(str, Enum):
    NONE = "NONE"
    DOC = "DOC"
    FLAT_SLAB = "FLAT_SLAB"
    BASE_ADDER = "BASE_ADDER"


class PayMethod(str, Enum):
    CASH = "Cash"
    CARD = "Card"
    CREDIT = "Credit"


class TariffRow(BaseModel):
    """One pricing rule; applies to weights in (min_weight, max_weight]"""
    model_config = ConfigDict(frozen=True)

    country: str
    service: str
    min_weight: float
    max_weight: float
    rate: float
    kind: RuleKind

    def covers(self, weight: float) -> bool:
        return self.min_weight < weight <= self.max_weight


class RateResult(BaseModel):
    """Outcome of a single quote"""
    model_config = ConfigDict(frozen=True)

    total: float = 0.0
    chg_wt: float = 0.0
    rate_per_kg: float = 0.0
    pricing: PricingModel = PricingModel.NONE
    adder_missing: bool = False

    @classmethod
    def zero(cls) -> "RateResult":
        return cls()


class QuoteRequest(BaseModel):
    country: str = Field(..., min_length=2, description="Destination country name or ISO code")
    service: str = Field(default=DEFAULT_SERVICE, min_length=1, description="Service level, e.g. EXPRESS or ECONOMY")
    actual_weight: float = Field(default=0, ge=0, description="Actual weight in kg")
    volumetric_weight: Optional[float] = Field(default=None, ge=0, description="Volumetric weight in kg")
    length: Optional[float] = Field(default=None, gt=0, description="Box length in cm")
    width: Optional[float] = Field(default=None, gt=0, description="Box width in cm")
    height: Optional[float] = Field(default=None, gt=0, description="Box height in cm")
    num_boxes: int = Field(default=1, gt=0, description="Number of boxes")

    @model_validator(mode="after")
    def check_dimensions(self):
        dims = [self.length, self.width, self.height]
        if any(d is not None for d in dims) and not all(d is not None for d in dims):
            raise ValueError("length, width and height must be given together")
        return self

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "country": "United Kingdom",
            "service": "EXPRESS",
            "actual_weight": 3.2,
            "volumetric_weight": 2.5
        }
    })


class QuoteResponse(BaseModel):
    status: str
    country: str
    service: str
    volumetric_weight: float
    currency: str
    result: RateResult


class InvoiceCharges(BaseModel):
    vac_qty: int = Field(default=0, ge=0, description="Vacuum bags")
    vac_price: float = Field(default=0, ge=0)
    box_qty: int = Field(default=0, ge=0, description="Packing boxes sold")
    box_price: float = Field(default=0, ge=0)
    insurance: float = Field(default=0, ge=0)
    discount: float = Field(default=0, ge=0)
    pay_method: PayMethod = PayMethod.CASH
    amount_paid: float = Field(default=0, ge=0)


class InvoiceRequest(BaseModel):
    quote: QuoteRequest
    charges: InvoiceCharges = Field(default_factory=InvoiceCharges)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "quote": {
                "country": "United Kingdom",
                "service": "EXPRESS",
                "actual_weight": 3.2,
                "volumetric_weight": 0
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
    })


class InvoiceResponse(BaseModel):
    """Response model for the invoice totals endpoint"""
    status: str
    currency: str
    rate: RateResult
    totals: Dict[str, Any]
    warnings: List[str] = []


class InvoiceNumberRequest(BaseModel):
    branch_code: str = Field(..., min_length=1, max_length=4, pattern=r"^\d+$")
    sequence: int = Field(..., ge=1, le=999)
