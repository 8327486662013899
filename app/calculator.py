import logging
import math
from typing import Optional, Sequence, Tuple

from configurations import VOLUMETRIC_DIVISOR
from .models import PricingModel, RateResult, RuleKind, TariffRow
from .tariff_loader import TariffIndex

logger = logging.getLogger(__name__)

DOC_WEIGHT_LIMIT = 0.5  # kg; documents bill at this nominal weight


def first_rule(rules: Sequence[TariffRow], kind: RuleKind, weight: Optional[float] = None) -> Optional[TariffRow]:
    """First rule of a kind in file order, optionally one whose range covers the weight"""
    for rule in rules:
        if rule.kind != kind:
            continue
        if weight is None or rule.covers(weight):
            return rule
    return None


def quote(index: TariffIndex, country: str, service: str, actual_weight: float,
          volumetric_weight: float) -> RateResult:
    """
    Price a shipment against the tariff:
    1. Document rate when the shipment is 0.5 kg or less and a DOC rule exists
    2. Flat slab rate on the whole chargeable weight when a slab covers it
    3. First-kg base rate plus a per-kg adder for the rest
    Unknown destinations and missing weights give the zero result.
    """
    rules = index.rules_for(service, country)
    if not rules:
        return RateResult.zero()

    try:
        weights = [float(actual_weight or 0), float(volumetric_weight or 0)]
    except (TypeError, ValueError):
        return RateResult.zero()
    # Any non-finite weight voids the quote, whichever argument carries it
    if not all(math.isfinite(weight) for weight in weights):
        return RateResult.zero()
    input_weight = max(weights)
    if input_weight <= 0:
        return RateResult.zero()

    doc_rule = first_rule(rules, RuleKind.DOC)
    if input_weight <= DOC_WEIGHT_LIMIT and doc_rule:
        return RateResult(
            total=doc_rule.rate,
            chg_wt=DOC_WEIGHT_LIMIT,
            rate_per_kg=doc_rule.rate / DOC_WEIGHT_LIMIT,
            pricing=PricingModel.DOC
        )

    # Chargeable weight always rounds up to the next whole kilogram
    chg_wt = float(math.ceil(input_weight))

    slab_rule = first_rule(rules, RuleKind.FLAT_SLAB, chg_wt)
    if slab_rule:
        return RateResult(
            total=chg_wt * slab_rule.rate,
            chg_wt=chg_wt,
            rate_per_kg=slab_rule.rate,
            pricing=PricingModel.FLAT_SLAB
        )

    base_rule = first_rule(rules, RuleKind.BASE)
    if not base_rule:
        return RateResult.zero()

    total = base_rule.rate
    adder_missing = False
    if chg_wt > 1:
        adder_rule = first_rule(rules, RuleKind.ADDER, chg_wt)
        if adder_rule is None:
            adder_missing = True
            logger.warning(f"No ADDER rule covers {chg_wt}kg for {service} to {country}; "
                           f"pricing extra weight at 0")
        adder_rate = adder_rule.rate if adder_rule else 0.0
        total += (chg_wt - 1) * adder_rate

    return RateResult(
        total=total,
        chg_wt=chg_wt,
        rate_per_kg=total / chg_wt,
        pricing=PricingModel.BASE_ADDER,
        adder_missing=adder_missing
    )


def calculate_volumetric_weight(length: float, width: float, height: float, num_boxes: int = 1,
                                divisor: float = VOLUMETRIC_DIVISOR) -> float:
    """Volumetric weight in kg from box dimensions in cm (L x W x H / divisor)"""
    if divisor <= 0:
        raise ValueError("Volumetric divisor must be positive")
    return num_boxes * length * width * height / divisor


class RateCalculator:
    def __init__(self, index: TariffIndex):
        self.index = index

    def quote(self, country: str, service: str, actual_weight: float, volumetric_weight: float = 0) -> RateResult:
        """Quote a shipment against this calculator's tariff"""
        result = quote(self.index, country, service, actual_weight, volumetric_weight)
        logger.debug(f"Quote {service} {country} act={actual_weight} vol={volumetric_weight}: {result}")
        return result

    def list_countries(self) -> Tuple[str, ...]:
        """Selectable destinations, alphabetically sorted"""
        return self.index.countries

    def list_services(self) -> Tuple[str, ...]:
        return self.index.services

    def has_tariff(self, country: str, service: str) -> bool:
        return bool(self.index.rules_for(service, country))
