import logging
from typing import Iterable, Optional

from iso3166 import countries

logger = logging.getLogger(__name__)

# Names tariffs commonly use where ISO 3166 has a formal one, keyed by alpha-2
COMMON_NAMES = {
    "KR": ["South Korea", "Korea, South"],
    "KP": ["North Korea", "Korea, North"],
    "GB": ["United Kingdom", "UK"],
    "US": ["United States", "USA"],
    "RU": ["Russia"],
    "VN": ["Vietnam"],
    "IR": ["Iran"],
    "TW": ["Taiwan"],
    "LA": ["Laos"],
    "SY": ["Syria"],
    "TZ": ["Tanzania"],
    "BO": ["Bolivia"],
    "VE": ["Venezuela"],
    "MD": ["Moldova"],
}


class CountryMapper:
    @staticmethod
    def match_destination(value: str, destinations: Iterable[str]) -> Optional[str]:
        """Tariff destination whose name equals the value, ignoring case"""
        wanted = str(value).strip().upper()
        for destination in destinations:
            if destination.upper() == wanted:
                return destination
        return None

    @staticmethod
    def convert_code_to_names(country_code: str) -> list:
        """Official and common names for an ISO 3166-1 alpha-2, alpha-3 or numeric code"""
        try:
            country = countries.get(str(country_code).strip())
        except KeyError:
            raise ValueError(f"Invalid country code: {country_code}")
        names = [country.name, country.apolitical_name] + COMMON_NAMES.get(country.alpha2, [])
        return [name for i, name in enumerate(names) if name and name not in names[:i]]

    @classmethod
    def resolve(cls, value: str, destinations: Iterable[str]) -> str:
        """Map a display name or ISO code onto one of the tariff destinations"""
        destinations = list(destinations)

        destination = cls.match_destination(value, destinations)
        if destination:
            return destination

        if not str(value).strip():
            raise ValueError("Destination country is required")

        names = cls.convert_code_to_names(value)
        for name in names:
            destination = cls.match_destination(name, destinations)
            if destination:
                logger.info(f"Resolved country code {value} to {destination}")
                return destination

        # Official names often extend the common one, e.g. "United States of America"
        for name in names:
            for destination in destinations:
                if name.upper().startswith(destination.upper() + " "):
                    logger.info(f"Resolved country code {value} to {destination}")
                    return destination

        raise ValueError(f"No tariff destination matches country {value} ({', '.join(names)})")
