import csv
import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .models import RuleKind, TariffRow

logger = logging.getLogger(__name__)

HEADER_LABEL = "Country"
MIN_FIELDS = 6
TEXT_SUFFIXES = {".csv", ".txt"}
EXCEL_SUFFIXES = {".xlsx"}


class TariffSourceError(Exception):
    """Raised when a tariff file cannot be read at all"""


class TariffIndex:
    """Read-only lookup of tariff rules by service and country.

    Rules for each (service, country) pair are kept in file order. The
    calculator relies on that order: when several rules of the same kind
    match, the first one wins.
    """

    def __init__(self, rules: Dict[str, Dict[str, List[TariffRow]]], countries: Sequence[str],
                 skipped_rows: int = 0):
        self._rules = MappingProxyType({
            service: MappingProxyType({key: tuple(rows) for key, rows in by_country.items()})
            for service, by_country in rules.items()
        })
        self._countries = tuple(sorted(countries))
        self.skipped_rows = skipped_rows
        self.row_count = sum(len(rows) for by_country in self._rules.values() for rows in by_country.values())

    def rules_for(self, service: str, country: str) -> Optional[Tuple[TariffRow, ...]]:
        """Ordered rules for a pair, or None when nothing is configured"""
        by_country = self._rules.get(str(service).strip().upper())
        if by_country is None:
            return None
        return by_country.get(str(country).strip().upper())

    @property
    def countries(self) -> Tuple[str, ...]:
        return self._countries

    @property
    def services(self) -> Tuple[str, ...]:
        return tuple(sorted(self._rules))

    def __len__(self) -> int:
        return self.row_count

    def __repr__(self) -> str:
        return (f"TariffIndex(services={len(self._rules)}, countries={len(self._countries)}, "
                f"rows={self.row_count}, skipped={self.skipped_rows})")


def split_line(line: str) -> List[str]:
    """Split one comma separated line; quoted fields may hold commas"""
    return next(csv.reader([line]), [])


def _to_number(value: str) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_row(fields: Sequence[str]) -> Optional[TariffRow]:
    """Build a rule from split fields, or None when the row is unusable"""
    if len(fields) < MIN_FIELDS:
        return None

    country = str(fields[0]).strip()
    service = str(fields[1]).strip().upper()
    min_weight = _to_number(fields[2])
    max_weight = _to_number(fields[3])
    rate = _to_number(fields[4])
    kind = str(fields[5]).strip().upper()

    if not country or not service:
        return None
    if min_weight is None or max_weight is None or rate is None:
        return None
    if min_weight >= max_weight or rate < 0:
        return None
    if kind not in RuleKind.__members__:
        return None

    return TariffRow(
        country=country,
        service=service,
        min_weight=min_weight,
        max_weight=max_weight,
        rate=rate,
        kind=RuleKind(kind)
    )


def build_index(rows: Iterable[Sequence[str]]) -> TariffIndex:
    """Index already split rows; the first row is dropped if it is the header"""
    rules: Dict[str, Dict[str, List[TariffRow]]] = {}
    countries: Dict[str, str] = {}  # upper-cased key -> first seen display name
    skipped = 0

    for position, fields in enumerate(rows):
        if position == 0 and fields and str(fields[0]).strip() == HEADER_LABEL:
            continue

        row = parse_row(fields)
        if row is None:
            skipped += 1
            logger.debug(f"Skipping tariff row {position + 1}: {list(fields)}")
            continue

        country_key = row.country.upper()
        countries.setdefault(country_key, row.country)
        rules.setdefault(row.service, {}).setdefault(country_key, []).append(row)

    index = TariffIndex(rules, list(countries.values()), skipped_rows=skipped)
    if skipped:
        logger.warning(f"Tariff loaded with {skipped} unusable row(s) skipped")
    logger.info(f"Built {index!r}")
    return index


def parse(raw_text: str) -> TariffIndex:
    """Parse raw tariff text into a TariffIndex.

    Columns: country, service, min weight, max weight, rate, rule kind.
    Extra columns are ignored. Malformed rows are dropped, never raised.
    """
    lines = [line.strip() for line in str(raw_text).splitlines()]
    return build_index(split_line(line) for line in lines if line)


def _read_excel_rows(path: Path) -> List[List[str]]:
    df = pd.read_excel(path, sheet_name=0, header=None, dtype=str)
    df = df.fillna('')
    rows = []
    for values in df.itertuples(index=False, name=None):
        fields = [str(value).strip() for value in values]
        # Trailing empty cells come from wider sheets, not from the row itself
        while fields and not fields[-1]:
            fields.pop()
        if fields:
            rows.append(fields)
    return rows


def load_tariff_file(path) -> TariffIndex:
    """Read a tariff from a text or Excel file"""
    path = Path(path)
    if not path.exists():
        raise TariffSourceError(f"Tariff file not found: {path}")

    suffix = path.suffix.lower()
    logger.info(f"Loading tariff from {path}")
    if suffix in TEXT_SUFFIXES:
        return parse(path.read_text(encoding="utf-8-sig"))
    if suffix in EXCEL_SUFFIXES:
        try:
            rows = _read_excel_rows(path)
        except (ValueError, ImportError) as e:
            raise TariffSourceError(f"Could not read tariff workbook {path}: {str(e)}") from e
        return build_index(rows)

    raise TariffSourceError(f"Unsupported tariff file type: {path.suffix}")
