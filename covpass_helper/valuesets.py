"""Reference value sets used to validate and display coded claims."""

import logging
from dataclasses import dataclass
from typing import Any, Dict

import requests

from .errors import InvalidCode, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_VALUE_SETS_URL = "https://raw.githubusercontent.com/ehn-dcc-development/ehn-dcc-valuesets/main"

# category -> file name in the ehn-dcc-valuesets layout
VALUE_SET_FILES = {
    "countryCodes": "country-2-codes.json",
    "medicalProducts": "vaccine-medicinal-product.json",
    "manufacturers": "vaccine-mah-manf.json",
    "testTypes": "test-type.json",
    "testResults": "test-result.json",
}

ValueSetTable = Dict[str, Dict[str, Any]]


@dataclass(frozen=True)
class ValueSets:
    """The five read-only tables a single decode runs against."""

    country_codes: ValueSetTable
    medical_products: ValueSetTable
    manufacturers: ValueSetTable
    test_types: ValueSetTable
    test_results: ValueSetTable

    @classmethod
    def from_documents(cls, docs: Dict[str, Dict[str, Any]]) -> "ValueSets":
        """Build from ``{category: {"valueSetValues": {...}}}`` documents."""
        tables = {}
        for category in VALUE_SET_FILES:
            doc = docs.get(category)
            if not isinstance(doc, dict) or not isinstance(doc.get("valueSetValues"), dict):
                raise NetworkError(f"Value set {category} has no valueSetValues mapping")
            values = doc["valueSetValues"]
            for code, entry in values.items():
                if not isinstance(entry, dict) or not isinstance(entry.get("display"), str):
                    raise NetworkError(f"Value set {category} entry {code!r} has no display string")
            tables[category] = values

        return cls(
            country_codes=tables["countryCodes"],
            medical_products=tables["medicalProducts"],
            manufacturers=tables["manufacturers"],
            test_types=tables["testTypes"],
            test_results=tables["testResults"],
        )

    def display(self, table: ValueSetTable, category: str, code: Any) -> str:
        """Resolve ``code`` to its display string or raise InvalidCode."""
        if not isinstance(code, str) or code not in table:
            logger.warning(f"[valuesets] {category} code {code!r} not in value set")
            raise InvalidCode(category, code)
        return table[code]["display"]


def fetch_value_sets(base_url: str = DEFAULT_VALUE_SETS_URL, timeout: float = 25) -> ValueSets:
    """Fetch all five value sets. Any failed request aborts the whole fetch."""
    docs = {}
    for category, filename in VALUE_SET_FILES.items():
        url = f"{base_url.rstrip('/')}/{filename}"
        logger.info(f"[valuesets] Fetching {category}: {url}")
        try:
            r = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
            r.raise_for_status()
            docs[category] = r.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"[valuesets] Fetching {category} failed: {e}")
            raise NetworkError(f"Value set fetch failed for {category}: {e}") from e

    return ValueSets.from_documents(docs)
