# comparator/validators/merchant_location.py
"""
Regla DE 43: ubicación del comercio en posiciones fijas.
"""

from typing import List

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from .base_rule import BaseRule

ADDRESS_PATH = "transaction.merchant.address.addressLine1"
CITY_PATH = "transaction.merchant.address.city"
STATE_PATH = "transaction.merchant.address.state"
COUNTRY_PATH = "transaction.merchant.address.country.countryCode"

RECORD_LENGTH = 40


def _same(expected: str, actual) -> bool:
    return actual is not None and expected.lower() == actual.lower()


class MerchantLocationRule(BaseRule):
    """Nombre/dirección[0:23], ciudad[23:36], estado[36:38], país[38:40]."""

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.MERCHANT_LOCATION,
            description="Ubicación del comercio sin distinguir mayúsculas"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        padded = context.expected.ljust(RECORD_LENGTH)[:RECORD_LENGTH]

        address = padded[0:23].strip()
        city = padded[23:36].strip()
        state = padded[36:38].strip()
        country = padded[38:40].strip()

        actual_address = context.value_at(ADDRESS_PATH)
        actual_city = context.value_at(CITY_PATH)
        actual_state = context.value_at(STATE_PATH)
        actual_country = context.value_at(COUNTRY_PATH)

        all_match = (
            _same(address, actual_address)
            and _same(city, actual_city)
            and _same(state, actual_state)
            and _same(country, actual_country)
        )

        canonical_value = f"{actual_address}, {actual_city}, {actual_state} {actual_country}"
        return self.verdict(context, all_match, canonical_value, canonical_value)
