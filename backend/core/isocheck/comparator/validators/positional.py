# comparator/validators/positional.py
"""
Reglas de campos posicionales simples: datos geográficos POS (DE 59),
datos de red (DE 63) y datos AVS.
"""

from typing import List

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from .base_rule import BaseRule, DetailCollector, require_length

GEOGRAPHIC_PATH = "transaction.nationalPOSGeographicData.posGeographicData"
NETWORK_PATH = "transaction.Network"
AVS_ZIP_PATH = "transaction.member.address.zipCode"

SETTLEMENT_FLAGS = {
    "Y": "SETTLED_BETWEEN_ACQUIRER_AND_ISSUER",
}
DEFAULT_SETTLEMENT_FLAG = "SETTLED_THROUGH_NETWORK_EXCHANGE"

PARTIAL_AUTH_FLAGS = {
    "1": "TERMINAL_SUPPPORT_PARTIAL_APPROVAL",
    "2": "RETURNS_BALANCES_IN_RESPONSE",
}
DEFAULT_PARTIAL_AUTH_FLAG = "TERMINAL_DOES_NOT_SUPPPORT_PARTIAL_APPROVAL"

AVS_PREFIX = "TDAV"


class NationalPosGeographicDataRule(BaseRule):
    """Estado[0:2], condado[2:5], código postal[5:14] y país[14:17]."""

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.NATIONAL_POS_GEOGRAPHIC_DATA,
            description="Datos geográficos del punto de venta"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        require_length(value, 17, "national POS geographic data")

        details = DetailCollector(separator=", ")
        state = value[0:2]
        county = value[2:5]
        postal_code = value[5:14]
        country = value[14:17]

        details.mark("State", state, context.value_at(f"{GEOGRAPHIC_PATH}.state") == state)
        details.mark("County", county, context.value_at(f"{GEOGRAPHIC_PATH}.countyCode") == county)
        details.mark(
            "Postal Code", postal_code,
            context.value_at(f"{GEOGRAPHIC_PATH}.zipCode") == postal_code.strip()
        )
        details.mark(
            "Country Code", country,
            context.value_at(f"{GEOGRAPHIC_PATH}.country.countryCode") == country
        )

        return self.verdict(context, details.all_valid, details.render())


class NetworkDataRule(BaseRule):
    """
    Terminal pseudo[2:8], red adquirente[8:10], procesador[11:17] y los
    indicadores de liquidación[17] y autorización parcial[19].
    """

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.NETWORK_DATA,
            description="Datos de red"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        require_length(value, 20, "network data")

        details = DetailCollector()
        details.expect("Pseudo Terminal", value[2:8], context.value_at(f"{NETWORK_PATH}.pseudoTerminal"))
        details.expect("Acquirer Network ID", value[8:10], context.value_at(f"{NETWORK_PATH}.acquirerNetworkId"))
        details.expect("Processor ID", value[11:17], context.value_at(f"{NETWORK_PATH}.processorId"))
        details.expect(
            "Settlement flag",
            SETTLEMENT_FLAGS.get(value[17], DEFAULT_SETTLEMENT_FLAG),
            context.value_at(f"{NETWORK_PATH}.ProcessingFlag.isExternallySettled")
        )
        details.expect(
            "Partial Auth Support",
            PARTIAL_AUTH_FLAGS.get(value[19], DEFAULT_PARTIAL_AUTH_FLAG),
            context.value_at(f"{NETWORK_PATH}.ProcessingFlag.partialAuthTerminalSupportIndicator")
        )

        if details.all_valid:
            return [self.passed(context, value)]
        return [self.failed(context, details.render())]


class AvsDataRule(BaseRule):
    """Prefijo TDAV, longitud del código postal en dos dígitos y código postal."""

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.AVS_DATA,
            description="Datos de verificación de dirección"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        require_length(value, 6, "AVS data")

        details = DetailCollector()
        prefix = value[0:4]
        if prefix != AVS_PREFIX:
            details.error(f"Invalid prefix: expected {AVS_PREFIX}, got {prefix}")

        zip_length = value[4:6]
        if not zip_length.isdigit():
            details.error(f"Invalid zip code length format: {zip_length}")
            return [self.failed(context, details.render())]

        zip_code = value[6:6 + int(zip_length)]
        actual = context.value_at(AVS_ZIP_PATH)
        details.expect("Zip code", zip_code, actual)

        if details.all_valid:
            return [self.passed(context, actual, actual)]
        return [self.failed(context, details.render(), actual)]
