# comparator/validators/trace_data.py
"""
Reglas de datos de traza del adquirente y del emisor.
"""

from typing import List, Tuple

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from .base_rule import BaseRule, DetailCollector

ACQUIRER_PATH = "transaction.acquirerTraceData"
ISSUER_PATH = "transaction.issuerTraceData"

ACQUIRER_FORMAT_CODE = "DUAL_MESSAGE_CLEARING_FORMAT_CODE"
ISSUER_FORMAT_CODE = "DUAL_MESSAGE_AUTH_FORMAT_CODE"
ISSUER_FORMAT_DIGIT = "6"

SERVICE_LEVELS = {
    "1": "Regional",
    "3": "Intracurrency",
}

CONVERSION_INDICATORS = {
    "0": "Not Applicable",
    "1": "Matched with authorization",
    "2": "No match found",
}

# (etiqueta, inicio, fin, ruta relativa)
ACQUIRER_LAYOUT: List[Tuple[str, int, int, str]] = [
    ("Mixed use", 1, 2, "acquirerReferenceNumberObject.mixedUse"),
    ("Reference ID", 2, 8, "acquirerReferenceNumberObject.acquirerReferenceId"),
    ("Julian date", 8, 12, "acquirerReferenceNumberObject.julianDate"),
    ("Sequence", 12, 23, "acquirerReferenceNumberObject.acquirerSequence"),
    ("Check digit", 23, 24, "acquirerReferenceNumberObject.checkDigit"),
    ("Terminal type", 24, 27, "terminalType"),
    ("Acquirer ID", 27, 38, "acquirerInstituionId"),
    ("Lifecycle indicator", 38, 39, "transactionLifeCycle.lifeCycleSupportIndicator"),
    ("Trace ID", 39, 54, "transactionLifeCycle.traceId"),
    ("Brand ID", 54, 57, "businessActivity.acceptanceBrandId"),
    ("Service level", 57, 58, "businessActivity.businessServiceLevelCode"),
    ("Service ID", 58, 64, "businessActivity.businessServiceIdCode"),
    ("Settlement indicator", 64, 65, "settlementIndicator"),
    ("Interchange rate", 65, 67, "interchangeRateDesignator"),
    ("businessDate", 67, 73, "businessDate"),
    ("productIdentifier", 73, 76, "productIdentifier"),
    ("businessCycle", 76, 78, "businessCycle"),
    ("settlementDate", 78, 84, "settlementDate"),
    ("mastercardRateIndicator", 84, 85, "mastercardRateIndicator"),
]

ISSUER_LAYOUT: List[Tuple[str, int, int, str]] = [
    ("System trace audit number", 1, 7, "systemTraceAuditNumber"),
    ("Transmission date time", 7, 17, "transmissionDateTime"),
    ("Settlement date", 17, 21, "settlementDate"),
    ("Financial network code", 21, 24, "financialNetworkCode"),
]


class AcquirerTraceDataRule(BaseRule):
    """Registro de 93 posiciones; todos los sub-campos deben coincidir."""

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.ACQUIRER_TRACE_DATA,
            description="Datos de traza del adquirente"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        if len(value) < 93:
            return [self.failed(context, "Invalid acquirer trace data length")]

        details = DetailCollector()
        details.expect("Format code", ACQUIRER_FORMAT_CODE, context.value_at(f"{ACQUIRER_PATH}.formatCode"))

        for label, start, end, path in ACQUIRER_LAYOUT:
            details.expect(label, value[start:end], context.value_at(f"{ACQUIRER_PATH}.{path}"))

        service_level = value[85:86]
        details.expect(
            "Settlement service level",
            SERVICE_LEVELS.get(service_level, service_level),
            context.value_at(f"{ACQUIRER_PATH}.settlementServiceLevelCode")
        )
        details.expect(
            "currencyConversionDate", value[86:92],
            context.value_at(f"{ACQUIRER_PATH}.currencyConversionDate")
        )
        conversion = value[92:93]
        details.expect(
            "Currency conversion indicator",
            CONVERSION_INDICATORS.get(conversion, conversion),
            context.value_at(f"{ACQUIRER_PATH}.currencyConversionIndicator")
        )

        if details.all_valid:
            return [self.passed(context, value)]
        return [self.failed(context, details.render())]


class IssuerTraceDataRule(BaseRule):
    """
    Registro de al menos 52 posiciones con dígito de formato 6.

    Si la referencia Banknet[24:33] termina en tres espacios se compara
    sin ellos (el resolver recorta) y se valida el tipo de comercio[33:37];
    en otro caso solo se comparan sus seis primeros caracteres.
    """

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.ISSUER_TRACE_DATA,
            description="Datos de traza del emisor"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        if len(value) < 52:
            return [self.failed(context, "Invalid issuer trace data length")]

        details = DetailCollector()
        format_digit = value[0:1]
        if format_digit != ISSUER_FORMAT_DIGIT:
            details.error(f"Invalid format code: expected {ISSUER_FORMAT_DIGIT}, got {format_digit}")
        details.expect("Format code", ISSUER_FORMAT_CODE, context.value_at(f"{ISSUER_PATH}.formatCode"))

        for label, start, end, path in ISSUER_LAYOUT:
            details.expect(label, value[start:end], context.value_at(f"{ISSUER_PATH}.{path}"))

        banknet = value[24:33]
        has_merchant_type = banknet.endswith("   ")
        details.expect(
            "Banknet reference number",
            banknet.rstrip() if has_merchant_type else banknet[0:6],
            context.value_at(f"{ISSUER_PATH}.banknetReferenceNumber")
        )
        if has_merchant_type:
            details.expect("Merchant type", value[33:37], context.value_at(f"{ISSUER_PATH}.merchantType"))

        details.expect("Trace ID", value[37:52], context.value_at(f"{ISSUER_PATH}.traceId"))

        if details.all_valid:
            return [self.passed(context, value)]
        return [self.failed(context, details.render())]
