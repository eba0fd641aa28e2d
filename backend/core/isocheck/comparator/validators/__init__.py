# comparator/validators/__init__.py
"""
Comparadores disponibles, uno por tipo de regla.
"""

from .base_rule import BaseRule
from .equality import EqualityRule
from .amount import AmountRule, CurrencyRule
from .datetime_rule import DateTimeRule
from .merchant_location import MerchantLocationRule
from .pos import PosEntryModeRule, PosConditionCodeRule
from .original_data import OriginalDataRule
from .amounts_block import AdditionalFeesRule, AdditionalAmountsRule, ReplacementAmountsRule
from .positional import NationalPosGeographicDataRule, NetworkDataRule, AvsDataRule
from .trace_data import AcquirerTraceDataRule, IssuerTraceDataRule
from .incremental_auth import IncrementalAuthDataRule
from .advice_reversal import AdviceReversalCodeRule
from .additional_data import AdditionalDataRule
from ...catalog import RuleKind

ALL_RULES = {
    RuleKind.EQUALITY: EqualityRule,
    RuleKind.AMOUNT: AmountRule,
    RuleKind.CURRENCY: CurrencyRule,
    RuleKind.DATETIME: DateTimeRule,
    RuleKind.MERCHANT_LOCATION: MerchantLocationRule,
    RuleKind.POS_ENTRY_MODE: PosEntryModeRule,
    RuleKind.POS_CONDITION_CODE: PosConditionCodeRule,
    RuleKind.ORIGINAL_DATA: OriginalDataRule,
    RuleKind.ADDITIONAL_FEES: AdditionalFeesRule,
    RuleKind.ADDITIONAL_AMOUNTS: AdditionalAmountsRule,
    RuleKind.REPLACEMENT_AMOUNTS: ReplacementAmountsRule,
    RuleKind.NATIONAL_POS_GEOGRAPHIC_DATA: NationalPosGeographicDataRule,
    RuleKind.NETWORK_DATA: NetworkDataRule,
    RuleKind.AVS_DATA: AvsDataRule,
    RuleKind.ACQUIRER_TRACE_DATA: AcquirerTraceDataRule,
    RuleKind.ISSUER_TRACE_DATA: IssuerTraceDataRule,
    RuleKind.INCREMENTAL_AUTH_DATA: IncrementalAuthDataRule,
    RuleKind.ADVICE_REVERSAL_CODE: AdviceReversalCodeRule,
    RuleKind.ADDITIONAL_DATA: AdditionalDataRule,
}

__all__ = [
    'BaseRule',
    'ALL_RULES',
    'EqualityRule',
    'AmountRule',
    'CurrencyRule',
    'DateTimeRule',
    'MerchantLocationRule',
    'PosEntryModeRule',
    'PosConditionCodeRule',
    'OriginalDataRule',
    'AdditionalFeesRule',
    'AdditionalAmountsRule',
    'ReplacementAmountsRule',
    'NationalPosGeographicDataRule',
    'NetworkDataRule',
    'AvsDataRule',
    'AcquirerTraceDataRule',
    'IssuerTraceDataRule',
    'IncrementalAuthDataRule',
    'AdviceReversalCodeRule',
    'AdditionalDataRule'
]
