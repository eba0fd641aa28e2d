# tests/conftest.py
import copy

import pytest

from backend.core.isocheck.catalog import FieldCatalog
from backend.core.isocheck.message import MessageBuilder, RandomValueGenerator


CATALOG_DATA = {
    "MTI": {
        "name": "messageTypeIndicator",
        "length": 4,
        "type": "n",
        "canonical": ["transaction.messageType"],
        "validation": {"skip": True, "skipReason": "MTI is translated by the canonical service"}
    },
    "2": {
        "name": "primaryAccountNumber",
        "format": "llvar",
        "max_length": 19,
        "type": "n",
        "canonical": ["transaction.card.cardNumber"]
    },
    "3": {
        "name": "processingCode",
        "length": 6,
        "type": "n",
        "active": True,
        "canonical": ["transaction.processingCode"]
    },
    "4": {
        "name": "transactionAmount",
        "length": 12,
        "type": "n",
        "active": True,
        "canonical": ["transaction.amounts.transactionAmount.amount"],
        "validation": {"kind": "amount"}
    },
    "7": {
        "name": "transmissionDateTime",
        "length": 10,
        "type": "n",
        "canonical": ["transaction.transmissionDateTime"],
        "validation": {"kind": "datetime"}
    },
    "11": {
        "name": "systemTraceAuditNumber",
        "length": 6,
        "type": "n",
        "active": True,
        "canonical": ["transaction.systemTraceAuditNumber"]
    },
    "12": {
        "name": "localTransactionTime",
        "length": 6,
        "type": "n",
        "canonical": ["transaction.localTransactionDateTime"],
        "validation": {"kind": "datetime", "format": {"pairedField": {"field": "13", "type": "time"}}}
    },
    "13": {
        "name": "localTransactionDate",
        "length": 4,
        "type": "n",
        "canonical": ["transaction.localTransactionDateTime"],
        "validation": {"kind": "datetime", "format": {"pairedField": {"field": "12", "type": "date"}}}
    },
    "22": {
        "name": "posEntryMode",
        "length": 3,
        "type": "n",
        "canonical": ["transaction.channel.channelType"],
        "validation": {"kind": "pos_entry_mode"}
    },
    "28": {
        "name": "transactionFeeAmount",
        "length": 9,
        "type": "an",
        "canonical": [
            "transaction.fees.transactionFee.amount",
            "transaction.fees.transactionFee.debitCreditIndicatorType"
        ],
        "validation": {"kind": "amount", "rules": {"debitCreditIndicator": {"C": "CREDIT", "D": "DEBIT"}}}
    },
    "32": {
        "name": "acquiringInstitutionId",
        "format": "llvar",
        "max_length": 11,
        "type": "n",
        "canonical": ["transaction.acquirer.acquirerId"]
    },
    "37": {
        "name": "retrievalReferenceNumber",
        "length": 12,
        "type": "an",
        "canonical": ["transaction.retrievalReferenceNumber --> Need to discuss"]
    },
    "43": {
        "name": "cardAcceptorNameLocation",
        "length": 40,
        "type": "ans",
        "canonical": ["transaction.merchant.address"],
        "validation": {"kind": "merchant_location"}
    },
    "49": {
        "name": "transactionCurrencyCode",
        "length": 3,
        "type": "n",
        "active": True,
        "canonical": ["transaction.amounts.transactionAmount.currencyCode"],
        "validation": {"kind": "currency"}
    },
    "90": {
        "name": "originalDataElements",
        "length": 42,
        "type": "n",
        "canonical": ["transaction.originalTransaction"],
        "validation": {
            "kind": "original_data",
            "requiredMti": "0400",
            "rules": {"positions": {"messageType": {"mapping": {"0100": "AUTHORIZATION"}}}}
        }
    },
    "102": {
        "name": "accountIdentification1",
        "format": "llvar",
        "max_length": 28,
        "type": "ans",
        "canonical": ["transaction.account.accountId"]
    }
}


CANONICAL = {
    "transaction": {
        "messageType": "AUTHORIZATION_REQUEST",
        "card": {"cardNumber": "4111111111111111"},
        "processingCode": "000000",
        "amounts": {
            "transactionAmount": {"amount": "1000", "currencyCode": "840"}
        },
        "systemTraceAuditNumber": "123456",
        "channel": {"channelType": "POS"},
        "fees": {
            "transactionFee": {"amount": "500", "debitCreditIndicatorType": "DEBIT"}
        },
        "acquirer": {"acquirerId": "12345678901"},
        "merchant": {
            "address": {
                "addressLine1": "ACME STORE",
                "city": "SPRINGFIELD",
                "state": "IL",
                "country": {"countryCode": "US"}
            }
        },
        "account": {"accountId": None}
    }
}


@pytest.fixture
def catalog_data():
    return copy.deepcopy(CATALOG_DATA)


@pytest.fixture
def catalog(catalog_data) -> FieldCatalog:
    return FieldCatalog.from_dict(catalog_data)


@pytest.fixture
def canonical():
    """Respuesta canónica coherente con los valores de sample_fields."""
    return copy.deepcopy(CANONICAL)


@pytest.fixture
def sample_fields():
    return {
        "MTI": "0100",
        "2": "4111111111111111",
        "3": "000000",
        "4": "000000001000",
        "11": "123456",
        "49": "840"
    }


@pytest.fixture
def generator() -> RandomValueGenerator:
    return RandomValueGenerator(seed=42)


@pytest.fixture
def builder(catalog, generator) -> MessageBuilder:
    return MessageBuilder(catalog, generator=generator)
