"""Mock external API used by schema `apiIntegrations`.

Each endpoint takes a flat dict of inputs and returns a flat dict. Latency and
failures are deterministic for a given endpoint + inputs, so demos are
repeatable and tests can pin behaviour (pass `delay_ms=0`).

Errors are raised as `MockApiError` with one of these codes:
- MOCK_API:INVALID_INPUT:<field>  a required input is missing or blank
- MOCK_API:INVALID_ZIP            zip is not a US ZIP or ZIP+4
- MOCK_API:FORCED_ERROR           `force_error=True`
- MOCK_API:RANDOM_FAILURE         the deterministic failure draw hit
- MOCK_API:UNKNOWN_ENDPOINT       no handler for the endpoint name
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Callable, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

Inputs = Dict[str, Any]


class MockApiError(Exception):
    def __init__(self, code: str):
        super().__init__(code)
        self.code = code


class ApiClient(Protocol):
    async def call(self, endpoint: str, inputs: Inputs) -> Dict[str, Any]:
        ...


def stable_stringify(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(',', ':'), ensure_ascii=False)


def hash_to_unit_interval(text: str) -> float:
    """FNV-1a (32-bit) mapped onto [0, 1)."""
    h = 2166136261
    for ch in text:
        h ^= ord(ch)
        h = (h * 16777619) & 0xFFFFFFFF
    return h / 2 ** 32


def default_delay_ms(endpoint: str, inputs: Inputs) -> int:
    r = hash_to_unit_interval(f"{endpoint}:{stable_stringify(inputs)}")
    return 400 + int(r * 401)


def should_fail(endpoint: str, inputs: Inputs, fail_rate: float) -> bool:
    if fail_rate <= 0:
        return False
    if fail_rate >= 1:
        return True
    return hash_to_unit_interval(f"fail:{endpoint}:{stable_stringify(inputs)}") < fail_rate


def _read_string(inputs: Inputs, key: str) -> Optional[str]:
    value = inputs.get(key)
    return value if isinstance(value, str) else None


def _require(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise MockApiError(f"MOCK_API:INVALID_INPUT:{field_name}")
    return value.strip()


_ZIP = re.compile(r"[0-9]{5}(-[0-9]{4})?")

_ADDRESSES = {
    '10001': {'city': 'New York', 'state': 'NY'},
    '94105': {'city': 'San Francisco', 'state': 'CA'},
    '60601': {'city': 'Chicago', 'state': 'IL'},
}

_COMPANIES = {
    'REG-0001': {
        'companyName': 'Zeta Demo Holdings (Pty) Ltd',
        'tradingName': 'Zeta Demo',
        'vatNumber': 'ZA1234567890',
    },
    'REG-0002': {
        'companyName': 'Acme Trading (Pty) Ltd',
        'tradingName': 'Acme',
    },
}

_ID_PATTERNS = {
    'PERSONAL_ID': re.compile(r"[0-9]{10}"),
    'PASSPORT': re.compile(r"[A-Z0-9]{6,9}", re.IGNORECASE),
    'DRIVER_LICENSE': re.compile(r"[A-Z0-9-]{5,15}", re.IGNORECASE),
}


def fetch_address_from_zip(inputs: Inputs) -> Dict[str, Any]:
    zip_code = _require(_read_string(inputs, 'zip'), 'zip')
    if not _ZIP.fullmatch(zip_code):
        raise MockApiError('MOCK_API:INVALID_ZIP')
    return dict(_ADDRESSES.get(zip_code[:5], {'city': 'Unknown City', 'state': 'Unknown State'}))


def fetch_company_details(inputs: Inputs) -> Dict[str, Any]:
    registration_number = _require(_read_string(inputs, 'registrationNumber'), 'registrationNumber')
    found = _COMPANIES.get(registration_number)
    if found is None:
        return {'companyName': f"Company {registration_number}"}
    return dict(found)


def validate_identification(inputs: Inputs) -> Dict[str, Any]:
    id_type = _read_string(inputs, 'idType')
    id_number = _require(_read_string(inputs, 'idNumber'), 'idNumber')
    if id_type not in _ID_PATTERNS:
        raise MockApiError('MOCK_API:INVALID_INPUT:idType')

    if _ID_PATTERNS[id_type].fullmatch(id_number):
        return {'isValid': True}
    return {'isValid': False, 'reason': f"Invalid format for {id_type}"}


ENDPOINTS: Dict[str, Callable[[Inputs], Dict[str, Any]]] = {
    'fetchAddressFromZip': fetch_address_from_zip,
    'fetchCompanyDetails': fetch_company_details,
    'validateIdentification': validate_identification,
}


async def call_mock_api(
    endpoint: str,
    inputs: Inputs,
    delay_ms: Optional[int] = None,
    fail_rate: float = 0.0,
    force_error: bool = False,
) -> Dict[str, Any]:
    """Simulate a remote call: wait, maybe fail, then run the endpoint handler."""
    if force_error:
        raise MockApiError('MOCK_API:FORCED_ERROR')

    handler = ENDPOINTS.get(endpoint)
    if handler is None:
        raise MockApiError('MOCK_API:UNKNOWN_ENDPOINT')

    if should_fail(endpoint, inputs, fail_rate):
        raise MockApiError('MOCK_API:RANDOM_FAILURE')

    delay = max(0, int(delay_ms)) if delay_ms is not None else default_delay_ms(endpoint, inputs)
    if delay > 0:
        await asyncio.sleep(delay / 1000)

    result = handler(inputs)
    logger.debug("Mock API %s(%s) -> %s", endpoint, stable_stringify(inputs), result)
    return result


class MockApiClient:
    """`ApiClient` backed by `call_mock_api` with fixed latency/failure knobs."""

    def __init__(self, delay_ms: Optional[int] = None, fail_rate: float = 0.0):
        self.delay_ms = delay_ms
        self.fail_rate = fail_rate

    async def call(self, endpoint: str, inputs: Inputs) -> Dict[str, Any]:
        return await call_mock_api(endpoint, inputs, delay_ms=self.delay_ms, fail_rate=self.fail_rate)
