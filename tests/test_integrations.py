from copy import deepcopy

import pytest

from form_engine.integrations import (
    apply_integration_result,
    build_trigger_inputs,
    find_integration,
    run_integration,
)
from form_engine.mock_api import MockApiClient, MockApiError
from form_engine.models import ApiIntegration


class RecordingClient:
    def __init__(self, result):
        self.result = result
        self.calls = []

    async def call(self, endpoint, inputs):
        self.calls.append((endpoint, inputs))
        return self.result


def integration(**data):
    return ApiIntegration.model_validate({'id': 'lookup', 'endpoint': 'fetchAddressFromZip', **data})


def test_find_integration(showcase_schema):
    assert find_integration(showcase_schema, 'companyLookup').endpoint == 'fetchCompanyDetails'
    assert find_integration(showcase_schema, 'missing') is None


def test_trigger_inputs_keyed_by_last_segment():
    zip_lookup = integration(triggerFields=['address.zip', 'meta.country'])
    inputs = build_trigger_inputs(zip_lookup, {'address': {'zip': '10001'}})
    assert inputs == {'zip': '10001', 'country': None}


def test_targets_filled_by_matching_key():
    zip_lookup = integration(targetFields=['address.city', 'address.state'])
    values = {'address': {'zip': '10001', 'city': ''}}
    out = apply_integration_result(zip_lookup, values, {'state': 'NY', 'city': 'New York'})
    assert out == {'address': {'zip': '10001', 'city': 'New York', 'state': 'NY'}}


def test_targets_fall_back_to_position():
    lookup = integration(targetFields=['a.first', 'a.second', 'a.third'])
    out = apply_integration_result(lookup, {}, {'x': 1, 'y': 2})
    assert out == {'a': {'first': 1, 'second': 2}}


def test_apply_does_not_mutate_values():
    lookup = integration(targetFields=['address.city'])
    values = {'address': {'city': ''}}
    snapshot = deepcopy(values)
    apply_integration_result(lookup, values, {'city': 'Chicago'})
    assert values == snapshot


@pytest.mark.asyncio
async def test_run_integration_with_fake_client():
    client = RecordingClient({'city': 'Springfield', 'state': 'IL'})
    lookup = integration(triggerFields=['address.zip'], targetFields=['address.city', 'address.state'])
    out = await run_integration(lookup, {'address': {'zip': '62701'}}, client)
    assert client.calls == [('fetchAddressFromZip', {'zip': '62701'})]
    assert out['address'] == {'zip': '62701', 'city': 'Springfield', 'state': 'IL'}


@pytest.mark.asyncio
async def test_run_integration_against_mock_api(showcase_schema):
    company = find_integration(showcase_schema, 'companyLookup')
    values = {'company': {'registrationNumber': 'REG-0002'}}
    out = await run_integration(company, values, MockApiClient(delay_ms=0))
    assert out['company']['companyName'] == 'Acme Trading (Pty) Ltd'
    assert out['company']['tradingName'] == 'Acme'
    assert 'vatNumber' not in out['company']


@pytest.mark.asyncio
async def test_run_integration_propagates_api_errors(loan_schema):
    zip_lookup = find_integration(loan_schema, 'zipLookup')
    with pytest.raises(MockApiError):
        await run_integration(zip_lookup, {'address': {'zip': 'nope'}}, MockApiClient(delay_ms=0))
