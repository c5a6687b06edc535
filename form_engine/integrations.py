"""Glue between schema `apiIntegrations` and an `ApiClient`.

The engine's part is purely path-based: read the trigger fields before the
call, write the target fields once it resolves. Awaiting, retrying and
surfacing errors is up to the caller.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, Optional

from .accessors import get_by_path, set_path
from .mock_api import ApiClient
from .models import ApiIntegration, FormSchema
from .paths import last_segment

logger = logging.getLogger(__name__)


def find_integration(schema: FormSchema, integration_id: str) -> Optional[ApiIntegration]:
    for integration in schema.api_integrations or []:
        if integration.id == integration_id:
            return integration
    return None


def build_trigger_inputs(integration: ApiIntegration, values: Dict[str, Any]) -> Dict[str, Any]:
    """Call inputs keyed by the last segment of each trigger path.

    'address.zip' contributes {'zip': <value of address.zip>}.
    """
    return {last_segment(path): get_by_path(values, path) for path in integration.trigger_fields}


def apply_integration_result(
    integration: ApiIntegration,
    values: Dict[str, Any],
    result: Dict[str, Any],
) -> Dict[str, Any]:
    """Return a copy of `values` with the target fields filled from `result`.

    A target takes the result entry named like its last segment; failing
    that, the result entry at the same position. Targets with neither are
    left untouched.
    """
    out = deepcopy(values)
    positional = list(result.values())
    for index, path in enumerate(integration.target_fields):
        key = last_segment(path)
        if key in result:
            set_path(out, path, deepcopy(result[key]))
        elif index < len(positional):
            set_path(out, path, deepcopy(positional[index]))
    return out


async def run_integration(
    integration: ApiIntegration,
    values: Dict[str, Any],
    client: ApiClient,
) -> Dict[str, Any]:
    """Gather inputs, await the endpoint, and return the filled value tree."""
    inputs = build_trigger_inputs(integration, values)
    logger.info("Calling %s for integration %s", integration.endpoint, integration.id)
    result = await client.call(integration.endpoint, inputs)
    return apply_integration_result(integration, values, result)
