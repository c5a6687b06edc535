import pytest

from form_engine.example_schemas import KYC_SCHEMA, LOAN_SCHEMA, REGISTRATION_SCHEMA, SHOWCASE_SCHEMA
from form_engine.models import FormField, FormSchema


def make_field(**data) -> FormField:
    data.setdefault('label', data.get('id', 'Field'))
    return FormField.model_validate(data)


@pytest.fixture
def registration_schema():
    return FormSchema.model_validate(REGISTRATION_SCHEMA)


@pytest.fixture
def kyc_schema():
    return FormSchema.model_validate(KYC_SCHEMA)


@pytest.fixture
def loan_schema():
    return FormSchema.model_validate(LOAN_SCHEMA)


@pytest.fixture
def showcase_schema():
    return FormSchema.model_validate(SHOWCASE_SCHEMA)
