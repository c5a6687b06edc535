"""Ready-made schemas for the workbench's example selector."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

ID_TYPE_OPTIONS = [
    {'label': 'Personal ID', 'value': 'PERSONAL_ID'},
    {'label': 'Passport', 'value': 'PASSPORT'},
    {'label': 'Driver License', 'value': 'DRIVER_LICENSE'},
]

ACCOUNT_TYPE_OPTIONS = [
    {'label': 'Individual', 'value': 'INDIVIDUAL'},
    {'label': 'Business', 'value': 'BUSINESS'},
]

ID_NUMBER_VALIDATION = [
    {
        'when': {'field': 'identity.idType', 'equals': 'PERSONAL_ID'},
        'rules': {'pattern': r'^\d{10}$', 'message': 'Personal ID must be exactly 10 digits'},
    },
    {
        'when': {'field': 'identity.idType', 'equals': 'PASSPORT'},
        'rules': {
            'pattern': r'^[A-Za-z0-9]{6,9}$',
            'message': 'Passport must be 6-9 alphanumeric characters',
        },
    },
    {
        'when': {'field': 'identity.idType', 'equals': 'DRIVER_LICENSE'},
        'rules': {'pattern': r'^\d{5,15}$', 'message': 'Driver License must be 5-15 digits'},
    },
]

ZIP_LOOKUP = {
    'id': 'zipLookup',
    'endpoint': 'fetchAddressFromZip',
    'triggerFields': ['address.zip'],
    'targetFields': ['address.city', 'address.state'],
}

REGISTRATION_SCHEMA: Dict[str, Any] = {
    'id': 'example.registration',
    'title': 'Registration (Individual vs Business)',
    'description': 'Selecting INDIVIDUAL vs BUSINESS determines which sections appear.',
    'groups': [
        {
            'id': 'account',
            'title': 'Account Type',
            'fields': [
                {
                    'id': 'account.type',
                    'type': 'dropdown',
                    'label': 'Account Type',
                    'placeholder': 'Select account type',
                    'options': ACCOUNT_TYPE_OPTIONS,
                },
            ],
        },
        {
            'id': 'individual',
            'title': 'Individual Details',
            'description': 'Shown when account.type = INDIVIDUAL',
            'visibility': {'dependsOn': 'account.type', 'operator': 'equals', 'value': 'INDIVIDUAL'},
            'fields': [
                {'id': 'individual.firstName', 'type': 'text', 'label': 'First Name'},
                {'id': 'individual.lastName', 'type': 'text', 'label': 'Last Name'},
                {'id': 'individual.dateOfBirth', 'type': 'text', 'label': 'Date of Birth'},
            ],
        },
        {
            'id': 'business',
            'title': 'Business Details',
            'description': 'Shown when account.type = BUSINESS',
            'visibility': {'dependsOn': 'account.type', 'operator': 'equals', 'value': 'BUSINESS'},
            'fields': [
                {
                    'id': 'business.companyName',
                    'type': 'text',
                    'label': 'Company Name',
                    'validation': [{'rules': {'required': True, 'message': 'Company name is required'}}],
                },
                {
                    'id': 'business.registrationNumber',
                    'type': 'text',
                    'label': 'Registration Number',
                    'placeholder': 'e.g. REG-0001',
                },
            ],
        },
    ],
}

KYC_SCHEMA: Dict[str, Any] = {
    'id': 'example.kyc',
    'title': 'KYC (Dynamic Validation by ID Type)',
    'description': 'The idNumber format changes with the selected idType.',
    'groups': [
        {
            'id': 'identity',
            'title': 'Identity',
            'fields': [
                {
                    'id': 'identity.idType',
                    'type': 'radio',
                    'label': 'Identification Type',
                    'options': ID_TYPE_OPTIONS,
                },
                {
                    'id': 'identity.idNumber',
                    'type': 'text',
                    'label': 'Identification Number',
                    'placeholder': 'Enter ID number',
                    'validation': ID_NUMBER_VALIDATION,
                },
            ],
        },
    ],
}

LOAN_SCHEMA: Dict[str, Any] = {
    'id': 'example.loan',
    'title': 'Loan Application (Nested Groups + API Auto-Fill)',
    'description': 'ZIP fills city/state through the mock API.',
    'apiIntegrations': [ZIP_LOOKUP],
    'groups': [
        {
            'id': 'applicant',
            'title': 'Applicant',
            'fields': [
                {'id': 'applicant.fullName', 'type': 'text', 'label': 'Full Name'},
                {'id': 'applicant.email', 'type': 'text', 'label': 'Email'},
            ],
            'groups': [
                {
                    'id': 'loanDetails',
                    'title': 'Loan Details',
                    'fields': [
                        {
                            'id': 'loan.amount',
                            'type': 'number',
                            'label': 'Requested Amount ($)',
                            'placeholder': 'Enter amount',
                            'validation': [{
                                'rules': {
                                    'min': 1000,
                                    'max': 100000,
                                    'message': 'Loan amount must be between $1,000 and $100,000',
                                },
                            }],
                        },
                        {
                            'id': 'loan.income',
                            'type': 'number',
                            'label': 'Monthly Income ($)',
                            'placeholder': 'Enter your monthly income',
                            'validation': [{
                                'rules': {'min': 500, 'message': 'Minimum monthly income required is $500'},
                            }],
                        },
                    ],
                },
                {
                    'id': 'address',
                    'title': 'Address',
                    'description': 'ZIP can be used to auto-fill city/state (mocked).',
                    'fields': [
                        {'id': 'address.street', 'type': 'text', 'label': 'Street'},
                        {'id': 'address.zip', 'type': 'text', 'label': 'ZIP', 'placeholder': 'e.g. 10001'},
                        {
                            'id': 'address.city',
                            'type': 'text',
                            'label': 'City',
                            'disabled': True,
                            'autoFillFrom': 'zipLookup',
                        },
                        {
                            'id': 'address.state',
                            'type': 'text',
                            'label': 'State',
                            'disabled': True,
                            'autoFillFrom': 'zipLookup',
                        },
                    ],
                },
            ],
        },
    ],
}

SHOWCASE_SCHEMA: Dict[str, Any] = {
    'id': 'example.showcase',
    'title': 'Showcase (All Features)',
    'description': 'All input types, nested groups, dynamic visibility and mock API integrations.',
    'apiIntegrations': [
        ZIP_LOOKUP,
        {
            'id': 'companyLookup',
            'endpoint': 'fetchCompanyDetails',
            'triggerFields': ['company.registrationNumber'],
            'targetFields': ['company.companyName', 'company.tradingName', 'company.vatNumber'],
        },
    ],
    'groups': [
        {
            'id': 'controls',
            'title': 'Controls',
            'description': 'Change these values to trigger visibility and API actions.',
            'fields': [
                {
                    'id': 'account.type',
                    'type': 'dropdown',
                    'label': 'Account Type',
                    'placeholder': 'Select account type',
                    'options': ACCOUNT_TYPE_OPTIONS,
                    'validation': [{'rules': {'required': True, 'message': 'Account type is required'}}],
                },
                {'id': 'controls.enableAdvanced', 'type': 'checkbox', 'label': 'Enable advanced section'},
            ],
        },
        {
            'id': 'advanced',
            'title': 'Advanced Section (Dynamic Visibility)',
            'description': 'Visible when controls.enableAdvanced is checked.',
            'visibility': {'dependsOn': 'controls.enableAdvanced', 'operator': 'equals', 'value': True},
            'groups': [
                {
                    'id': 'advanced.nestedA',
                    'title': 'Nested Group A',
                    'fields': [{'id': 'advanced.note', 'type': 'textarea', 'label': 'Notes'}],
                },
                {
                    'id': 'advanced.nestedB',
                    'title': 'Nested Group B',
                    'fields': [{'id': 'advanced.flag', 'type': 'checkbox', 'label': 'Extra Flag'}],
                },
            ],
        },
        {
            'id': 'allTypes',
            'title': 'All Input Types',
            'fields': [
                {
                    'id': 'profile.fullName',
                    'type': 'text',
                    'label': 'Full Name',
                    'placeholder': 'Jane Doe',
                    'validation': [{'rules': {'required': True, 'message': 'Full name is required'}}],
                },
                {
                    'id': 'profile.bio',
                    'type': 'textarea',
                    'label': 'Bio',
                    'validation': [{'rules': {'maxLength': 160, 'message': 'Bio must be 160 chars or less'}}],
                },
                {
                    'id': 'profile.age',
                    'type': 'number',
                    'label': 'Age',
                    'placeholder': 'Numbers only',
                    'validation': [{'rules': {'min': 18, 'max': 120, 'message': 'Age must be between 18 and 120'}}],
                },
                {
                    'id': 'prefs.contactMethod',
                    'type': 'radio',
                    'label': 'Contact Method',
                    'options': [{'label': 'Email', 'value': 'EMAIL'}, {'label': 'SMS', 'value': 'SMS'}],
                    'validation': [{'rules': {'required': True, 'message': 'Choose a contact method'}}],
                },
                {
                    'id': 'prefs.country',
                    'type': 'dropdown',
                    'label': 'Country',
                    'options': [
                        {'label': 'South Africa', 'value': 'ZA'},
                        {'label': 'United States', 'value': 'US'},
                    ],
                },
                {'id': 'prefs.subscribe', 'type': 'checkbox', 'label': 'Subscribe to product updates'},
            ],
        },
        {
            'id': 'business',
            'title': 'Business Details',
            'description': 'Visible when account.type = BUSINESS. Try REG-0001 or REG-0002, then Fetch Data.',
            'visibility': {'dependsOn': 'account.type', 'operator': 'equals', 'value': 'BUSINESS'},
            'fields': [
                {
                    'id': 'company.registrationNumber',
                    'type': 'text',
                    'label': 'Registration Number',
                    'defaultValue': 'REG-0001',
                    'validation': [{'rules': {'required': True, 'message': 'Registration number is required'}}],
                },
                {
                    'id': 'company.companyName',
                    'type': 'text',
                    'label': 'Company Name (API filled)',
                    'disabled': True,
                    'autoFillFrom': 'companyLookup',
                },
                {
                    'id': 'company.tradingName',
                    'type': 'text',
                    'label': 'Trading Name (API filled)',
                    'disabled': True,
                    'autoFillFrom': 'companyLookup',
                },
                {
                    'id': 'company.vatNumber',
                    'type': 'text',
                    'label': 'VAT Number (API filled)',
                    'disabled': True,
                    'autoFillFrom': 'companyLookup',
                },
            ],
        },
        {
            'id': 'identity',
            'title': 'Identity (Dynamic Validation)',
            'fields': [
                {
                    'id': 'identity.idType',
                    'type': 'radio',
                    'label': 'Identification Type',
                    'defaultValue': 'PERSONAL_ID',
                    'options': ID_TYPE_OPTIONS,
                },
                {
                    'id': 'identity.idNumber',
                    'type': 'text',
                    'label': 'Identification Number',
                    'placeholder': 'Format depends on ID type',
                    'defaultValue': '1234567890',
                    'validation': ID_NUMBER_VALIDATION,
                },
            ],
        },
        {
            'id': 'address',
            'title': 'Address (Nested + API)',
            'description': 'Enter a ZIP like 10001, 94105 or 60601, then Fetch Data.',
            'groups': [
                {
                    'id': 'address.nested',
                    'title': 'Address (Nested Group)',
                    'fields': [
                        {'id': 'address.street', 'type': 'text', 'label': 'Street'},
                        {'id': 'address.zip', 'type': 'text', 'label': 'ZIP', 'defaultValue': '10001'},
                        {
                            'id': 'address.city',
                            'type': 'text',
                            'label': 'City (API filled)',
                            'disabled': True,
                            'autoFillFrom': 'zipLookup',
                        },
                        {
                            'id': 'address.state',
                            'type': 'text',
                            'label': 'State (API filled)',
                            'disabled': True,
                            'autoFillFrom': 'zipLookup',
                        },
                    ],
                },
            ],
        },
    ],
}


@dataclass(frozen=True)
class ExampleSchema:
    id: str
    title: str
    schema: Dict[str, Any]

    @property
    def json_text(self) -> str:
        return json.dumps(self.schema, indent=2, ensure_ascii=False)


EXAMPLE_SCHEMAS: List[ExampleSchema] = [
    ExampleSchema('registration', 'Registration (Visibility)', REGISTRATION_SCHEMA),
    ExampleSchema('kyc', 'KYC (Dynamic Validation)', KYC_SCHEMA),
    ExampleSchema('loan', 'Loan (API Auto-Fill + Nested)', LOAN_SCHEMA),
    ExampleSchema('showcase', 'Showcase (All Features)', SHOWCASE_SCHEMA),
]

DEFAULT_EXAMPLE_ID = 'showcase'


def get_example(example_id: str) -> Optional[ExampleSchema]:
    for example in EXAMPLE_SCHEMAS:
        if example.id == example_id:
            return example
    return None
