from devkit.application import validate_model
from devkit.domain import ErrorKind

from customers.application import CustomerAddressModel, CustomerModel


def test_valid_payload_becomes_model():
    result = validate_model(CustomerModel, {"firstName": "John", "lastName": "Doe", "email": "john@x.com"})
    assert result.value.first_name == "John"


def test_pydantic_errors_become_validation_failures():
    result = validate_model(
        CustomerModel,
        {"firstName": "John", "dateOfBirth": "not-a-date", "addresses": [{"name": "Home"}]},
    )
    assert result.is_failure()
    assert all(e.kind is ErrorKind.VALIDATION for e in result.errors)
    fields = {e.field for e in result.errors}
    assert "dateOfBirth" in fields
    assert "addresses.0.line1" in fields


def test_model_instances_are_revalidated():
    unchecked = CustomerAddressModel.model_construct(name="", line1="x", city="y", country="z")
    assert validate_model(CustomerAddressModel, unchecked).error.field == "name"
