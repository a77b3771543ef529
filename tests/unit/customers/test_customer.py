from datetime import date, timedelta

import pytest

from devkit.domain import ErrorKind, clock

from customers.domain import (
    Customer,
    CustomerCreatedDomainEvent,
    CustomerDeletedDomainEvent,
    CustomerStatus,
    CustomerUpdatedDomainEvent,
)


def test_create_registers_created_event(number):
    customer = Customer.create(" John ", "Doe", "JOHN@X.COM", number).value
    assert customer.first_name == "John"
    assert customer.email.value == "john@x.com"
    assert customer.status is CustomerStatus.LEAD

    (event,) = customer.domain_events
    assert isinstance(event, CustomerCreatedDomainEvent)
    assert event.customer_id == customer.id
    assert event.number == "CUS-2024-100000"


def test_create_collects_no_events_on_failure(number):
    result = Customer.create("", "Doe", "john@x.com", number)
    assert result.error.field == "FirstName"
    assert Customer.create("John", "Doe", "bad", number).error.field == "Email"
    assert Customer.create("John", "Doe", "john@x.com", None).error.field == "Number"


def test_change_name_with_empty_first_name_fails(customer):
    result = customer.change_name("", "Doe")
    assert result.is_failure()
    assert customer.first_name == "John"
    assert not customer.has_domain_events


def test_change_name_registers_updated_event(customer):
    customer.change_name("Jane", "Roe")
    assert customer.full_name == "Jane Roe"
    (event,) = customer.domain_events
    assert isinstance(event, CustomerUpdatedDomainEvent)
    assert (event.first_name, event.last_name) == ("Jane", "Roe")


def test_unchanged_values_register_no_updated_event(customer):
    assert customer.change_name(" John ", "Doe").is_success()
    assert not customer.has_domain_events

    customer.change_birth_date(date(1990, 4, 1))
    customer.collect_domain_events()

    assert customer.change_birth_date(date(1990, 4, 1)).is_success()
    assert not customer.has_domain_events


def test_change_birth_date_in_future_fails(customer):
    result = customer.change_birth_date(clock.today() + timedelta(days=1))
    assert result.is_failure()
    assert "future" in result.error.message
    assert customer.date_of_birth is None


def test_change_birth_date(customer):
    customer.change_birth_date(date(1990, 4, 1))
    assert customer.date_of_birth == date(1990, 4, 1)


def test_change_email_to_same_value_is_a_no_op(customer):
    assert customer.change_email(" John@X.com ").is_success()
    assert not customer.has_domain_events
    assert customer.change_email("nope").error.field == "Email"
    assert customer.email.value == "john@x.com"


def test_change_status_none_is_a_no_op(customer):
    assert customer.change_status(None).value is customer
    assert customer.status is CustomerStatus.LEAD
    customer.change_status(CustomerStatus.ACTIVE)
    assert customer.status is CustomerStatus.ACTIVE
    assert customer.change_status("ACTIVE").error.kind is ErrorKind.VALIDATION


def test_addresses_lifecycle(customer):
    customer.add_address("Home", "Main Street 1", "Berlin", "DE")
    customer.add_address("Work", "Office Park 5", "Munich", "DE", is_primary=True)
    home, work = customer.addresses
    assert customer.primary_address is work

    customer.set_primary_address(str(home.id))
    assert home.is_primary and not work.is_primary

    customer.change_address(work.id, "Work", "Office Park 7", "Munich", "DE")
    assert work.line1 == "Office Park 7"

    customer.remove_address(home.id)
    assert customer.addresses == [work]
    assert len(customer.domain_events) == 5


def test_add_invalid_address_fails_atomically(customer):
    result = customer.add_address("", "Main Street 1", "Berlin", "DE", is_primary=True)
    assert result.error.field == "Name"
    assert customer.addresses == []
    assert not customer.has_domain_events


def test_unknown_address_is_not_found(customer):
    assert customer.remove_address("not-a-uuid").error.kind is ErrorKind.NOT_FOUND
    assert customer.set_primary_address("00000000-0000-0000-0000-000000000000").error.kind is ErrorKind.NOT_FOUND


def test_change_address_without_differences_registers_nothing(customer):
    customer.add_address("Home", "Main Street 1", "Berlin", "DE")
    customer.collect_domain_events()
    address = customer.addresses[0]
    assert customer.change_address(address.id, "Home", "Main Street 1", "Berlin", "DE").is_success()
    assert not customer.has_domain_events


def test_delete_registers_deleted_event(customer):
    customer.delete()
    (event,) = customer.domain_events
    assert isinstance(event, CustomerDeletedDomainEvent)
    assert event.number == str(customer.number)


def test_event_payload_is_a_snapshot(customer):
    customer.change_name("Jane", "Doe")
    customer.change_name("Janet", "Doe")
    first, second = customer.domain_events
    assert first.first_name == "Jane"
    assert second.first_name == "Janet"


@pytest.mark.parametrize("status", list(CustomerStatus))
def test_updated_event_carries_status_name(customer, status):
    customer.change_status(status)
    if status is CustomerStatus.LEAD:
        assert not customer.has_domain_events
    else:
        assert customer.domain_events.snapshot()[-1].status == status.name
