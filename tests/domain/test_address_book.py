"""Tests for the AddressBook aggregate and its single-default rule."""

import time

import pytest
from animalshop.addresses.address_book import AddressBook
from animalshop.addresses.events import AddressAdded, AddressRemoved, DefaultAddressChanged
from animalshop.exceptions import ResourceNotFoundError
from protean.exceptions import ValidationError


def _fields(label="Home", **overrides):
    fields = {
        "label": label,
        "first_name": "Jane",
        "last_name": "Doe",
        "address1": "12 Kennel Lane",
        "city": "Springfield",
        "state": "IL",
        "postal_code": "62701",
        "country": "US",
    }
    fields.update(overrides)
    return fields


def _defaults(book):
    return [a for a in book.addresses if a.is_default]


class TestAddingAddresses:
    def test_first_address_becomes_default(self):
        book = AddressBook.open("user-001")
        address = book.add_address(is_default=False, **_fields())
        assert address.is_default is True

    def test_later_address_is_not_default_unless_asked(self):
        book = AddressBook.open("user-001")
        book.add_address(**_fields("Home"))
        work = book.add_address(**_fields("Work"))
        assert work.is_default is False
        assert len(_defaults(book)) == 1

    def test_new_default_clears_previous(self):
        book = AddressBook.open("user-001")
        home = book.add_address(**_fields("Home"))
        work = book.add_address(is_default=True, **_fields("Work"))
        assert work.is_default is True
        assert home.is_default is False
        assert _defaults(book) == [work]

    def test_raises_address_added(self):
        book = AddressBook.open("user-001")
        book.add_address(**_fields())
        assert isinstance(book._events[-1], AddressAdded)
        assert book._events[-1].is_default is True

    def test_required_fields_enforced(self):
        book = AddressBook.open("user-001")
        with pytest.raises(ValidationError):
            book.add_address(**_fields(city=None))


class TestUpdatingAddresses:
    def test_update_changes_fields(self):
        book = AddressBook.open("user-001")
        home = book.add_address(**_fields())
        book.update_address(home.id, city="Shelbyville")
        assert home.city == "Shelbyville"

    def test_promote_via_update(self):
        book = AddressBook.open("user-001")
        home = book.add_address(**_fields("Home"))
        work = book.add_address(**_fields("Work"))
        book._events.clear()

        book.update_address(work.id, is_default=True)

        assert work.is_default and not home.is_default
        assert any(isinstance(e, DefaultAddressChanged) for e in book._events)

    def test_cannot_unset_the_default(self):
        book = AddressBook.open("user-001")
        home = book.add_address(**_fields())
        with pytest.raises(ValidationError):
            book.update_address(home.id, is_default=False)
        assert home.is_default is True

    def test_unknown_address_is_not_found(self):
        book = AddressBook.open("user-001")
        with pytest.raises(ResourceNotFoundError):
            book.update_address("missing", city="Nowhere")


class TestRemovingAddresses:
    def test_removing_default_promotes_oldest_remaining(self):
        book = AddressBook.open("user-001")
        home = book.add_address(**_fields("Home"))
        time.sleep(0.001)
        work = book.add_address(**_fields("Work"))
        time.sleep(0.001)
        book.add_address(**_fields("Cabin"))

        book.remove_address(home.id)

        assert work.is_default is True
        assert len(_defaults(book)) == 1
        event = book._events[-1]
        assert isinstance(event, AddressRemoved)
        assert event.promoted_address_id == str(work.id)

    def test_removing_last_address_leaves_empty_book(self):
        book = AddressBook.open("user-001")
        home = book.add_address(**_fields())
        book.remove_address(home.id)
        assert len(book.addresses) == 0

    def test_removing_non_default_keeps_default(self):
        book = AddressBook.open("user-001")
        home = book.add_address(**_fields("Home"))
        work = book.add_address(**_fields("Work"))
        book.remove_address(work.id)
        assert _defaults(book) == [home]


class TestSetDefault:
    def test_set_default_switches_flag(self):
        book = AddressBook.open("user-001")
        home = book.add_address(**_fields("Home"))
        work = book.add_address(**_fields("Work"))

        book.set_default_address(work.id)

        assert work.is_default and not home.is_default
        event = book._events[-1]
        assert event.previous_default_address_id == str(home.id)

    def test_default_address_lookup(self):
        book = AddressBook.open("user-001")
        assert book.default_address() is None
        home = book.add_address(**_fields())
        assert book.default_address() is home

    def test_shipping_label_snapshot(self):
        book = AddressBook.open("user-001")
        home = book.add_address(**_fields())
        label = home.shipping_label()
        assert label["address1"] == "12 Kennel Lane"
        assert "label" not in label
