"""AddressBook aggregate: every saved address of one user.

The book is the consistency boundary for the single-default rule, so the
default flag is only ever flipped inside one aggregate change.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, String

from animalshop.addresses.events import (
    AddressAdded,
    AddressRemoved,
    AddressUpdated,
    DefaultAddressChanged,
)
from animalshop.domain import shop
from animalshop.exceptions import ResourceNotFoundError

# Fields a caller may change on an existing address
EDITABLE_FIELDS = (
    "label",
    "first_name",
    "last_name",
    "address1",
    "address2",
    "city",
    "state",
    "postal_code",
    "country",
    "phone",
)


@shop.entity(part_of="AddressBook")
class Address:
    label = String(required=True, max_length=50)
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    address1 = String(required=True, max_length=255)
    address2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, min_length=2, max_length=100)
    phone = String(max_length=30)
    is_default = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    def shipping_label(self):
        """Denormalized snapshot shown on carts."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "address1": self.address1,
            "address2": self.address2,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
        }


@shop.aggregate
class AddressBook:
    user_id = Identifier(required=True, unique=True)
    addresses = HasMany(Address)

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be the default"]})

    @classmethod
    def open(cls, user_id):
        return cls(user_id=user_id)

    def find(self, address_id):
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)

    def default_address(self):
        return next((a for a in self.addresses if a.is_default), None)

    def _get(self, address_id):
        address = self.find(address_id)
        if address is None:
            raise ResourceNotFoundError("Address")
        return address

    def _make_default(self, address):
        for other in self.addresses:
            if other.is_default and other is not address:
                other.is_default = False
        address.is_default = True

    def add_address(self, is_default=False, **fields):
        # First address is always default
        if not self.addresses:
            is_default = True

        now = datetime.now(UTC)
        with atomic_change(self):
            address = Address(is_default=False, created_at=now, updated_at=now, **fields)
            self.add_addresses(address)
            if is_default:
                self._make_default(address)

        self.raise_(
            AddressAdded(
                user_id=str(self.user_id),
                address_id=str(address.id),
                label=address.label,
                is_default=address.is_default,
            )
        )
        return address

    def update_address(self, address_id, is_default=None, **changes):
        address = self._get(address_id)

        if is_default is False and address.is_default:
            raise ValidationError(
                {"is_default": ["The default address cannot be unset; make another address the default instead"]}
            )

        changes = {field: value for field, value in changes.items() if field in EDITABLE_FIELDS and value is not None}
        previous_default = self.default_address()

        with atomic_change(self):
            for field, value in changes.items():
                setattr(address, field, value)
            if is_default:
                self._make_default(address)
            address.updated_at = datetime.now(UTC)

        self.raise_(AddressUpdated(user_id=str(self.user_id), address_id=str(address.id)))
        if is_default and previous_default is not address:
            self.raise_(
                DefaultAddressChanged(
                    user_id=str(self.user_id),
                    address_id=str(address.id),
                    previous_default_address_id=str(previous_default.id) if previous_default else None,
                )
            )
        return address

    def remove_address(self, address_id):
        address = self._get(address_id)
        was_default = address.is_default
        promoted = None

        with atomic_change(self):
            self.remove_addresses(address)

            # Removing the default promotes the oldest remaining address
            if was_default and self.addresses:
                promoted = min(self.addresses, key=lambda a: a.created_at)
                promoted.is_default = True
                promoted.updated_at = datetime.now(UTC)

        self.raise_(
            AddressRemoved(
                user_id=str(self.user_id),
                address_id=str(address_id),
                promoted_address_id=str(promoted.id) if promoted else None,
            )
        )
        return address

    def set_default_address(self, address_id):
        address = self._get(address_id)
        previous_default = self.default_address()

        with atomic_change(self):
            self._make_default(address)
            address.updated_at = datetime.now(UTC)

        self.raise_(
            DefaultAddressChanged(
                user_id=str(self.user_id),
                address_id=str(address.id),
                previous_default_address_id=str(previous_default.id) if previous_default else None,
            )
        )
        return address


@shop.repository(part_of=AddressBook)
class AddressBookRepository:
    def for_user(self, user_id) -> AddressBook | None:
        """The user's address book, or ``None`` if they never saved one."""
        books = self._dao.query.filter(user_id=str(user_id)).all().items
        if not books:
            return None
        return self.get(books[0].id)


def address_view(address, user_id):
    return {
        "id": str(address.id),
        "user_id": str(user_id),
        "label": address.label,
        "first_name": address.first_name,
        "last_name": address.last_name,
        "address1": address.address1,
        "address2": address.address2,
        "city": address.city,
        "state": address.state,
        "postal_code": address.postal_code,
        "country": address.country,
        "phone": address.phone,
        "is_default": address.is_default,
        "created_at": address.created_at.isoformat() if address.created_at else None,
        "updated_at": address.updated_at.isoformat() if address.updated_at else None,
    }
