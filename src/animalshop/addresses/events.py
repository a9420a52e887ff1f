"""Domain events for the AddressBook aggregate."""

from protean.fields import Boolean, Identifier, String

from animalshop.domain import shop


@shop.event(part_of="AddressBook")
class AddressAdded:
    """A user saved a new address."""

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    label = String(max_length=50)
    is_default = Boolean(required=True)


@shop.event(part_of="AddressBook")
class AddressUpdated:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@shop.event(part_of="AddressBook")
class AddressRemoved:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    promoted_address_id = Identifier()


@shop.event(part_of="AddressBook")
class DefaultAddressChanged:
    """A different address became the user's default."""

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    previous_default_address_id = Identifier()
