"""Address book management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from animalshop.addresses.address_book import AddressBook, address_view
from animalshop.domain import shop
from animalshop.exceptions import ResourceNotFoundError


@shop.command(part_of="AddressBook")
class AddAddress:
    """Save a new address for a user; the first one becomes the default."""

    user_id = Identifier(required=True)
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


@shop.command(part_of="AddressBook")
class UpdateAddress:
    """Change some fields of a saved address."""

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    label = String(max_length=50)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    address1 = String(max_length=255)
    address2 = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(min_length=2, max_length=100)
    phone = String(max_length=30)
    is_default = Boolean()


@shop.command(part_of="AddressBook")
class RemoveAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@shop.command(part_of="AddressBook")
class SetDefaultAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


def _existing_book(repo, user_id):
    book = repo.for_user(user_id)
    if book is None:
        raise ResourceNotFoundError("Address")
    return book


@shop.command_handler(part_of=AddressBook)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(AddressBook)
        book = repo.for_user(command.user_id) or AddressBook.open(command.user_id)

        address = book.add_address(
            label=command.label,
            first_name=command.first_name,
            last_name=command.last_name,
            address1=command.address1,
            address2=command.address2,
            city=command.city,
            state=command.state,
            postal_code=command.postal_code,
            country=command.country,
            phone=command.phone,
            is_default=bool(command.is_default),
        )
        repo.add(book)
        return address_view(address, command.user_id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(AddressBook)
        book = _existing_book(repo, command.user_id)

        address = book.update_address(
            command.address_id,
            is_default=command.is_default,
            label=command.label,
            first_name=command.first_name,
            last_name=command.last_name,
            address1=command.address1,
            address2=command.address2,
            city=command.city,
            state=command.state,
            postal_code=command.postal_code,
            country=command.country,
            phone=command.phone,
        )
        repo.add(book)
        return address_view(address, command.user_id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(AddressBook)
        book = _existing_book(repo, command.user_id)
        address = book.remove_address(command.address_id)
        repo.add(book)
        return address_view(address, command.user_id)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        repo = current_domain.repository_for(AddressBook)
        book = _existing_book(repo, command.user_id)
        address = book.set_default_address(command.address_id)
        repo.add(book)
        return address_view(address, command.user_id)
