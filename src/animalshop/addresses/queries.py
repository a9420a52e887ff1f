"""Address lookups scoped to the owning user.

A missing address and an address owned by someone else look the same from
here: both come back as ``None`` (or not-found).
"""

from protean.utils.globals import current_domain

from animalshop.addresses.address_book import Address, AddressBook, address_view
from animalshop.config import DEFAULT_PAGE_SIZE
from animalshop.exceptions import ResourceNotFoundError
from animalshop.utils.pagination import paginate_list


def get_owned_address(address_id, user_id) -> Address | None:
    if not address_id or not user_id:
        return None
    book = current_domain.repository_for(AddressBook).for_user(user_id)
    if book is None:
        return None
    return book.find(address_id)


def get_address(address_id, user_id) -> dict:
    address = get_owned_address(address_id, user_id)
    if address is None:
        raise ResourceNotFoundError("Address")
    return address_view(address, user_id)


def list_addresses(user_id, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict:
    book = current_domain.repository_for(AddressBook).for_user(user_id)
    addresses = sorted(book.addresses, key=lambda a: a.created_at) if book else []
    return paginate_list([address_view(a, user_id) for a in addresses], page, limit)
