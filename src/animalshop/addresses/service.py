"""Entry points for address book writes, serialized per user."""

import structlog
from protean.utils.globals import current_domain

from animalshop.addresses.management import (
    AddAddress,
    RemoveAddress,
    SetDefaultAddress,
    UpdateAddress,
)
from animalshop.locking import addresses_key, locks

logger = structlog.get_logger(__name__)


def add_address(user_id, **fields) -> dict:
    with locks.hold(addresses_key(user_id)):
        address = current_domain.process(AddAddress(user_id=user_id, **fields), asynchronous=False)
    logger.info("address_added", user_id=user_id, address_id=address["id"], is_default=address["is_default"])
    return address


def update_address(user_id, address_id, **changes) -> dict:
    with locks.hold(addresses_key(user_id)):
        return current_domain.process(
            UpdateAddress(user_id=user_id, address_id=address_id, **changes), asynchronous=False
        )


def remove_address(user_id, address_id) -> dict:
    with locks.hold(addresses_key(user_id)):
        address = current_domain.process(RemoveAddress(user_id=user_id, address_id=address_id), asynchronous=False)
    logger.info("address_removed", user_id=user_id, address_id=address_id)
    return address


def set_default_address(user_id, address_id) -> dict:
    with locks.hold(addresses_key(user_id)):
        address = current_domain.process(
            SetDefaultAddress(user_id=user_id, address_id=address_id), asynchronous=False
        )
    logger.info("default_address_changed", user_id=user_id, address_id=address_id)
    return address
