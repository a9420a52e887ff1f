"""The ``animalshop`` domain. Importing it configures logging."""

from protean.domain import Domain

from animalshop.utils.logging import configure_logging

configure_logging()

shop = Domain(name="animalshop")
