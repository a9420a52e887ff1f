"""Animal Shop backend: catalogue, address book, carts, checkout and orders."""
