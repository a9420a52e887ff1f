"""Runtime settings, read from the environment with development defaults."""

import os

JWT_SECRET = os.getenv("ANIMALSHOP_JWT_SECRET", "dev-secret-change-me-to-32-characters!")
JWT_ALGORITHM = os.getenv("ANIMALSHOP_JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("ANIMALSHOP_JWT_EXPIRES_MINUTES", "15"))

# Upper bound for a single add/update cart request
MAX_ITEM_QUANTITY = int(os.getenv("ANIMALSHOP_MAX_ITEM_QUANTITY", "99"))

# The first order placed gets ORDER_NUMBER_SEED + 1
ORDER_NUMBER_SEED = int(os.getenv("ANIMALSHOP_ORDER_NUMBER_SEED", "1000"))

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# bcrypt work factor for password hashes
BCRYPT_ROUNDS = int(os.getenv("ANIMALSHOP_BCRYPT_ROUNDS", "10"))
