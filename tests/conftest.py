"""Pin test settings before product_api reads its configuration."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-for-the-product-api-suite"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_EXPIRE_MINUTES"] = "15"
os.environ["JWT_REFRESH_EXPIRE_MINUTES"] = "10080"
os.environ["PAGE_SIZE_MAX"] = "100"
