"""Sample data for a fresh storefront.

Creates the default super-admin (``admin`` / ``admin123``), a small category
tree, a handful of products and the ``SAVE20`` discount code. Existing data
is wiped first.
"""

import json

import structlog
from protean.domain import Domain
from protean.utils.globals import current_domain

from storefront.catalogue.category.management import CreateCategory
from storefront.catalogue.product.management import CreateProduct
from storefront.discounts.management import CreateDiscountCode
from storefront.identity.principal import Role
from storefront.identity.user.passwords import hash_password
from storefront.identity.user.user import User
from storefront.utils.db import reset_data

logger = structlog.get_logger(__name__)

DEFAULT_ADMIN = {"username": "admin", "email": "admin@example.com", "password": "admin123"}

# top-level category -> (description, image, subcategory, products)
CATALOG = {
    "Electronics": (
        "Electronic devices and accessories",
        "https://images.unsplash.com/photo-1498049794561-7780e7231661?w=400",
        "Audio & Phones",
        [
            ("Wireless Headphones", "High-quality wireless headphones with noise cancellation", 199.99, 50, True),
            ("Smartphone", "Latest model smartphone with advanced features", 699.99, 25, False),
            ("Laptop", "Powerful laptop for work and gaming", 1299.99, 15, True),
        ],
    ),
    "Clothing": (
        "Fashion and apparel",
        "https://images.unsplash.com/photo-1441986300917-64674bd600d8?w=400",
        "Everyday Wear",
        [
            ("Classic T-Shirt", "Comfortable cotton t-shirt available in multiple colors", 24.99, 100, False),
            ("Denim Jeans", "Premium quality denim jeans with perfect fit", 79.99, 60, False),
            ("Winter Jacket", "Warm and stylish winter jacket", 149.99, 30, True),
        ],
    ),
    "Books": (
        "Books and educational materials",
        "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=400",
        "Bestsellers",
        [
            ("Programming Guide", "Complete guide to modern programming languages", 39.99, 40, False),
            ("Fiction Novel", "Bestselling fiction novel", 19.99, 80, False),
        ],
    ),
    "Home & Garden": (
        "Home improvement and gardening supplies",
        "https://images.unsplash.com/photo-1586023492125-27b2c045efd7?w=400",
        "Garden",
        [
            ("Indoor Plant Pot", "Beautiful ceramic pot for indoor plants", 29.99, 45, False),
            ("Garden Tools Set", "Complete set of essential garden tools", 89.99, 20, False),
        ],
    ),
}


def seed(domain: Domain) -> dict:
    """Replace all data with the sample catalog. Returns counts of what was created."""
    with domain.domain_context():
        reset_data(domain)

        admin = User.register(
            username=DEFAULT_ADMIN["username"],
            email=DEFAULT_ADMIN["email"],
            password_hash=hash_password(DEFAULT_ADMIN["password"]),
            role=Role.SUPER_ADMIN,
        )
        current_domain.repository_for(User).add(admin)

        categories = products = 0
        for name, (description, image, subcategory_name, items) in CATALOG.items():
            parent_id = current_domain.process(
                CreateCategory(name=name, description=description, image=image), asynchronous=False
            )
            subcategory_id = current_domain.process(
                CreateCategory(name=subcategory_name, parent_id=parent_id), asynchronous=False
            )
            categories += 2

            for product_name, product_description, price, stock, featured in items:
                current_domain.process(
                    CreateProduct(
                        name=product_name,
                        description=product_description,
                        price=price,
                        subcategory_id=subcategory_id,
                        images=json.dumps([image]),
                        stock=stock,
                        featured=featured,
                        product_type="featured" if featured else "normal",
                    ),
                    asynchronous=False,
                )
                products += 1

        current_domain.process(CreateDiscountCode(code="SAVE20", percentage=20.0), asynchronous=False)

    counts = {"users": 1, "categories": categories, "products": products, "discount_codes": 1}
    logger.info("Sample data seeded", **counts)
    return counts
