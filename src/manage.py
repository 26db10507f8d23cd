"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed-catalogue --count 20   # Add sample products, print their ids
"""

import argparse
import random
import sys
import uuid


def setup_database():
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def seed_catalogue(count: int):
    from storefront.domain import storefront
    from storefront.product.product import Product

    storefront.init()
    product_ids = []
    with storefront.domain_context():
        repo = storefront.repository_for(Product)
        for n in range(count):
            suffix = uuid.uuid4().hex[:6]
            product = Product.add(
                name=f"Sample product {n + 1} {suffix}",
                slug=f"sample-product-{n + 1}-{suffix}",
                price=float(random.randrange(50_000, 1_500_000, 10_000)),
                inventory=random.randint(500, 2_000),
                weight=random.randrange(100, 3_000, 50),
            )
            repo.add(product)
            product_ids.append(str(product.id))

    print(",".join(product_ids))


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    seed = subparsers.add_parser("seed-catalogue", help="Add sample products and print their ids")
    seed.add_argument("--count", type=int, default=20)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-catalogue":
        seed_catalogue(args.count)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
