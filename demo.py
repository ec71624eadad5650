#!/usr/bin/env python
from sdk.pycatalog import CatalogClient

def main():
    c = CatalogClient(base_url="http://127.0.0.1:8085")

    # -----------------------------
    # Create products
    # -----------------------------
    print("Creating products...")
    tee = c.create_product("Tee", "19.99", [1, 2], "basic", "tee.png", True)
    mug = c.create_product("Mug", "7.50", [3], "ceramic mug", "mug.png", True)
    print("Tee id:", tee)
    print("Mug id:", mug)

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    # -----------------------------
    # Replace the tee
    # -----------------------------
    print("\nUpdating the tee...")
    print(c.update_product(tee, "Tee2", "24.99", [1, 2, 7], "basic, now in blue", "tee-blue.png", True))
    print(c.get_product(tee))

    # -----------------------------
    # Update a product that does not exist
    # -----------------------------
    print("\nUpdating a missing product...")
    print(c.update_product("abc123", "Ghost", "1.00"))

    # -----------------------------
    # Delete
    # -----------------------------
    print("\nDeleting the mug twice...")
    print(c.delete_product(mug))
    print(c.delete_product(mug))

    print("\nFinal listing...")
    print(c.list_products())

if __name__ == "__main__":
    main()
