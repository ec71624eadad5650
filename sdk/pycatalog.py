# sdk/pycatalog.py
import requests
import httpx
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from rich import print


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:8085", api_key: Optional[str] = None,
                 timeout: int = 10, session=None, async_transport=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.async_transport = async_transport
        # the function host reads its key from the `code` query parameter
        self.params = {"code": api_key} if api_key else {}

    @staticmethod
    def _payload(name: str, price: Union[Decimal, float, str], categories: Optional[List[int]] = None,
                 description: str = "", image: str = "", status: bool = True) -> Dict[str, Any]:
        return {
            "name": name,
            # string form keeps the exact decimal
            "price": str(price),
            "categories": list(categories or []),
            "description": description,
            "image": image,
            "status": status,
        }

    @staticmethod
    def _found(r) -> bool:
        # 404 means the product is absent
        if r.status_code == 404:
            return False
        r.raise_for_status()
        return True

    def list_products(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/GetProducts", params=self.params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, price, categories: Optional[List[int]] = None,
                       description: str = "", image: str = "", status: bool = True) -> Optional[str]:
        """
        Creates a product and returns the id the service generated for it.
        """
        r = self.session.post(f"{self.base_url}/CreateProduct", params=self.params,
                              json=self._payload(name, price, categories, description, image, status),
                              timeout=self.timeout)
        r.raise_for_status()
        return r.headers.get("X-Product-Id")

    def update_product(self, product_id: str, name: str, price, categories: Optional[List[int]] = None,
                       description: str = "", image: str = "", status: bool = True) -> bool:
        r = self.session.put(f"{self.base_url}/UpdateProduct/{product_id}", params=self.params,
                             json=self._payload(name, price, categories, description, image, status),
                             timeout=self.timeout)
        return self._found(r)

    def delete_product(self, product_id: str) -> bool:
        r = self.session.delete(f"{self.base_url}/DeleteProduct/{product_id}", params=self.params,
                                timeout=self.timeout)
        return self._found(r)

    # Async delete (used by the concurrency demo)
    async def delete_product_async(self, product_id: str) -> bool:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.async_transport) as client:
            r = await client.delete(f"{self.base_url}/DeleteProduct/{product_id}", params=self.params)
            return self._found(r)

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        # there is no single-product route; look it up in the full listing
        for p in self.list_products():
            if p.get("id") == product_id:
                return p
        return None


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="PyCatalog CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:8085", help="Service base URL")
    parser.add_argument("--api-key", help="Function key sent as ?code=")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    def _product_args(p):
        p.add_argument("--name", required=True, help="Product name")
        p.add_argument("--price", required=True, help="Price, e.g. 19.99")
        p.add_argument("--categories", type=int, nargs="*", default=[], help="Category codes")
        p.add_argument("--description", default="", help="Free text description")
        p.add_argument("--image", default="", help="Image path or URL")
        p.add_argument("--inactive", action="store_true", help="Store the product as inactive")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    _product_args(cp)

    up = subparsers.add_parser("update-product", help="Replace an existing product")
    up.add_argument("--product-id", required=True, help="ID of the product")
    _product_args(up)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True, help="ID of the product")

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list-products":
        print(c.list_products())

    elif args.command == "create-product":
        pid = c.create_product(args.name, args.price, args.categories, args.description, args.image,
                               not args.inactive)
        print(f"[green]Product created:[/green] {pid}")

    elif args.command == "update-product":
        ok = c.update_product(args.product_id, args.name, args.price, args.categories, args.description,
                              args.image, not args.inactive)
        print("[green]Product updated.[/green]" if ok else "[red]Product not found.[/red]")

    elif args.command == "delete-product":
        ok = c.delete_product(args.product_id)
        print("[green]Product deleted.[/green]" if ok else "[red]Product not found.[/red]")
