import asyncio
from sdk.pycatalog import CatalogClient
import httpx

async def simulate_delete(client, worker, product_id):
    try:
        if await client.delete_product_async(product_id):
            print(f"✅ {worker} deleted product {product_id}")
        else:
            print(f"❌ {worker} found nothing to delete: product already gone.")
    except httpx.HTTPStatusError as e:
        print(f"❌ {worker} delete failed with error: {e}")

async def main():
    c = CatalogClient(base_url="http://127.0.0.1:8085")

    product_id = c.create_product("Limited Poster", "12.00", [4], "signed print", "poster.png", True)
    print(f"\n🖼️  Created product: {product_id}")

    # Both deletes race for the same document; exactly one removes it
    print("\n⚡ Simulating concurrent deletes...")
    await asyncio.gather(
        simulate_delete(c, "worker-1", product_id),
        simulate_delete(c, "worker-2", product_id),
    )

    print("\n📦 Product after the race:", c.get_product(product_id))

if __name__ == "__main__":
    asyncio.run(main())
