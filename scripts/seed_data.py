#!/usr/bin/env python3
"""
Seed script: creates an admin account and sample products via the API (no direct DB).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --products 50 --email admin@example.com
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api"

NAMES = [
    "Mechanical Keyboard", "Wireless Mouse", "Bluetooth Headphones", "27 inch Monitor",
    "HD Webcam", "Bluetooth Speaker", "Phone Charger", "USB-C Cable", "Laptop Stand",
    "Coffee Maker", "Electric Kettle", "Toaster", "Blender", "Air Fryer", "Smart Watch",
    "Power Bank", "External Drive", "Memory Card", "Backpack", "Graphics Tablet",
    "Ring Light", "Tripod", "Streaming Mic", "Desk Lamp", "Noise Cancelling Earbuds",
]

PRICES = [4.99, 9.99, 19.99, 24.5, 49.0, 79.99, 129.0, 249.99, 499.0, 1299.0]


def random_name() -> str:
    return random.choice(NAMES) + (" " + str(random.randint(1, 999)) if random.random() > 0.5 else "")


def random_image(i: int) -> str:
    return f"https://picsum.photos/seed/product{i}/400/300"


def get_admin_token(client: httpx.Client, name: str, email: str, password: str) -> str | None:
    """Register the admin; fall back to login when the email already exists."""
    r = client.post("/auth/register", json={
        "name": name,
        "email": email,
        "password": password,
        "role": "admin",
    })
    if r.status_code == 201:
        return r.json()["token"]
    r = client.post("/auth/login", json={"email": email, "password": password})
    if r.status_code == 200:
        return r.json()["token"]
    print(f"Could not obtain admin token: {r.status_code} {r.text[:120]}")
    return None


def main():
    ap = argparse.ArgumentParser(description="Seed an admin and products via API")
    ap.add_argument("--products", type=int, default=25, help="Number of products to create")
    ap.add_argument("--name", default="Catalog Admin")
    ap.add_argument("--email", default="admin@example.com")
    ap.add_argument("--password", default="Admin12345")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        token = get_admin_token(client, args.name, args.email, args.password)
        if not token:
            raise SystemExit(1)
        headers = {"Authorization": f"Bearer {token}"}

        print(f"Creating {args.products} products...")
        for i in range(args.products):
            try:
                r = client.post(
                    "/products",
                    headers=headers,
                    json={"name": random_name(), "price": random.choice(PRICES), "image": random_image(i)},
                )
                if r.status_code == 201:
                    created += 1
                else:
                    errors.append(f"Product {i}: {r.status_code} {r.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"Product {i}: {e}")

    print(f"\nDone. Products created: {created}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
