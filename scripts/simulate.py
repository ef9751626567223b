"""
Concurrency Simulation Script

Fires registrations, logins and orders at a running server in parallel.
Half of the registrations reuse a username, so exactly one of each pair
should win and the other should get the generic 500.

Run from project root: python scripts/simulate.py --users 20 --orders 50

Author: Khalil_Bannouri
Version: 1.0.0
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

API_BASE_URL = "http://localhost:3100"

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis"]
DISHES = ["Butter Chicken", "Paneer Tikka", "Chicken Biryani", "Dal Makhani", "Garlic Naan"]


def generate_random_customer() -> dict[str, str]:
    """Generate random customer info."""
    first = random.choice(FIRST_NAMES)
    last = random.choice(LAST_NAMES)
    return {
        "name": f"{first} {last}",
        "email": f"{first.lower()}.{last.lower()}@example.com",
        "phone": f"555-{random.randint(100, 999)}-{random.randint(1000, 9999)}",
    }


async def timed_post(
    client: httpx.AsyncClient,
    path: str,
    payload: dict[str, Any],
    label: str,
) -> dict[str, Any]:
    """POST a payload and record status, message and latency."""
    start_time = time.time()
    try:
        response = await client.post(f"{API_BASE_URL}{path}", json=payload, timeout=30.0)
        elapsed = round(time.time() - start_time, 3)
        body = response.json()
        return {
            "label": label,
            "status": response.status_code,
            "success": body.get("success", False),
            "message": body.get("message", ""),
            "time": elapsed,
        }
    except (httpx.HTTPError, ValueError) as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "label": label,
            "status": None,
            "success": False,
            "message": str(e)[:100],
            "time": elapsed,
        }


def print_summary(title: str, results: list[dict[str, Any]]) -> None:
    """Print counts per status code plus latency figures."""
    print(f"\n📊 {title}")
    by_status: dict[Any, int] = {}
    for r in results:
        by_status[r["status"]] = by_status.get(r["status"], 0) + 1
    for status, count in sorted(by_status.items(), key=lambda item: str(item[0])):
        print(f"   {status}: {count}")

    if results:
        times = [r["time"] for r in results]
        print(f"   Average: {round(sum(times) / len(times), 3)}s  Slowest: {max(times)}s")


async def run_simulation(num_users: int, num_orders: int) -> None:
    """Register, log in and order concurrently."""
    print("=" * 70)
    print("🔥 CONCURRENCY SIMULATION")
    print("=" * 70)
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")

    run_id = random.randint(1000, 9999)
    usernames = [f"sim{run_id}_{i // 2}" for i in range(num_users)]

    async with httpx.AsyncClient() as client:
        health = await client.get(f"{API_BASE_URL}/health")
        print(f"🩺 Health: {health.json().get('status')}")

        registrations = await asyncio.gather(*[
            timed_post(
                client,
                "/register",
                {"username": name, "email": f"{name}@example.com", "password": "pass1234"},
                name,
            )
            for name in usernames
        ])
        print_summary("Registrations (pairs share a username)", registrations)

        logins = await asyncio.gather(*[
            timed_post(
                client,
                "/login",
                {"username": name, "password": random.choice(["pass1234", "wrong"])},
                name,
            )
            for name in sorted(set(usernames))
        ])
        print_summary("Logins (random wrong passwords)", logins)

        orders = []
        for i in range(num_orders):
            customer = generate_random_customer()
            customer.update({"dish": random.choice(DISHES), "quantity": random.randint(1, 4)})
            orders.append(timed_post(client, "/submit-order", customer, f"order {i + 1}"))
        print_summary("Orders", await asyncio.gather(*orders))

    print("\n" + "=" * 70)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrency Simulation Script")
    parser.add_argument("--users", type=int, default=20, help="Number of registrations")
    parser.add_argument("--orders", type=int, default=50, help="Number of orders")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    API_BASE_URL = args.url
    asyncio.run(run_simulation(args.users, args.orders))
