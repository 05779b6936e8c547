#!/usr/bin/env python3
"""Benchmark authorization: latency (p50, p95, p99) and decisions per second.

Usage:
  Header auth (no Keycloak configured on the server):
    export API_URL=http://localhost:8000 BENCH_ACTOR=u-bench
    python scripts/bench_authorize.py --num-requests 1000

  Keycloak auth:
    export KEYCLOAK_URL=... KEYCLOAK_CLIENT_SECRET=... BENCH_USER=... BENCH_PASSWORD=...
    python scripts/bench_authorize.py --num-requests 1000 --batch-size 20
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx

# (module, action, resource) mix covering each evaluation stage
REQUESTS = [
    {"module": "hr", "action": "read"},
    {"module": "documents", "action": "read"},
    {"module": "admin", "action": "delete", "resource": {"type": "permission"}},
    {"module": "projects", "action": "update", "resource": {"type": "project", "id": "p-1"}},
    {"module": "invoicing", "action": "approve"},
]


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def auth_headers() -> dict[str, str]:
    """Bearer token when KEYCLOAK_CLIENT_SECRET is set, else the actor header."""
    client_secret = os.environ.get("KEYCLOAK_CLIENT_SECRET")
    if not client_secret:
        return {"X-Actor-Id": os.environ.get("BENCH_ACTOR", "u-bench")}
    print("Getting token...")
    token = get_token(
        os.environ.get("KEYCLOAK_URL", "http://localhost:8080"),
        os.environ.get("KEYCLOAK_REALM", "portal"),
        os.environ.get("KEYCLOAK_CLIENT_ID", "accessgate-api"),
        client_secret,
        os.environ.get("BENCH_USER", "testuser"),
        os.environ.get("BENCH_PASSWORD", "testpass"),
    )
    return {"Authorization": f"Bearer {token}"}


def percentile(sorted_values: list[float], q: float) -> float:
    index = max(int(len(sorted_values) * q) - 1, 0)
    return sorted_values[index]


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark authorization decisions")
    parser.add_argument("--num-requests", type=int, default=500, help="HTTP requests to send")
    parser.add_argument("--batch-size", type=int, default=1, help="Decisions per request; >1 uses /v1/authorize/batch")
    parser.add_argument("--output", type=str, default="", help="Optional file for the summary")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    headers = auth_headers()

    latencies: list[float] = []
    errors = 0
    decisions = {"granted": 0, "denied": 0}
    print(f"Running {args.num_requests} authorize requests (batch size {args.batch_size})...")
    start_total = time.perf_counter()
    with httpx.Client(base_url=api_url, headers=headers, timeout=30.0) as client:
        for i in range(args.num_requests):
            if args.batch_size > 1:
                batch = [REQUESTS[(i + j) % len(REQUESTS)] for j in range(args.batch_size)]
                t0 = time.perf_counter()
                r = client.post("/v1/authorize/batch", json={"requests": batch})
                results = r.json().get("results", []) if r.status_code == 200 else []
            else:
                t0 = time.perf_counter()
                r = client.post("/v1/authorize", json=REQUESTS[i % len(REQUESTS)])
                results = [r.json()] if r.status_code == 200 else []
            elapsed = time.perf_counter() - t0
            if r.status_code != 200:
                errors += 1
                continue
            latencies.append(elapsed)
            for result in results:
                decisions["granted" if result["granted"] else "denied"] += 1
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful requests.")
        return 1

    latencies.sort()
    summary = (
        f"Authorize benchmark (requests={n}, batch={args.batch_size}, errors={errors})\n"
        f"  Decisions/s: {sum(decisions.values()) / total_elapsed:.2f}\n"
        f"  Granted: {decisions['granted']}, denied: {decisions['denied']}\n"
        f"  Latency: p50={statistics.median(latencies) * 1000:.1f} ms, "
        f"p95={percentile(latencies, 0.95) * 1000:.1f} ms, "
        f"p99={percentile(latencies, 0.99) * 1000:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    if args.output:
        try:
            os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(summary)
            print(f"Wrote {args.output}")
        except OSError as e:
            print(f"Could not write {args.output}: {e}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
