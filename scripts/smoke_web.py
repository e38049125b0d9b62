#!/usr/bin/env python3
"""
Smoke test for the catobase web API.
Run this while the web server is running (catobase web).
"""

import sys

import requests


def check_endpoint(url, method='GET', data=None, expected=(200,)):
    """Call a single endpoint and report the status."""
    try:
        if method == 'GET':
            response = requests.get(url, timeout=5)
        else:
            response = requests.post(url, json=data, timeout=5)
    except requests.exceptions.ConnectionError:
        print(f"✗ {method} {url} -> Connection refused (server not running?)")
        return False
    except requests.exceptions.Timeout:
        print(f"✗ {method} {url} -> Timeout")
        return False

    ok = response.status_code in expected
    print(f"{'✓' if ok else '✗'} {method} {url} -> {response.status_code}")
    return ok


def main():
    """Check the API endpoints."""
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:5000"

    print("Testing catobase web API")
    print("=" * 50)

    checks = [
        ("GET", "/api/files", None, (200, 404)),
        ("GET", "/api/files?pattern=.*", None, (200, 404)),
        ("GET", "/api/categories", None, (200, 404)),
        ("GET", "/api/files?pattern=(", None, (400, 404)),
        ("POST", "/api/register", {}, (400,)),
    ]

    passed = sum(
        check_endpoint(base_url + path, method, data, expected)
        for method, path, data, expected in checks
    )

    print("\n" + "=" * 50)
    print(f"Results: {passed}/{len(checks)} endpoints behaving")
    if passed < len(checks):
        print("\nMake sure the server is running: catobase web")
        print("A 404 on /api/files means the registry is missing: catobase init")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
