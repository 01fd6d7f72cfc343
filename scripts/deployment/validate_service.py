#!/usr/bin/env python3
"""
Validation script for a running tinylinks service.

Exercises the live HTTP API end to end and deletes every short URL it
creates.
"""

import sys
import time
import argparse
import requests
from typing import Optional
from datetime import datetime


class ServiceValidator:
    """Validates tinylinks service functionality."""

    def __init__(self, base_url: str = "http://localhost:3000"):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.test_results = []
        self.created_codes = []

    def print_header(self, text: str):
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def print_test(self, name: str, passed: bool, details: str = ""):
        status = "PASS" if passed else "FAIL"
        self.test_results.append((name, passed))
        print(f"{status} - {name}")
        if details:
            print(f"       {details}")

    def test_health_check(self) -> bool:
        try:
            response = self.session.get(f"{self.base_url}/api/health", timeout=5)
            data = response.json() if response.status_code == 200 else {}
            is_healthy = data.get("status") == "healthy"
            self.print_test("Health Check", is_healthy, f"Store: {data.get('store', 'N/A')}")
            return is_healthy
        except requests.RequestException as e:
            self.print_test("Health Check", False, f"Error: {e}")
            return False

    def test_create_short_url(self) -> Optional[str]:
        test_url = f"https://example.com/test/{int(time.time())}"
        response = self.session.post(
            f"{self.base_url}/api/shorten",
            json={"url": test_url},
            timeout=5
        )

        code = response.json().get("code") if response.status_code == 200 else None
        if code:
            self.created_codes.append(code)
            self.print_test("Create Short URL", True, f"Code: {code}, URL: {response.json().get('shortUrl')}")
            return code

        self.print_test("Create Short URL", False, f"Status: {response.status_code}")
        return None

    def test_list_contains(self, short_code: str) -> bool:
        response = self.session.get(f"{self.base_url}/api/urls", timeout=5)
        found = response.status_code == 200 and short_code in response.json()
        clicks = response.json().get(short_code, {}).get("clicks") if found else None
        self.print_test("List URLs", found, f"Clicks: {clicks}")
        return found

    def test_redirect(self, short_code: str) -> bool:
        response = self.session.get(
            f"{self.base_url}/{short_code}",
            allow_redirects=False,
            timeout=5
        )
        is_redirect = response.status_code == 302
        location = response.headers.get("Location", "")
        self.print_test(
            "URL Redirect",
            is_redirect,
            f"Redirects to: {location[:50]}" if location else "No Location header"
        )
        return is_redirect

    def test_duplicate_custom_code(self) -> bool:
        custom_code = f"test{int(time.time())}"
        first = self.session.post(
            f"{self.base_url}/api/shorten",
            json={"url": "https://example.com/custom", "customCode": custom_code},
            timeout=5
        )
        if first.status_code == 200:
            self.created_codes.append(custom_code)

        response = self.session.post(
            f"{self.base_url}/api/shorten",
            json={"url": "https://different-url.com", "customCode": custom_code},
            timeout=5
        )
        is_conflict = response.status_code == 409
        self.print_test("Duplicate Code Rejection", is_conflict, f"Status: {response.status_code} (expected 409)")
        return is_conflict

    def test_invalid_url(self) -> bool:
        response = self.session.post(
            f"{self.base_url}/api/shorten",
            json={"url": "ftp://example.com"},
            timeout=5
        )
        is_rejected = response.status_code == 400
        self.print_test("Invalid URL Rejection", is_rejected, f"Status: {response.status_code} (expected 400)")
        return is_rejected

    def test_nonexistent_code(self) -> bool:
        response = self.session.get(f"{self.base_url}/nonexistent999", allow_redirects=False, timeout=5)
        is_not_found = response.status_code == 404
        self.print_test("Non-existent Code", is_not_found, f"Status: {response.status_code} (expected 404)")
        return is_not_found

    def test_web_interface(self) -> bool:
        response = self.session.get(f"{self.base_url}/", timeout=5)
        is_ok = response.status_code == 200 and "text/html" in response.headers.get("content-type", "")
        self.print_test("Web Interface", is_ok, f"Content-Type: {response.headers.get('content-type', 'N/A')}")
        return is_ok

    def cleanup(self):
        """Delete every short URL created by this run."""
        for code in self.created_codes:
            response = self.session.delete(f"{self.base_url}/api/urls/{code}", timeout=5)
            self.print_test(f"Delete {code}", response.status_code == 200, f"Status: {response.status_code}")

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("tinylinks Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.test_health_check():
            print(f"\nHealth check failed. Make sure the service is accessible at {self.base_url}")
            return False

        print()

        try:
            short_code = self.test_create_short_url()
            if short_code:
                self.test_redirect(short_code)
                self.test_list_contains(short_code)

            print()

            self.test_duplicate_custom_code()
            self.test_invalid_url()
            self.test_nonexistent_code()
            self.test_web_interface()
        finally:
            print()
            self.cleanup()

        self.print_summary()

        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"Passed:       {passed}")
        print(f"Failed:       {total - passed}")

        for name, ok in self.test_results:
            if not ok:
                print(f"   - {name}")

        print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Validate tinylinks service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:3000",
        help="Base URL of the service (default: http://localhost:3000)"
    )

    args = parser.parse_args()

    validator = ServiceValidator(args.url)

    try:
        success = validator.run_all_tests()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\nValidation interrupted by user")
        sys.exit(2)
    except requests.RequestException as e:
        print(f"\n\nValidation failed with error: {e}")
        sys.exit(3)


if __name__ == "__main__":
    main()
