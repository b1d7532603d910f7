#!/usr/bin/env python3
"""
run_demo.py — One-command demo entry point.

Usage:
  python run_demo.py                          # Service mode (starts the API)
  python run_demo.py --mode local             # In-process, no HTTP
  python run_demo.py --mixed                  # Mixed VAT-rate sample invoice
  python run_demo.py --discount-type amount --discount-value 50

This script:
1. Starts the invoice engine service in the background (service mode)
2. Sends the sample invoice to /totals and /vat-summary
3. Prints formatted totals and the VAT breakdown
4. Shuts down the service
"""

from __future__ import annotations

import argparse
import logging
import os
import signal
import subprocess
import sys
import time

import httpx
from dotenv import load_dotenv

from invoice_engine.formatting import format_money, vat_label
from invoice_engine.models import DiscountSpec
from invoice_engine.samples import MIXED_RATE_ITEMS, SAMPLE_ITEMS, sample_payload
from invoice_engine.totals import calculate_invoice_totals, calculate_vat_summary

load_dotenv()

ENGINE_HOST = "127.0.0.1"
ENGINE_PORT = int(os.getenv("ENGINE_PORT", "8002"))
ENGINE_URL = os.getenv("ENGINE_URL", f"http://{ENGINE_HOST}:{ENGINE_PORT}")

SEP = "--------------------------------------------------"


# ============================================================
# Service lifecycle
# ============================================================


def start_engine_service() -> subprocess.Popen:
    """Launch the FastAPI service as a subprocess."""
    return subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "invoice_engine.main:app",
            "--host",
            ENGINE_HOST,
            "--port",
            str(ENGINE_PORT),
            "--log-level",
            "warning",
        ],
        env=os.environ.copy(),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )


def wait_for_engine(timeout: float = 15.0) -> bool:
    """Block until /health responds or timeout."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            r = httpx.get(f"{ENGINE_URL}/health", timeout=2.0)
            if r.status_code == 200:
                return True
        except (httpx.ConnectError, httpx.ReadError):
            pass
        time.sleep(0.3)
    return False


def stop_process(proc: subprocess.Popen) -> None:
    """Gracefully stop a subprocess."""
    if proc.poll() is None:
        if sys.platform == "win32":
            proc.terminate()
        else:
            proc.send_signal(signal.SIGTERM)
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()


# ============================================================
# Computation
# ============================================================


def compute_via_service(payload: dict) -> tuple[dict, dict]:
    """POST the payload to /totals and /vat-summary."""
    with httpx.Client(base_url=ENGINE_URL, timeout=30.0) as client:
        totals = client.post("/totals", json=payload)
        totals.raise_for_status()
        summary = client.post("/vat-summary", json=payload)
        summary.raise_for_status()
    return totals.json(), summary.json()


def compute_locally(payload: dict) -> tuple[dict, dict]:
    totals = calculate_invoice_totals(payload["items"], payload["discount"])
    summary = calculate_vat_summary(payload["items"], payload["discount"])
    return totals.model_dump(), summary.model_dump()


# ============================================================
# Formatted output
# ============================================================


def print_demo_output(items: list, totals: dict, summary: dict) -> None:
    """Print the totals block the way it appears under an invoice."""
    print()
    print(SEP)
    print("\U0001f9fe INVOICE TOTALS DEMO")
    print(SEP)
    for item in items:
        print(f"{item.description:<36} {item.quantity:>6g} x {format_money(item.unit_price):>12}")
    print()

    print(SEP)
    print("\U0001f4ca TOTALS")
    print(SEP)
    print(f"Subtotal: {format_money(totals['subtotal'])}")
    if totals["discount_amount"]:
        print(f"Discount: -{format_money(totals['discount_amount'])}")
    print(f"Taxable: {format_money(totals['taxable'])}")
    print(f"{vat_label(items)}: {format_money(totals['vat_amount'])}")
    print(f"Total: {format_money(totals['total'])}")
    print()

    print(SEP)
    print("\U0001f4dc VAT SUMMARY")
    print(SEP)
    for group in summary["groups"]:
        print(
            f"{group['display_rate']:>6}  net {format_money(group['net_amount']):>12}"
            f"  vat {format_money(group['vat_amount']):>12}"
        )
    print(
        f"{'':>6}  net {format_money(summary['total_net']):>12}"
        f"  vat {format_money(summary['total_vat']):>12}"
    )
    print()
    print("Demo complete.")
    print(SEP)


# ============================================================
# Main
# ============================================================


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Invoice totals and VAT summary demo")
    parser.add_argument(
        "--mode",
        choices=["service", "local"],
        default="service",
        help="'service' (default) calls the HTTP API, 'local' computes in-process",
    )
    parser.add_argument("--mixed", action="store_true", help="Use the mixed VAT-rate sample")
    parser.add_argument(
        "--discount-type",
        choices=["none", "amount", "percent"],
        default="percent",
    )
    parser.add_argument("--discount-value", type=float, default=10.0)
    parser.add_argument(
        "--no-service",
        action="store_true",
        help="Skip starting the service (if already running)",
    )

    args = parser.parse_args(argv)

    # Suppress noisy logs for clean demo output
    logging.basicConfig(level=logging.WARNING)

    discount = DiscountSpec(type=args.discount_type, value=args.discount_value)
    payload = sample_payload(mixed=args.mixed, discount=discount)
    items = MIXED_RATE_ITEMS if args.mixed else SAMPLE_ITEMS

    if args.mode == "local":
        print_demo_output(items, *compute_locally(payload))
        return

    proc = None
    try:
        if not args.no_service:
            proc = start_engine_service()
            if not wait_for_engine():
                print("ERROR: Invoice engine service failed to start.", file=sys.stderr)
                stop_process(proc)
                sys.exit(1)

        print_demo_output(items, *compute_via_service(payload))

    except KeyboardInterrupt:
        print("\nInterrupted.")
    except httpx.HTTPError as exc:
        print(f"\nERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        if proc:
            stop_process(proc)


if __name__ == "__main__":
    main()
