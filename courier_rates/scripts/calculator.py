"""
Courier Rate Calculator
=======================

Interactive CLI tool to compare courier rates for a single shipment.

Usage:
    python -m courier_rates.scripts.calculator
    python -m courier_rates.scripts.calculator --plan BASIC --verbose
    python -m courier_rates.scripts.calculator --data-dir path/to/reference
"""

import argparse
import logging
import sys
from pathlib import Path

from courier_rates.calculate_quotes import calculate_quotes
from courier_rates.data import load_couriers, load_pincodes, load_plan
from courier_rates.errors import RateEngineError
from courier_rates.models import PaymentType, RateQuote, RateRequest
from courier_rates.pipeline.zones import PincodeDirectory
from courier_rates.results import estimated_delivery, expected_pickup, summarize_quotes
from courier_rates.version import VERSION


def get_user_input() -> RateRequest:
    """Prompt user for shipment details."""
    print("\n=== Courier Rate Calculator ===")
    print(f"Version: {VERSION}\n")

    # Route
    pickup = input("Pickup pincode: ").strip()
    delivery = input("Delivery pincode: ").strip()

    # Package
    weight = float(input("Weight (kg): "))
    length = float(input("Length (cm): "))
    width = float(input("Width (cm): "))
    height = float(input("Height (cm): "))

    # Payment
    cod = input("Cash on delivery? [y/N]: ").strip().lower() == "y"
    collectable_amount = None
    if cod:
        collectable_amount = float(input("Collectable amount (INR): "))

    reverse = input("Reverse (return) shipment? [y/N]: ").strip().lower() == "y"

    return RateRequest(
        pickup_pincode=pickup,
        delivery_pincode=delivery,
        weight=weight,
        length=length,
        width=width,
        height=height,
        payment_type=PaymentType.COD if cod else PaymentType.PREPAID,
        collectable_amount=collectable_amount,
        is_reverse_order=reverse,
    )


def print_results(
    quotes: list[RateQuote],
    request: RateRequest
) -> None:
    """Print the ranked quote table."""
    print("\n" + "=" * 78)
    print("RATE QUOTES")
    print("=" * 78)

    print(f"\nShipment: {request.length}x{request.width}x{request.height} cm, {request.weight} kg")
    print(f"Route: {request.pickup_pincode} -> {request.delivery_pincode}")
    print(f"Payment: {'COD' if request.payment_type == PaymentType.COD else 'Prepaid'}"
          f"{' (reverse)' if request.is_reverse_order else ''}")

    if not quotes:
        print("\nNo courier available for this shipment.\n")
        return

    first = quotes[0]
    print(f"Zone: {first.zone.label} ({first.zone.value})")
    print(f"Billed weight: {first.billed_weight:.2f} kg", end="")
    if first.volumetric_weight > request.weight:
        print(" (volumetric)")
    else:
        print(" (actual)")

    print(f"\n{'#':>2}  {'Courier':<24} {'Type':<8} {'Forward':>9} {'RTO':>8} {'COD':>8} {'Total':>9}  {'Pickup':<8}  Delivery")
    print(f"{'-' * 2}  {'-' * 24} {'-' * 8} {'-' * 9} {'-' * 8} {'-' * 8} {'-' * 9}  {'-' * 8}  {'-' * 20}")
    for i, quote in enumerate(quotes, start=1):
        delivery = (
            estimated_delivery(quote.estimated_delivery_days)
            if quote.estimated_delivery_days is not None else "-"
        )
        print(
            f"{i:>2}  {quote.courier_name:<24} {quote.service_type.value:<8} "
            f"{quote.forward_charge:>9.2f} {quote.rto_charge:>8.2f} {quote.cod_charge:>8.2f} "
            f"{quote.total_charge:>9.2f}  {expected_pickup(quote.pickup_time):<8}  {delivery}"
        )

    summary = summarize_quotes(quotes)
    print(f"\nCouriers: {summary.count}   "
          f"Range: {summary.min_price:.2f} - {summary.max_price:.2f}   "
          f"Average: {summary.average_price:.2f}")
    print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Compare courier rates for a single shipment")
    parser.add_argument(
        "--plan",
        default=None,
        help="Pricing plan id (default: the plan flagged as default)"
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory with pincodes.csv, couriers.csv and pricing CSVs (default: bundled reference data)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        pincodes_path = Path(args.data_dir) / "pincodes.csv" if args.data_dir else None
        pincodes = PincodeDirectory(load_pincodes(pincodes_path))
        couriers = load_couriers(args.data_dir)
        plan = load_plan(args.plan, args.data_dir)

        # Get user input
        request = get_user_input()

        # Rank couriers
        quotes = calculate_quotes(request, pincodes, plan, couriers)

        # Print results
        print_results(quotes, request)

    except KeyboardInterrupt:
        print("\n\nCancelled.")
    except RateEngineError as e:
        print(f"\n{e.user_message}\n  {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
