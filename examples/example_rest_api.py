"""
Authenticated REST API Example

This example demonstrates how to use Gemini's authenticated REST API endpoints.
These endpoints require valid API credentials and allow you to:

Account Information:
- Get wallet balances
- Get active orders

Trading Operations:
- Place limit orders
- Check order status
- Cancel orders

Run it against the sandbox (ENVIRONMENT=sandbox) unless you intend to trade.

Environment Variables Required:
- GEMINI_URL: API endpoint URL
- GEMINI_API_KEY: Your API key
- GEMINI_API_SECRET: Your API secret for signing
"""

from gemini_api import ExchangeError, GeminiApiClient, print_data
from gemini_api.env_setup import setup_environment


def example_auth_rest_api() -> None:
    """Demonstrate authenticated REST API endpoints for trading and account management."""

    print("=" * 70)
    print("Gemini Authenticated REST API Example")
    print("=" * 70)

    # Load environment variables from .env file
    print("\n[Setup] Loading credentials from environment...")
    api_url, api_key, api_secret = setup_environment()
    print(f"[Setup] API Endpoint: {api_url}\n")

    with GeminiApiClient(api_key=api_key, api_secret=api_secret, api_url=api_url) as gemini:
        # ==================================================================
        # PART 1: ACCOUNT INFORMATION
        # ==================================================================
        print("=" * 70)
        print("1. WALLET BALANCES")
        print("=" * 70)

        balances = gemini.get_wallet_balances()
        for currency, balance in balances.items():
            print(f"  {currency}: {balance.amount} (available {balance.available})")

        print("\n" + "=" * 70)
        print("2. ACTIVE ORDERS")
        print("=" * 70)

        orders = gemini.get_active_orders()
        print(f"\n[Orders] {len(orders)} live orders")
        for order in orders:
            print(
                f"  id:{order.order_id} {order.symbol}:{order.side.value}:{order.type} "
                f"{order.remaining_amount} at {order.price}"
            )

        # ==================================================================
        # PART 2: TRADING
        # ==================================================================
        print("\n" + "=" * 70)
        print("3. PLACE, CHECK AND CANCEL A LIMIT ORDER")
        print("=" * 70)

        # A price far below the market so the order rests on the book
        try:
            order = gemini.place_order("btcusd", "0.0001", "1.00", is_buy=True)
        except ExchangeError as e:
            print(f"\n[Rejected] {e}")
        else:
            print("\n[Placed]")
            print_data(order)

            status = gemini.get_order_status(order.order_id)
            print(f"\n[Status] live={status.is_live} cancelled={status.is_cancelled}")

            gemini.cancel_order(order.order_id)
            print(f"[Cancelled] {order.order_id}")

    print("\n" + "=" * 70)
    print("EXAMPLE COMPLETE")
    print("=" * 70)


if __name__ == "__main__":
    # This code only runs when the file is executed directly
    example_auth_rest_api()
