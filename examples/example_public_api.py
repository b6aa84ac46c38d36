"""
Public API Example

This example demonstrates how to use Gemini's public API endpoints.
No authentication is required for these endpoints - they provide market data
available to everyone.

Endpoints covered:
- Ticker (bid, ask, last price, 24h volume)
- Order book
- Recent trades
"""

from gemini_api import (
    GeminiApiClient,
    get_version,
    print_data,
)
from gemini_api.env_setup import setup_environment


def example_public_api() -> None:
    """Demonstrate all public API endpoints without authentication."""

    print("=" * 70)
    print("Gemini Public API Example")
    print("=" * 70)

    # Display SDK version
    ver = get_version()
    print(f"\n[Info] Gemini Python SDK Version: {ver}\n")

    # Only the URL is used here, credentials are not needed
    api_url, _, _ = setup_environment()

    print(f"[Setup] Initializing API client for {api_url} (no authentication needed)...")
    with GeminiApiClient(api_url=api_url) as gemini:
        # ==================================================================
        # TICKER
        # ==================================================================
        print("\n" + "=" * 70)
        print("1. TICKER")
        print("=" * 70)

        ticker = gemini.get_ticker("btcusd")
        print("\n[btcusd]")
        print(f"  Bid:  ${ticker.bid}")
        print(f"  Ask:  ${ticker.ask}")
        print(f"  Last: ${ticker.last}")
        for currency, volume in ticker.volume.items():
            print(f"  24h Volume ({currency}): {volume}")

        # ==================================================================
        # ORDER BOOK
        # ==================================================================
        print("\n" + "=" * 70)
        print("2. ORDER BOOK")
        print("=" * 70)

        print("\n[Fetching] Top 5 levels for BTCUSD...")
        orderbook = gemini.get_orderbook("BTCUSD", limit_bids=5, limit_asks=5)

        print("\n[Asks]")
        for level in reversed(orderbook.asks):
            print(f"  {level.price:>12}  {level.amount}")
        print("[Bids]")
        for level in orderbook.bids:
            print(f"  {level.price:>12}  {level.amount}")

        # ==================================================================
        # RECENT TRADES
        # ==================================================================
        print("\n" + "=" * 70)
        print("3. RECENT TRADES")
        print("=" * 70)

        trades = gemini.get_trades("btcusd", limit=10)

        print(f"\n[Trades] Found {len(trades)} recent trades")
        print("[Sample] Most recent trade:")
        if trades:
            print_data(trades[0])

    print("\n" + "=" * 70)
    print("EXAMPLE COMPLETE")
    print("=" * 70)


if __name__ == "__main__":
    example_public_api()
