"""Command-line interface for the restaurant mock API - HTTP client for manual checks."""

import json
import logging
import sys
from typing import Any

import httpx

from restaurant_mock.config import get_config, setup_logging

logger = logging.getLogger(__name__)

SAMPLE_RESTAURANT: dict[str, Any] = {
    "title": "Le Bistrot du Port",
    "address": "4 quai Saint-Antoine",
    "city": "Lyon",
    "price_range": "€€",
    "ratings": 4.6,
    "reviews": 182,
    "website": "https://bistrot-du-port.example",
    "description": "Cuisine lyonnaise traditionnelle au bord de la Saône.",
    "images": ["https://bistrot-du-port.example/salle.jpg"],
}


class RestaurantAPIClient:
    """Thin HTTP client for the mock API endpoints.

    Each method returns the raw ``httpx.Response`` so callers can look at
    error statuses as well as successes.
    """

    def __init__(
        self,
        server_url: str | None = None,
        http_client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            server_url: Base URL of the server (defaults to configured server_url)
            http_client: Pre-built client to use instead of creating one
            timeout: Request timeout in seconds
        """
        self.server_url = server_url or get_config().server_url
        self.http_client = http_client or httpx.Client(
            base_url=self.server_url, timeout=timeout
        )

    def send_restaurant(self, payload: Any) -> httpx.Response:
        return self.http_client.post("/restaurants", json=payload)

    def simulate_error(self) -> httpx.Response:
        return self.http_client.post("/restaurants/error")

    def list_restaurants(self) -> httpx.Response:
        return self.http_client.get("/api/restaurants")

    def get_stats(self) -> httpx.Response:
        return self.http_client.get("/stats")

    def close(self) -> None:
        self.http_client.close()


class MockAPICLI:
    """Interactive command loop against a running mock API."""

    COMMANDS = {
        "send [json]": "Send a restaurant (sample data if no JSON given)",
        "error": "Trigger the simulated server error",
        "list": "List received restaurants, most recent first",
        "stats": "Show server statistics",
        "help": "Show this help",
        "quit": "Exit",
    }

    def __init__(self, client: RestaurantAPIClient | None = None) -> None:
        """Initialize the CLI."""
        self.config = get_config()
        self.client = client or RestaurantAPIClient(self.config.server_url)
        logger.info(f"CLI talking to {self.client.server_url}")

    def _print_help(self) -> None:
        print("Commands:")
        for command, description in self.COMMANDS.items():
            print(f"  {command:<12} {description}")

    def run(self) -> None:
        """Run the CLI application."""
        print("\n" + "=" * 60)
        print("RESTAURANT MOCK API - manual test client")
        print(f"Server: {self.client.server_url}")
        print("=" * 60 + "\n")
        self._print_help()

        while True:
            try:
                user_input = input("\n> ").strip()

                if not user_input:
                    continue

                if user_input.lower() in ["quit", "exit", "q"]:
                    print("\nGoodbye!")
                    break

                self.handle_command(user_input)

            except (KeyboardInterrupt, EOFError):
                print("\n\nExiting. Goodbye!")
                break

        self.client.close()

    def handle_command(self, user_input: str) -> bool:
        """Execute one command line.

        Args:
            user_input: Command and optional argument

        Returns:
            True if the command was recognized and a request was attempted
        """
        command, _, argument = user_input.partition(" ")
        command = command.lower()

        if command == "help":
            self._print_help()
            return False

        try:
            if command == "send":
                payload = json.loads(argument) if argument.strip() else SAMPLE_RESTAURANT
                response = self.client.send_restaurant(payload)
            elif command == "error":
                response = self.client.simulate_error()
            elif command == "list":
                response = self.client.list_restaurants()
            elif command == "stats":
                response = self.client.get_stats()
            else:
                print(f"Unknown command: {command}. Type 'help' for commands.")
                return False
        except json.JSONDecodeError as e:
            print(f"\n⚠ Invalid JSON: {e}")
            return False
        except httpx.TimeoutException:
            logger.exception("Request timed out")
            print("\n⚠ Request timed out. Is the server busy or unreachable?")
            return False
        except httpx.ConnectError:
            logger.exception("Cannot connect to server")
            print(f"\n⚠ Cannot connect to server at {self.client.server_url}")
            print("Make sure the server is running:")
            print("  python -m restaurant_mock.server")
            return False

        self._print_response(response)
        return True

    def _print_response(self, response: httpx.Response) -> None:
        marker = "✓" if response.is_success else "⚠"
        print(f"\n{marker} {response.request.method} {response.request.url.path} -> {response.status_code}")

        if response.headers.get("content-type", "").startswith("application/json"):
            print(json.dumps(response.json(), indent=2, ensure_ascii=False))
        else:
            print(response.text)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        config = get_config()
    except Exception as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(config)

    cli = MockAPICLI()
    cli.run()


if __name__ == "__main__":
    main()
