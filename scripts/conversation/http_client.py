#!/usr/bin/env python3
"""HTTP client for interacting with the echo-service chat endpoint."""

import argparse
import json
import sys
from pathlib import Path

import httpx

# Add the project root to the Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from echo_service.structured_logging import get_logger  # noqa: E402

logger = get_logger("http_client")


def send_message(client: httpx.Client, path: str, message: str) -> str:
    """Send one message and return the bot's reply.

    Raises:
        httpx.HTTPStatusError: When the service answers with an error status.
    """
    logger.info("Sending message", path=path, message=message)
    response = client.post(path, json={"message": message})
    response.raise_for_status()
    bot_message = response.json()["botMessage"]
    logger.info("Received reply", bot_message=bot_message)
    return bot_message


def describe_error(response: httpx.Response) -> str:
    """Return the ``error`` field of an error body, or the raw text."""
    try:
        return response.json().get("error", response.text)
    except json.JSONDecodeError:
        return response.text


def start_conversation(base_url: str, path: str = "/"):
    """Run an interactive echo session via HTTP."""
    client = httpx.Client(base_url=base_url, timeout=10.0)

    try:
        print("Type 'exit' or 'quit' to end the conversation.")
        print("Type 'curl' to see the equivalent curl command.\n")

        while True:
            user_input = input("You: ")
            if user_input.strip().lower() in {"exit", "quit"}:
                logger.info("Ending conversation")
                break

            if user_input.strip().lower() == "curl":
                curl_cmd = f'''curl -X POST "{base_url}{path}" \\
  -H "Content-Type: application/json" \\
  -d '{json.dumps({"message": "Hello!"})}'
'''
                print(f"\nEquivalent curl command:\n{curl_cmd}")
                continue

            try:
                print(f"Bot: {send_message(client, path, user_input)}\n")
            except httpx.HTTPStatusError as e:
                print(f"\nError: {e.response.status_code}: {describe_error(e.response)}\n")
                logger.error("HTTP error", status_code=e.response.status_code, response=e.response.text)
            except httpx.TimeoutException:
                print("\nError: Request timed out.\n")
                logger.error("Request timeout")
            except httpx.RequestError as e:
                print(f"\nError: Failed to send request: {e}\n")
                logger.error("Request error", error=str(e))

    except KeyboardInterrupt:
        print("\n\nConversation interrupted.")
    finally:
        client.close()


def main():
    """Main entry point for the HTTP client."""
    parser = argparse.ArgumentParser(description="HTTP client for chatting with echo-service")
    parser.add_argument(
        "--base-url",
        type=str,
        default="http://localhost:8000",
        help="Base HTTP URL (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--path",
        type=str,
        default="/",
        help="Path of the chat route (default: /)",
    )

    args = parser.parse_args()

    start_conversation(args.base_url, args.path)


if __name__ == "__main__":
    main()
