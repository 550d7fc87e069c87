#!/usr/bin/env python3
"""
Rexster Client REPL

Interactive command-line interface for a Rexster graph using the client library.
"""

import argparse
import json
import logging
import sys
import signal
from typing import Optional, Dict, Any
from pathlib import Path

from dotenv import load_dotenv
from prompt_toolkit import prompt
from prompt_toolkit.history import FileHistory
from prompt_toolkit.shortcuts import CompleteStyle
from tabulate import tabulate

from rexster_client.client.rexster_client import RexsterClient
from rexster_client.client.client_factory import create_rexster_client
from rexster_client.config.client_config_loader import ClientConfigurationError
from rexster_client.utils.client_utils import RexsterClientError

logger = logging.getLogger(__name__)


def parse_data_args(args: list[str]) -> Dict[str, Any]:
    """Parse key=value arguments. Values are read as JSON when possible, else kept as text."""
    data: Dict[str, Any] = {}
    for arg in args:
        if '=' not in arg:
            raise ValueError(f"Expected key=value, got: {arg}")
        key, raw_value = arg.split('=', 1)
        try:
            data[key] = json.loads(raw_value)
        except json.JSONDecodeError:
            data[key] = raw_value
    return data


class RexsterREPL:
    """Rexster REPL implementation with client management."""

    def __init__(self, config_path: Optional[str] = None):
        self.client: Optional[RexsterClient] = None
        self.config_path = config_path

    @property
    def connected(self) -> bool:
        return self.client is not None

    def setup_signal_handlers(self):
        """Setup signal handlers for graceful shutdown."""
        def signal_handler(sig, frame):
            self._close_client()
            print("Goodbye!")
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)

    def _close_client(self):
        if self.client:
            print("Closing connection...")
            self.client.close()
            self.client = None

    def parse_command(self, command_line: str) -> tuple[str, list[str]]:
        """Parse a command line into command and arguments."""
        if command_line.strip().endswith(';'):
            command_line = command_line.strip()[:-1]

        parts = command_line.strip().split()
        if not parts:
            return "", []

        return parts[0].lower(), parts[1:]

    def execute_command(self, command_line: str) -> bool:
        """Execute a REPL command. Returns False if should exit."""
        if not command_line.strip():
            return True

        command, args = self.parse_command(command_line)

        handlers = {
            'exit': self.cmd_exit,
            'quit': self.cmd_exit,
            'open': self.cmd_open,
            'close': self.cmd_close,
            'graph': self.cmd_graph,
            'offset': self.cmd_offset,
            'keys': self.cmd_keys,
            'get': self.cmd_request,
            'post': self.cmd_request,
            'put': self.cmd_request,
            'delete': self.cmd_request,
            'last': self.cmd_last,
            'status': self.cmd_status,
            'help': self.cmd_help,
            '?': self.cmd_help,
        }

        handler = handlers.get(command)
        if handler is None:
            print(f"Unknown command: {command}")
            print("Type 'help;' or '?;' for available commands.")
            return True

        if handler == self.cmd_request:
            return self.cmd_request(command, args)
        return handler(args)

    def cmd_exit(self, args: list[str]) -> bool:
        """Exit the REPL."""
        self._close_client()
        print("Goodbye!")
        return False

    def cmd_open(self, args: list[str]) -> bool:
        """Create a client from the configuration."""
        if self.connected:
            print("Already open. Use 'close;' first.")
            return True

        try:
            self.client = create_rexster_client(self.config_path)
            print(f"✅ Using graph {self.client.get_config().graph_url}")
        except (ClientConfigurationError, RexsterClientError) as e:
            print(f"❌ Open failed: {e}")

        return True

    def cmd_close(self, args: list[str]) -> bool:
        """Release the client and its session."""
        if not self.connected:
            print("Not open.")
            return True

        self._close_client()
        print("✅ Closed.")
        return True

    def _require_client(self) -> bool:
        if not self.connected:
            print("Not open. Use 'open;' first.")
            return False
        return True

    def cmd_graph(self, args: list[str]) -> bool:
        """Switch to another graph name."""
        if not self._require_client():
            return True
        if not args:
            print(f"Graph: {self.client.get_graph_name()}")
            return True
        try:
            self.client.set_graph_name(args[0])
            print(f"✅ Using graph {self.client.get_config().graph_url}")
        except RexsterClientError as e:
            print(f"❌ {e}")
        return True

    def cmd_offset(self, args: list[str]) -> bool:
        """Set paging offsets: offset <start> [end], or 'offset none' to clear."""
        if not self._require_client():
            return True
        try:
            if not args or args[0].lower() == 'none':
                self.client.set_offset_start(None).set_offset_end(None)
            else:
                self.client.set_offset_start(int(args[0]))
                self.client.set_offset_end(int(args[1]) if len(args) > 1 else None)
            print(f"Offsets: start={self.client.get_offset_start()} end={self.client.get_offset_end()}")
        except (ValueError, RexsterClientError) as e:
            print(f"❌ {e}")
        return True

    def cmd_keys(self, args: list[str]) -> bool:
        """Set return keys: keys name,age or 'keys none' to clear."""
        if not self._require_client():
            return True
        if not args or args[0].lower() == 'none':
            self.client.set_return_keys(None)
        else:
            self.client.set_return_keys([key for key in args[0].split(',') if key])
        print(f"Return keys: {self.client.get_return_keys()}")
        return True

    def cmd_request(self, method: str, args: list[str]) -> bool:
        """Issue get/post/put/delete <path> [key=value ...]."""
        if not self._require_client():
            return True
        if not args:
            print(f"Usage: {method} <path> [key=value ...];")
            return True

        try:
            data = parse_data_args(args[1:])
            request = getattr(self.client, f"{method}_custom")
            result = request(args[0], data)
            print(json.dumps(result.data, indent=2))
        except ValueError as e:
            print(f"❌ {e}")
        except RexsterClientError as e:
            print(f"❌ Request failed (status {e.status_code}): {e}")
        return True

    def cmd_last(self, args: list[str]) -> bool:
        """Show the last request sent."""
        if not self._require_client():
            return True
        record = self.client.get_last_request()
        if record is None:
            print("No request sent yet.")
            return True
        rows = [
            ["method", record.method],
            ["url", record.url],
            ["headers", json.dumps(record.headers)],
            ["body", record.body],
            ["status", self.client.get_response_code()],
            ["message", self.client.get_response_message()],
        ]
        print(tabulate(rows, tablefmt="simple"))
        return True

    def cmd_status(self, args: list[str]) -> bool:
        """Show client configuration."""
        if not self._require_client():
            return True
        rows = [[key, value] for key, value in self.client.get_server_info().items()]
        print(tabulate(rows, headers=["setting", "value"], tablefmt="simple"))
        return True

    def cmd_help(self, args: list[str]) -> bool:
        """Show help information."""
        print("""
Rexster Client REPL Commands:

  open;                         - Create a client from the configuration
  close;                        - Release the client
  graph [name];                 - Show or switch the graph name
  offset <start> [end];         - Set paging offsets (offset none; clears)
  keys <k1,k2>;                 - Set return keys (keys none; clears)
  get <path> [k=v ...];         - GET request below the graph url
  post <path> [k=v ...];        - POST request with a JSON body
  put <path> [k=v ...];         - PUT request with a JSON body
  delete <path> [k=v ...];      - DELETE request
  last;                         - Show the last request sent
  status;                       - Show client settings
  exit;                         - Exit the REPL (also quit;)
  help; ?;                      - Show this help message

Notes:
  - All commands must end with a semicolon (;)
  - Use Ctrl+D to exit

Client Status: {}
""".format("🟢 Open" if self.connected else "🔴 Closed"))
        return True

    def run_repl(self):
        """Run the interactive REPL."""
        self.setup_signal_handlers()

        print("Rexster Client REPL")
        print("Type 'help;' or '?;' for commands, 'exit;' to quit, or Ctrl+D to exit.")
        print()

        history_file = Path.home() / ".rexster_history"
        history = FileHistory(str(history_file))

        while True:
            try:
                status = "🟢" if self.connected else "🔴"
                command_line = prompt(
                    f"rexster{status}> ",
                    history=history,
                    complete_style=CompleteStyle.READLINE_LIKE
                )

                if not self.execute_command(command_line):
                    break

            except EOFError:
                print()
                self._close_client()
                print("Goodbye!")
                break
            except KeyboardInterrupt:
                continue


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the Rexster REPL."""
    parser = argparse.ArgumentParser(
        description="Rexster Client REPL - Interactive command-line interface",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rexster-client                                   # Start REPL with default settings
  rexster-client --config /path/to/config.yaml     # Use custom config file
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to Rexster client configuration file (default: standard locations or built-in defaults)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Rexster Client REPL 0.1.0"
    )

    return parser.parse_args()


def main():
    """Main entry point for the Rexster client REPL."""
    args = parse_args()

    load_dotenv()
    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s: %(message)s')

    try:
        repl_instance = RexsterREPL(config_path=args.config)
        repl_instance.run_repl()
    except KeyboardInterrupt:
        print("\nGoodbye!")
        sys.exit(0)
    except Exception as e:
        print(f"Error starting REPL: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
