"""
Command-Line Frontend for BankCLI

This is the menu loop the operator interacts with.

DESIGN PRINCIPLES:
1. The UI only reads strings and renders results
2. Every rule lives in the ledger engine, never here
3. Clear messages for every rejection
4. Every screen waits for Enter before returning to the menu
5. Pending saves are flushed before the process exits

Prompts are read on a worker thread so the ledger writer keeps running on
the event loop while the operator is typing.
"""

import argparse
import asyncio
import sys
import threading
from typing import Awaitable, Callable, Optional

from app.formatting import (
    format_money,
    render_account_box,
    render_accounts,
    render_header,
    render_history,
    render_menu,
)
from bankcli.audit import configure_logging
from bankcli.config import get_settings
from bankcli.ledger import LedgerEngine, LedgerError
from bankcli.orchestrator import create_app_components
from bankcli.services.storage import LedgerWriter


Ask = Callable[[str], Awaitable[str]]
Output = Callable[[str], None]


async def prompt_stdin(question: str) -> str:
    """
    Read one line from stdin without blocking the event loop.

    The read happens on a daemon thread so an interrupted prompt never
    keeps the process alive at exit.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()

    def deliver(setter, value) -> None:
        if not future.done():
            setter(value)

    def read() -> None:
        try:
            line = input(question)
        except (EOFError, OSError) as e:
            outcome = (future.set_exception, e)
        else:
            outcome = (future.set_result, line)
        try:
            loop.call_soon_threadsafe(deliver, *outcome)
        except RuntimeError:
            # Event loop already closed; nobody is waiting for this line.
            return

    threading.Thread(target=read, name="bankcli-prompt", daemon=True).start()
    return await future


class ExitRequested(Exception):
    """Raised by the exit action to leave the menu loop."""


class BankCLI:
    """
    Interactive menu over a LedgerEngine.

    Input and output are injectable so the whole loop can be driven
    from tests with scripted answers.
    """

    def __init__(
        self,
        engine: LedgerEngine,
        writer: Optional[LedgerWriter] = None,
        ask: Ask = prompt_stdin,
        output: Output = print,
        clear_screen: bool = True,
    ):
        self._engine = engine
        self._writer = writer
        self._ask = ask
        self._out = output
        self._clear_screen = clear_screen
        self._actions: dict[str, Callable[[], Awaitable[None]]] = {
            "1": self.create_account,
            "2": self.view_account,
            "3": self.list_accounts,
            "4": self.deposit,
            "5": self.withdraw,
            "6": self.transfer,
            "7": self.transaction_history,
            "8": self.delete_account,
            "9": self.exit_app,
        }

    # -------------------------------------------------------------------------
    # Loop
    # -------------------------------------------------------------------------

    async def run(self) -> None:
        """Show the menu until the operator exits."""
        while True:
            self._screen()
            for line in render_menu():
                self._out(line)

            choice = await self._ask("Select option (1-9): ")
            action = self._actions.get(choice.strip())
            try:
                if action is None:
                    self._out("Invalid option. Please select 1-9.")
                    await self._pause()
                else:
                    await action()
            except ExitRequested:
                return

    # -------------------------------------------------------------------------
    # Screens
    # -------------------------------------------------------------------------

    async def create_account(self) -> None:
        self._screen("Create New Account")
        holder_name = await self._ask("Account holder name: ")
        try:
            self._engine.check_holder_name(holder_name)
        except LedgerError as e:
            self._out(e.message)
            await self._pause()
            return

        deposit = await self._ask("Initial deposit amount: ")
        try:
            account = self._engine.create_account(holder_name, deposit)
        except LedgerError as e:
            self._out(e.message)
        else:
            self._out(f"Account created successfully. ID: {account.id}")
        await self._pause()

    async def view_account(self) -> None:
        self._screen("View Account Details")
        account_id = await self._ask("Account ID: ")
        try:
            view = self._engine.view_account(account_id)
        except LedgerError as e:
            self._out(e.message)
        else:
            for line in render_account_box(view):
                self._out(line)
        await self._pause()

    async def list_accounts(self) -> None:
        self._screen("All Accounts")
        listing = self._engine.list_accounts()
        if listing.is_empty:
            self._out("No accounts found.")
        else:
            for line in render_accounts(listing):
                self._out(line)
        await self._pause()

    async def deposit(self) -> None:
        self._screen("Deposit Funds")
        account_id = await self._ask("Account ID: ")
        if not self._known(account_id):
            self._out("Account not found.")
            await self._pause()
            return
        amount = await self._ask("Deposit amount: ")
        try:
            account = self._engine.deposit(account_id, amount)
        except LedgerError as e:
            self._out(e.message)
        else:
            self._out(f"Deposit complete. New balance: {format_money(account.balance)}")
        await self._pause()

    async def withdraw(self) -> None:
        self._screen("Withdraw Funds")
        account_id = await self._ask("Account ID: ")
        if not self._known(account_id):
            self._out("Account not found.")
            await self._pause()
            return
        amount = await self._ask("Withdrawal amount: ")
        try:
            account = self._engine.withdraw(account_id, amount)
        except LedgerError as e:
            self._out(e.message)
        else:
            self._out(f"Withdrawal complete. New balance: {format_money(account.balance)}")
        await self._pause()

    async def transfer(self) -> None:
        self._screen("Transfer Between Accounts")
        from_id = await self._ask("From Account ID: ")
        to_id = await self._ask("To Account ID: ")
        amount = await self._ask("Transfer amount: ")
        try:
            receipt = self._engine.transfer(from_id, to_id, amount)
        except LedgerError as e:
            self._out(e.message)
        else:
            if receipt.destination_created:
                self._out(f"Account {receipt.destination.id} did not exist and was opened.")
            self._out("Transfer completed.")
        await self._pause()

    async def transaction_history(self) -> None:
        self._screen("Transaction History")
        account_id = await self._ask("Account ID: ")
        try:
            history = self._engine.transaction_history(account_id)
        except LedgerError as e:
            self._out(e.message)
        else:
            if history.is_empty:
                self._out("No transactions found.")
            else:
                for line in render_history(history):
                    self._out(line)
        await self._pause()

    async def delete_account(self) -> None:
        self._screen("Delete Account")
        account_id = await self._ask("Account ID: ")
        try:
            self._engine.delete_account(account_id)
        except LedgerError as e:
            self._out(e.message)
        else:
            self._out("Account deleted.")
        await self._pause()

    async def exit_app(self) -> None:
        self._out("Saving and exiting...")
        if self._writer is not None:
            self._writer.request_save(self._engine.snapshot())
            await self._writer.flush()
        raise ExitRequested()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _known(self, account_id: str) -> bool:
        # Deposit and withdraw ask for the amount only once the account resolves
        return self._engine.store.find_by_id(account_id.strip()) is not None

    def _screen(self, title: Optional[str] = None) -> None:
        if self._clear_screen:
            self._out("\033[2J\033[H")
        for line in render_header():
            self._out(line)
        if title:
            self._out(title)

    async def _pause(self) -> None:
        await self._ask("\nPress Enter to continue...")


async def main(data_path: Optional[str] = None) -> None:
    """Application entry point."""
    log_settings = get_settings().logging
    configure_logging(log_settings.level, log_settings.renderer)

    engine, writer, warnings = await create_app_components(data_path=data_path)
    for warning in warnings:
        print(warning)

    cli = BankCLI(engine, writer, clear_screen=sys.stdout.isatty())
    try:
        await cli.run()
    except EOFError:
        print("\nExiting...")
    finally:
        await writer.flush()


def run(argv: Optional[list[str]] = None) -> None:
    """Console script entry point."""
    parser = argparse.ArgumentParser(
        prog="bankcli",
        description="Interactive command-line bank account ledger.",
    )
    parser.add_argument(
        "--data-file",
        default=None,
        help="Ledger JSON file (default: BANKCLI_DATA_PATH or ./bank-data.json)",
    )
    args = parser.parse_args(argv)

    try:
        asyncio.run(main(args.data_file))
    except KeyboardInterrupt:
        print("\nExiting...")


if __name__ == "__main__":
    run()
