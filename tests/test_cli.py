"""Tests for the command-line frontend and its text rendering."""

import math
from datetime import date

import pytest

from app.formatting import (
    format_money,
    render_account_box,
    render_accounts,
    render_header,
    render_menu,
    render_table,
)
from app.main import BankCLI
from bankcli.models import Account, AccountListing, AccountView
from bankcli.services.storage import LedgerWriter


class ScriptedInput:
    """Answers prompts from a fixed script and remembers every question."""

    def __init__(self, *answers: str):
        self._answers = list(answers)
        self.prompts: list[str] = []

    async def __call__(self, question: str) -> str:
        self.prompts.append(question)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)


def make_cli(engine, *answers, writer=None):
    ask = ScriptedInput(*answers)
    lines: list[str] = []
    cli = BankCLI(engine, writer, ask=ask, output=lines.append, clear_screen=False)
    return cli, ask, lines


class TestFormatting:
    """Tests for money and table rendering."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.0, "$0.00"),
            (1234.5, "$1,234.50"),
            (1000000.0, "$1,000,000.00"),
            (-5.0, "-$5.00"),
        ],
    )
    def test_format_money(self, value, expected):
        assert format_money(value) == expected

    def test_format_non_finite(self):
        assert format_money(math.nan) == "$NaN"
        assert format_money(math.inf) == "$∞"
        assert format_money(-math.inf) == "-$∞"

    def test_header_and_menu(self):
        header = render_header()
        assert "BANKCLI PRO v1.0" in header[1]
        assert len({len(line) for line in header}) == 1
        menu = render_menu()
        assert len(menu) == 9
        assert menu[-1] == "9. Exit Application"

    def test_account_box(self):
        view = AccountView(
            id="ACC-1234", holder_name="Jane Doe", balance=42.0, opened=date(2024, 3, 1)
        )
        lines = render_account_box(view)
        assert lines[0] == lines[-1]
        assert lines[0].startswith("+") and lines[0].endswith("+")
        assert "| Balance: $42.00" in lines[3]
        assert "Opened: 2024-03-01" in lines[4]
        assert len({len(line) for line in lines}) == 1

    def test_table_columns_fit_content(self):
        lines = render_table(["ID", "Name"], [["ACC-1", "A much longer name"]])
        assert lines[1] == "| ID    | Name               |"
        assert lines[3] == "| ACC-1 | A much longer name |"

    def test_accounts_footer(self):
        listing = AccountListing(
            accounts=[Account(id="ACC-1", holder_name="Ann", balance=1.5)],
            total_balance=1.5,
        )
        lines = render_accounts(listing)
        assert "ACTIVE" in lines[3]
        assert lines[-2:] == ["Total accounts: 1", "Total balance: $1.50"]


class TestBankCLI:
    """Tests driving the menu loop with scripted input."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, engine):
        cli, ask, lines = make_cli(engine, "1", "Jane Doe", "100", "", "3", "", "9")
        await cli.run()

        created = [line for line in lines if line.startswith("Account created successfully.")]
        assert len(created) == 1
        account_id = created[0].rsplit(" ", 1)[-1]
        assert engine.store.find_by_id(account_id) is not None
        assert "Total balance: $100.00" in lines
        assert lines[-1] == "Saving and exiting..."

    @pytest.mark.asyncio
    async def test_bad_name_skips_deposit_prompt(self, engine):
        cli, ask, lines = make_cli(engine, "1", "Bob1", "", "9")
        await cli.run()

        assert "Account holder name must only contain letters, spaces, and hyphens." in lines
        assert "Initial deposit amount: " not in ask.prompts
        assert len(engine.store) == 0

    @pytest.mark.asyncio
    async def test_bad_deposit_message(self, engine):
        cli, ask, lines = make_cli(engine, "1", "Jane Doe", "12.345", "", "9")
        await cli.run()
        assert "Initial deposit amount must have up to 2 decimal places." in lines

    @pytest.mark.asyncio
    async def test_invalid_option(self, engine):
        cli, ask, lines = make_cli(engine, "x", "", "9")
        await cli.run()
        assert "Invalid option. Please select 1-9." in lines

    @pytest.mark.asyncio
    async def test_deposit_unknown_account_skips_amount(self, engine):
        cli, ask, lines = make_cli(engine, "4", "ACC-0000", "", "9")
        await cli.run()
        assert "Account not found." in lines
        assert "Deposit amount: " not in ask.prompts

    @pytest.mark.asyncio
    async def test_deposit_and_withdraw(self, engine):
        account = engine.create_account("Jane Doe", "100")
        cli, ask, lines = make_cli(
            engine, "4", account.id, "25.5", "", "5", account.id, "200", "", "9"
        )
        await cli.run()

        assert "Deposit complete. New balance: $125.50" in lines
        assert "Withdrawal complete. New balance: -$74.50" in lines

    @pytest.mark.asyncio
    async def test_transfer_to_new_account(self, engine):
        account = engine.create_account("Jane Doe", "100")
        cli, ask, lines = make_cli(engine, "6", account.id, "ACC-4321", "10", "", "9")
        await cli.run()

        assert "Account ACC-4321 did not exist and was opened." in lines
        assert "Transfer completed." in lines
        assert engine.store.find_by_id("ACC-4321").balance == 10.0

    @pytest.mark.asyncio
    async def test_transfer_unknown_source(self, engine):
        cli, ask, lines = make_cli(engine, "6", "ACC-0000", "ACC-4321", "10", "", "9")
        await cli.run()
        assert "Source account not found." in lines

    @pytest.mark.asyncio
    async def test_view_history_and_delete(self, engine):
        account = engine.create_account("Jane Doe", "100")
        cli, ask, lines = make_cli(
            engine, "2", account.id, "", "7", account.id, "", "8", account.id, "", "9"
        )
        await cli.run()

        assert any(f"Account: {account.id}" in line for line in lines)
        assert any("DEPOSIT" in line for line in lines)
        assert "Account deleted." in lines
        assert len(engine.store) == 0

    @pytest.mark.asyncio
    async def test_empty_states(self, engine):
        engine.store.create(Account(id="ACC-1234", holder_name="Legacy"))
        cli, ask, lines = make_cli(engine, "7", "ACC-1234", "", "8", "ACC-1234", "", "3", "", "9")
        await cli.run()
        assert "No transactions found." in lines
        assert "No accounts found." in lines

    @pytest.mark.asyncio
    async def test_exit_flushes_writer(self, engine, memory_storage):
        writer = LedgerWriter(memory_storage)
        engine.store.create(Account(id="ACC-1234", holder_name="Legacy"))
        cli, ask, lines = make_cli(engine, "9", writer=writer)
        await cli.run()

        assert not writer.in_flight
        assert [a.id for a in memory_storage.saved[-1].accounts] == ["ACC-1234"]

    @pytest.mark.asyncio
    async def test_end_of_input_propagates(self, engine):
        cli, ask, lines = make_cli(engine, "3")
        with pytest.raises(EOFError):
            await cli.run()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
