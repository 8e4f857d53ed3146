"""
Text Rendering for the CLI

Pure functions turning engine results into lines of text. Nothing here
prints; the menu loop decides where output goes.
"""

import math

from bankcli.models.account import AccountListing, AccountView, TransactionHistory


HEADER_WIDTH = 38


def format_money(value: float) -> str:
    """
    Format an amount as US dollars: $1,234.50, -$5.00.

    Non-finite values render as $NaN and $∞ / -$∞.
    """
    if math.isnan(value):
        return "$NaN"
    sign = "-" if value < 0 else ""
    if math.isinf(value):
        return f"{sign}$∞"
    return f"{sign}${abs(value):,.2f}"


def render_header() -> list[str]:
    border = "=" * HEADER_WIDTH
    title = "BANKCLI PRO v1.0".center(HEADER_WIDTH - 2)
    return [border, f"={title}=", border]


def render_menu() -> list[str]:
    return [
        "1. Create New Account",
        "2. View Account Details",
        "3. List All Accounts",
        "4. Deposit Funds",
        "5. Withdraw Funds",
        "6. Transfer Between Accounts",
        "7. View Transaction History",
        "8. Delete Account",
        "9. Exit Application",
    ]


def render_account_box(view: AccountView) -> list[str]:
    """Draw the account details inside a box sized to the longest line."""
    lines = [
        f"Account: {view.id}",
        f"Holder: {view.holder_name}",
        f"Balance: {format_money(view.balance)}",
        f"Opened: {view.opened.isoformat()}",
    ]
    width = max(len(line) for line in lines) + 4
    border = "+" + "-" * (width - 2) + "+"
    return [border] + [f"| {line.ljust(width - 4)} |" for line in lines] + [border]


def render_table(headers: list[str], rows: list[list[str]]) -> list[str]:
    """Plain ASCII table with one header row."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: list[str]) -> str:
        return "| " + " | ".join(c.ljust(w) for c, w in zip(cells, widths)) + " |"

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    out = [separator, line(headers), separator]
    out.extend(line(row) for row in rows)
    out.append(separator)
    return out


def render_accounts(listing: AccountListing) -> list[str]:
    rows = [
        [account.id, account.holder_name, format_money(account.balance), "ACTIVE"]
        for account in listing.accounts
    ]
    lines = render_table(["ID", "Holder Name", "Balance", "Status"], rows)
    lines.append(f"Total accounts: {listing.count}")
    lines.append(f"Total balance: {format_money(listing.total_balance)}")
    return lines


def render_history(history: TransactionHistory) -> list[str]:
    rows = [
        [
            transaction.timestamp.date().isoformat(),
            transaction.type.value,
            format_money(transaction.amount),
            format_money(transaction.balance_after),
        ]
        for transaction in history.transactions
    ]
    return render_table(["Date", "Type", "Amount", "Balance After"], rows)
