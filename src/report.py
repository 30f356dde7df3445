import csv
from typing import Iterable, List, TextIO

from amounts import format_amount
from models import AccountSummary

HEADER = ["client", "available", "held", "total", "locked"]


def format_account(account: AccountSummary) -> List[str]:
    return [
        str(account.client_id),
        format_amount(account.available),
        format_amount(account.held),
        format_amount(account.total),
        str(account.locked).lower(),
    ]


def write_accounts(destination: TextIO, accounts: Iterable[AccountSummary]) -> None:
    """
    Write account summaries as CSV, one row per account.
    Every row is formatted before anything is written, so a failure leaves the destination untouched.
    """
    rows = [format_account(account) for account in accounts]

    writer = csv.writer(destination, lineterminator="\n")
    writer.writerow(HEADER)
    writer.writerows(rows)
