import csv
from typing import Dict, TextIO, Tuple

from models import ClientAccount

HEADER = ("client", "available", "held", "total", "locked")


def format_account(account: ClientAccount) -> Tuple[int, str, str, str, str]:
    return (
        account.client_id,
        str(account.available),
        str(account.held),
        str(account.total),
        str(account.locked).lower(),
    )


def write_accounts(stream: TextIO, accounts: Dict[int, ClientAccount]) -> None:
    """Write one CSV row per client, ordered by client id."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    for client_id in sorted(accounts.keys()):
        writer.writerow(format_account(accounts[client_id]))
