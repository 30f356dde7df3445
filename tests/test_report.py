import sys
import os
import io
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from errors import AmountOverflowError
from models import AccountSummary
from report import write_accounts


class TestWriteAccounts:
    def test_empty(self):
        buffer = io.StringIO()
        write_accounts(buffer, iter([]))
        assert buffer.getvalue() == "client,available,held,total,locked\n"

    def test_single_account(self):
        buffer = io.StringIO()
        write_accounts(buffer, iter([
            AccountSummary(0, Decimal("1.0"), Decimal("2.0"), Decimal("3.0"), True),
        ]))

        assert buffer.getvalue() == (
            "client,available,held,total,locked\n"
            "0,1.0000,2.0000,3.0000,true\n"
        )

    def test_unrenderable_account_writes_nothing(self):
        buffer = io.StringIO()
        with pytest.raises(AmountOverflowError):
            write_accounts(buffer, iter([
                AccountSummary(1, Decimal("5"), Decimal("0"), Decimal("5"), False),
                AccountSummary(2, Decimal("1"), Decimal("0"), Decimal("1e30"), False),
            ]))

        assert buffer.getvalue() == ""
