import io
import itertools
import random

import pytest

from mycash.cli import Console, main
from mycash.models import Member
from mycash.storage import load_members, save_members
from mycash.service import MyCash

OTP = 4321


class FixedRandom(random.Random):
    def randint(self, a, b):
        return OTP

    def randrange(self, *args, **kwargs):
        return 7


def make_app(members=None, clock=None):
    return MyCash(members or [], clock=clock or (lambda: 0.0), rng=FixedRandom())


def run_console(app, text):
    out = []
    Console(app, io.StringIO(text), out.append).run()
    return "".join(out)


def lines(*items):
    return "".join(f"{item}\n" for item in items)


def alice(amount=0.0):
    return Member("1001", "Alice", amount, "11111")


def bob(amount=0.0):
    return Member("1002", "Bob", amount, "22222")


def test_register_success_adds_member():
    app = make_app()
    output = run_console(
        app, lines(2, "1001", "Alice Smith", "11111", "11111", OTP, 3)
    )
    assert "Registration is Successful" in output
    assert f"myCash OTP: {OTP}" in output
    assert app.members == [Member("1001", "Alice Smith", 0.0, "11111")]
    assert output.endswith("Exiting MyCash Application\n")


def test_register_pin_mismatch():
    app = make_app()
    output = run_console(app, lines(2, "1001", "Alice", "11111", "99999", 3))
    assert "7. Pins must be same" in output
    assert app.members == []


def test_register_wrong_otp():
    app = make_app()
    output = run_console(app, lines(2, "1001", "Alice", "11111", "11111", 1, 3))
    assert "5. OTP does NOT matched" in output
    assert app.members == []


def test_register_duplicate():
    app = make_app([alice()])
    output = run_console(app, lines(2, "1001", 3))
    assert "1. Member already exists" in output
    assert len(app.members) == 1


def test_login_unknown_member():
    app = make_app()
    output = run_console(app, lines(1, "1001", 3))
    assert "2. Member NOT exists" in output
    assert "MyCash Menu ********" not in output


def test_login_wrong_pin():
    app = make_app([alice()])
    output = run_console(app, lines(1, "1001", "00000", 3))
    assert "8. Invalid login" in output
    assert "Login is Successful" not in output


def test_cash_in_and_balance():
    app = make_app([alice()])
    output = run_console(app, lines(1, "1001", "11111", 4, 50, "y", 7, 9, 3))
    assert "Cash-in is Successful" in output
    assert "Balance: 50\n" in output
    assert "Logout Successful" in output
    assert app.members[0].amount == 50
    assert len(app.history) == 1


def test_cash_in_cancelled():
    app = make_app([alice()])
    output = run_console(app, lines(1, "1001", "11111", 4, 50, "n", 9, 3))
    assert "Cash-in Cancelled" in output
    assert app.members[0].amount == 0


def test_send_money_moves_funds():
    app = make_app([alice(100), bob()])
    output = run_console(
        app, lines(1, "1001", "11111", 3, "1002", 30, "Y", OTP, 9, 3)
    )
    assert "Sending 30 to 1002" in output
    assert "Send Money is Successful" in output
    sender, receiver = app.members
    assert receiver.amount == 30
    assert sender.amount + receiver.amount == 100


def test_send_money_insufficient_fund():
    app = make_app([alice(10), bob()])
    output = run_console(app, lines(1, "1001", "11111", 3, "1002", 30, 9, 3))
    assert "3 Insufficient Fund" in output
    assert [m.amount for m in app.members] == [10, 0]


def test_send_money_invalid_destination():
    app = make_app([alice(10)])
    output = run_console(app, lines(1, "1001", "11111", 3, "1003", 9, 3))
    assert "9 Destination Mobile no. is invalid" in output


def test_send_money_session_expired():
    clock = itertools.chain([0.0], itertools.repeat(500.0))
    app = make_app([alice(100), bob()], clock=lambda: next(clock))
    output = run_console(app, lines(1, "1001", "11111", 3, 9, 3))
    assert "6. OTP time has expired. Please log in again." in output
    assert app.members[0].amount == 100


def test_cash_out_wrong_otp_keeps_balance():
    app = make_app([alice(100)])
    output = run_console(app, lines(1, "1001", "11111", 5, 40, 1, 9, 3))
    assert "5 OTP does NOT matched" in output
    assert app.members[0].amount == 100


def test_cash_out_success():
    app = make_app([alice(100)])
    output = run_console(app, lines(1, "1001", "11111", 5, 40, OTP, "y", 9, 3))
    assert "Cash-out is Successful" in output
    assert app.members[0].amount + 40 == 100
    assert [t.description for t in app.history] == ["Cash-out"]


def test_pay_bill_gas():
    app = make_app([alice(100)])
    output = run_console(app, lines(1, "1001", "11111", 6, 1, 25, "y", OTP, 9, 3))
    assert "Your Gas Bill: " in output
    assert "Bill Payment is Successful" in output
    assert app.members[0].amount + 25 == 100


def test_pay_bill_invalid_type_and_insufficient():
    app = make_app([alice(10)])
    output = run_console(app, lines(1, "1001", "11111", 6, 9, 25, "y", OTP, 9, 3))
    assert "Your Invalid Bill: " in output
    assert "3 Insufficient Fund" in output
    assert app.members[0].amount == 10


def test_history_shows_header_and_rows():
    app = make_app([alice()])
    output = run_console(app, lines(1, "1001", "11111", 4, 5, "y", 8, 9, 3))
    assert "Tran ID\tDescription\tAmount\tBalance\n" in output
    assert "Cash-in\t5\t5\n" in output


def test_remove_member_returns_to_login_menu():
    app = make_app([alice(), bob()])
    output = run_console(app, lines(1, "1001", "11111", 2, OTP, 3))
    assert "Remove is Successful" in output
    assert [m.mobile for m in app.members] == ["1002"]
    assert "Logout Successful" not in output
    assert output.endswith("Exiting MyCash Application\n")


def test_update_name_and_pin():
    app = make_app([alice()])
    output = run_console(
        app, lines(1, "1001", "11111", 1, "Alice Jones", "33333", "33333", OTP, 9, 3)
    )
    assert "Old Name: Alice" in output
    assert "Update is Successful" in output
    assert app.members[0].name == "Alice Jones"
    assert app.members[0].pin == "33333"


def test_update_pin_mismatch_keeps_new_name():
    app = make_app([alice()])
    output = run_console(
        app, lines(1, "1001", "11111", 1, "Alice Jones", "33333", "44444", 9, 3)
    )
    assert "7. Pins must be same" in output
    assert app.members[0].name == "Alice Jones"
    assert app.members[0].pin == "11111"


def test_invalid_options():
    app = make_app([alice()])
    output = run_console(app, lines(7, 1, "1001", "11111", 42, 9, 3))
    assert "10.Invalid Option" in output
    assert "10 Invalid Option" in output


def test_end_of_input_stops_console():
    app = make_app()
    output = run_console(app, "")
    assert output.startswith("\n*** MyCash Login Menu ***\n")
    assert "Exiting MyCash Application" not in output


def test_main_loads_and_saves(tmp_path, monkeypatch, capsys):
    data = tmp_path / "members.txt"
    save_members(data, [alice(10)])
    monkeypatch.setattr("sys.stdin", io.StringIO(lines(1, "1001", "11111", 4, 15, "y", 9, 3)))
    assert main(["--data", str(data)]) == 0
    assert "Cash-in is Successful" in capsys.readouterr().out
    saved = load_members(data)
    assert [m.mobile for m in saved] == ["1001"]
    assert saved[0].amount == 25


def test_main_saves_on_end_of_input(tmp_path, monkeypatch):
    data = tmp_path / "members.txt"
    monkeypatch.setattr("sys.stdin", io.StringIO(lines(2, "1001", "Alice", "11111", "11111")))
    assert main(["--data", str(data)]) == 0
    assert data.exists()
    assert load_members(data) == []