"""Interactive console menus for the account book."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Callable, TextIO

from mycash.models import format_amount
from mycash.service import (
    InsufficientFundError,
    InvalidLoginError,
    MyCash,
    MyCashError,
    OtpMismatchError,
    PinMismatchError,
    SessionExpiredError,
    bill_label,
)
from mycash.storage import default_data_path, load_members, save_members

LOGIN_MENU = (
    "\n*** MyCash Login Menu ***\n"
    "1. Login\n2. Register\n3. Exit\nEnter Your Option: "
)
MEMBER_MENU = (
    "\n********** MyCash Menu ********\n"
    "1. Update Me\n2. Remove Me\n3. Send Money\n4. Cash-in\n5. Cash-out\n"
    "6. Pay Bill\n7. Check Balance\n8. History\n9. Logout\n"
    "Enter Your Option (1-9): "
)
SESSION_EXPIRED = "6. OTP time has expired. Please log in again."
LOGOUT_OPTION = 9

_WORD = re.compile(r"\S+")


class _Input:
    """Whitespace-separated reading from a text stream, line reads included."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending = ""

    def _fill(self) -> None:
        line = self._stream.readline()
        if not line:
            raise EOFError("end of input")
        self._pending += line

    def _skip_blanks(self) -> None:
        while True:
            stripped = self._pending.lstrip()
            if stripped:
                self._pending = stripped
                return
            self._pending = ""
            self._fill()

    def word(self) -> str:
        self._skip_blanks()
        match = _WORD.match(self._pending)
        assert match is not None
        self._pending = self._pending[match.end():]
        return match.group()

    def char(self) -> str:
        self._skip_blanks()
        first, self._pending = self._pending[0], self._pending[1:]
        return first

    def integer(self) -> int | None:
        try:
            return int(self.word())
        except ValueError:
            return None

    def number(self) -> float:
        try:
            return float(self.word())
        except ValueError:
            return 0.0

    def line(self) -> str:
        """Skip one character (the end of the previous answer), then read a line."""
        try:
            if not self._pending:
                self._fill()
            self._pending = self._pending[1:]
            if not self._pending:
                self._fill()
        except EOFError:
            return ""
        text, _, self._pending = self._pending.partition("\n")
        return text.rstrip("\r")


class _Cancelled(Exception):
    """Raised inside an OTP callback to abandon an operation quietly."""


class Console:
    """Runs the login and member menus against a ``MyCash`` account book."""

    def __init__(
        self,
        app: MyCash,
        reader: TextIO | None = None,
        write: Callable[[str], object] | None = None,
    ) -> None:
        self.app = app
        self._input = _Input(reader if reader is not None else sys.stdin)
        self._write = write if write is not None else sys.stdout.write

    def _say(self, text: str) -> None:
        self._write(text + "\n")

    def _ask(self, prompt: str) -> None:
        self._write(prompt)

    def _confirmed(self, prompt: str) -> bool:
        self._ask(prompt)
        return self._input.char() in ("Y", "y")

    def _prompt_otp(self, otp: int) -> int:
        self._say(f"myCash OTP: {otp}")
        self._ask("Enter OTP: ")
        entered = self._input.integer()
        return -1 if entered is None else entered

    def run(self) -> None:
        """Show the login menu until the user exits or input ends."""
        try:
            self.login_menu()
        except EOFError:
            pass

    def login_menu(self) -> None:
        """Loop over the login menu until the exit option is chosen."""
        while True:
            self._ask(LOGIN_MENU)
            option = self._input.integer()
            if option == 1:
                if self._login():
                    self.member_menu()
            elif option == 2:
                self._register()
            elif option == 3:
                self._say("Exiting MyCash Application")
                return
            else:
                self._say("10.Invalid Option")

    def member_menu(self) -> None:
        """Loop over the logged-in member's menu until logout or removal."""
        actions: dict[int, Callable[[], None]] = {
            1: self._update,
            3: self._send_money,
            4: self._cash_in,
            5: self._cash_out,
            6: self._pay_bill,
            7: self._check_balance,
            8: self._show_history,
        }
        while True:
            self._ask(MEMBER_MENU)
            option = self._input.integer()
            if option == 2:
                self._remove()
                return
            if option == LOGOUT_OPTION:
                self._say("Logout Successful")
                return
            action = actions.get(option) if option is not None else None
            if action is None:
                self._say("10 Invalid Option")
                continue
            try:
                action()
            except MyCashError as error:
                self._say(str(error))

    def _register(self) -> None:
        self._ask("Enter Mobile No. (11-digit): ")
        mobile = self._input.word()
        if self.app.member_exists(mobile):
            self._say("1. Member already exists")
            return
        self._ask("Enter Name: ")
        name = self._input.line()
        self._ask("Enter pin (5-digit): ")
        pin = self._input.word()
        self._ask("Reconfirm pin: ")
        confirm_pin = self._input.word()
        try:
            self.app.register(mobile, name, pin, confirm_pin, self._prompt_otp)
        except PinMismatchError:
            self._say("7. Pins must be same")
        except OtpMismatchError:
            self._say("5. OTP does NOT matched")
        else:
            self._say("Registration is Successful")

    def _login(self) -> bool:
        self._ask("Enter Mobile No. (11-digit): ")
        mobile = self._input.word()
        self.app.mobile = mobile
        if not self.app.member_exists(mobile):
            self._say("2. Member NOT exists")
            return False
        self._ask("Enter pin: ")
        pin = self._input.word()
        try:
            self.app.login(mobile, pin)
        except InvalidLoginError:
            self._say("8. Invalid login")
            return False
        except MyCashError as error:
            self._say(str(error))
            return False
        self._say("Login is Successful")
        return True

    def _update(self) -> None:
        try:
            self.app.ensure_session()
        except SessionExpiredError:
            self._say(SESSION_EXPIRED)
            return
        member = self.app.current_member()
        self._say(f"Old Name: {member.name}")
        self._ask("New Name (enter to ignore): ")
        new_name = self._input.line()
        self._say(f"Old pin: {member.pin}")
        self._ask("New pin (enter to ignore): ")
        new_pin = self._input.word()
        confirm_pin = ""
        if new_pin:
            self._ask("Confirm New pin: ")
            confirm_pin = self._input.word()
        try:
            self.app.update(new_name, new_pin, confirm_pin, self._prompt_otp)
        except PinMismatchError:
            self._say("7. Pins must be same")
        except OtpMismatchError:
            self._say("5. OTP does NOT matched")
        else:
            self._say("Update is Successful")

    def _remove(self) -> None:
        try:
            self.app.remove(self._prompt_otp)
        except OtpMismatchError:
            self._say("5. OTP does NOT matched")
        else:
            self._say("Remove is Successful")

    def _send_money(self) -> None:
        try:
            self.app.ensure_session()
        except SessionExpiredError:
            self._say(SESSION_EXPIRED)
            return
        self._ask("Enter Destination no. (11-digit): ")
        destination = self._input.word()
        if not self.app.member_exists(destination):
            self._say("9 Destination Mobile no. is invalid")
            return
        self._ask("Enter Amount: ")
        amount = self._input.number()
        if self.app.current_member().amount < amount:
            self._say("3 Insufficient Fund")
            return
        self._say(f"Sending {format_amount(amount)} to {destination}")
        if not self._confirmed("Are you sure(Y/N)? "):
            self._say("Send Money Cancelled")
            return
        try:
            self.app.send_money(destination, amount, self._prompt_otp)
        except OtpMismatchError:
            self._say("5. OTP does NOT matched")
        else:
            self._say("Send Money is Successful")

    def _cash_in(self) -> None:
        self._ask("Enter Amount: ")
        amount = self._input.number()
        self.app.current_member()
        self._say(f"Cash-in {format_amount(amount)}")
        if self._confirmed("11. Are you sure(Y/N)? "):
            self.app.cash_in(amount)
            self._say("Cash-in is Successful")
        else:
            self._say("Cash-in Cancelled")

    def _cash_out(self) -> None:
        self._ask("Enter Amount: ")
        amount = self._input.number()
        member = self.app.current_member()

        def verify(otp: int) -> int:
            # The OTP comes first, then the fund check, then the confirmation.
            entered = self._prompt_otp(otp)
            if entered != otp:
                return entered
            if member.amount < amount:
                self._say("3 Insufficient Fund")
                raise _Cancelled
            self._say(f"Cash-out {format_amount(amount)}")
            if not self._confirmed("11. Are you sure(Y/N)? "):
                self._say("Cash-out Cancelled")
                raise _Cancelled
            return entered

        try:
            self.app.cash_out(amount, verify)
        except _Cancelled:
            return
        except OtpMismatchError:
            self._say("5 OTP does NOT matched")
        except InsufficientFundError:
            self._say("3 Insufficient Fund")
        else:
            self._say("Cash-out is Successful")

    def _pay_bill(self) -> None:
        self._ask("Enter Bill Type (Gas/Electricity/Water/Internet-1/2/3/4): ")
        bill_type = self._input.integer()
        label = bill_label(bill_type) if bill_type is not None else "Invalid"
        self._ask(f"Your {label} Bill: ")
        amount = self._input.number()
        if not self._confirmed("11. Want to pay(Y/N)? "):
            self._say("Bill Payment Cancelled")
            return
        try:
            self.app.pay_bill(amount, self._prompt_otp)
        except OtpMismatchError:
            self._say("5 OTP does NOT matched")
        except InsufficientFundError:
            self._say("3 Insufficient Fund")
        else:
            self._say("Bill Payment is Successful")

    def _check_balance(self) -> None:
        self._say(f"Balance: {format_amount(self.app.balance())}")

    def _show_history(self) -> None:
        self._write(self.app.history.render())


def main(argv: list[str] | None = None) -> int:
    """Load the member file, run the menus, and save the members on exit."""
    parser = argparse.ArgumentParser(prog="mycash", description="MyCash accounts")
    parser.add_argument(
        "--data",
        default=None,
        help="member data file (default: myCashData.txt in the working directory)",
    )
    args = parser.parse_args(argv)
    path = args.data if args.data is not None else default_data_path()
    app = MyCash(load_members(path))
    try:
        Console(app, sys.stdin, sys.stdout.write).run()
    finally:
        save_members(path, app.members)
    return 0