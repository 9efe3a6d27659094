"""Account operations: registration, login, transfers, cash and bills."""

from __future__ import annotations

import random
import time
from enum import IntEnum
from typing import Callable, Iterable

from mycash.models import History, Member, Transaction

SESSION_TIMEOUT_SECONDS = 120

OtpPrompt = Callable[[int], int]


class MyCashError(Exception):
    """Base class for failed account operations."""


class MemberExistsError(MyCashError):
    """A member with this mobile number is already registered."""


class MemberNotFoundError(MyCashError, LookupError):
    """No member has this mobile number."""


class PinMismatchError(MyCashError):
    """The pin and its confirmation differ."""


class OtpMismatchError(MyCashError):
    """The entered OTP differs from the issued one."""


class InvalidLoginError(MyCashError):
    """The pin does not match the member's pin."""


class SessionExpiredError(MyCashError):
    """The login session is older than the timeout."""


class InsufficientFundError(MyCashError):
    """The balance is lower than the requested amount."""


class InvalidDestinationError(MyCashError):
    """The destination mobile number is not registered."""


class BillType(IntEnum):
    GAS = 1
    ELECTRICITY = 2
    WATER = 3
    INTERNET = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


def bill_label(bill_type: int) -> str:
    """Return the display name of a bill type, or 'Invalid' for unknown codes."""
    try:
        return BillType(bill_type).label
    except ValueError:
        return "Invalid"


def _trim(text: str) -> str:
    return text.strip(" \t")


class MyCash:
    """The account book with one logged-in member at a time.

    Operations that need an OTP take ``verify_otp``: a callable given the
    issued OTP and returning the code the user entered.
    """

    def __init__(
        self,
        members: Iterable[Member] | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.members: list[Member] = list(members or [])
        self.history = History()
        self.mobile: str | None = None
        self._clock = clock or time.time
        self._rng = rng or random.Random()
        self._login_time: float | None = None

    def generate_otp(self) -> int:
        """Issue a four-digit one-time code."""
        return self._rng.randint(1000, 9999)

    def _check_otp(self, verify_otp: OtpPrompt) -> None:
        otp = self.generate_otp()
        if verify_otp(otp) != otp:
            raise OtpMismatchError("OTP does NOT matched")

    def _new_transaction_id(self) -> int:
        return self._rng.randrange(1000)

    def member_exists(self, mobile: str) -> bool:
        """Whether a member's mobile matches, ignoring surrounding blanks."""
        wanted = _trim(mobile)
        return any(_trim(m.mobile) == wanted for m in self.members)

    def find_member(self, mobile: str) -> Member:
        """Return the member with exactly this mobile number."""
        for member in self.members:
            if member.mobile == mobile:
                return member
        raise MemberNotFoundError("Member not found")

    def register(
        self,
        mobile: str,
        name: str,
        pin: str,
        confirm_pin: str,
        verify_otp: OtpPrompt,
    ) -> Member:
        """Add a new member with a zero balance."""
        if self.member_exists(mobile):
            raise MemberExistsError("Member already exists")
        if pin != confirm_pin:
            raise PinMismatchError("Pins must be same")
        self._check_otp(verify_otp)
        member = Member(mobile, name, 0.0, pin)
        self.members.append(member)
        return member

    def login(self, mobile: str, pin: str) -> Member:
        """Log a member in and start the session clock."""
        self.mobile = mobile
        if not self.member_exists(mobile):
            raise MemberNotFoundError("Member NOT exists")
        member = self.find_member(mobile)
        if member.pin != pin:
            raise InvalidLoginError("Invalid login")
        self._login_time = self._clock()
        return member

    def ensure_session(self) -> None:
        """Raise if no session is active or it has timed out."""
        if (
            self._login_time is None
            or self._clock() - self._login_time >= SESSION_TIMEOUT_SECONDS
        ):
            raise SessionExpiredError("OTP time has expired. Please log in again.")

    def current_member(self) -> Member:
        """Return the logged-in member."""
        if self.mobile is None:
            raise MemberNotFoundError("Member not found")
        return self.find_member(self.mobile)

    def update(
        self,
        name: str,
        new_pin: str,
        confirm_pin: str,
        verify_otp: OtpPrompt,
    ) -> Member:
        """Change the name and/or pin; empty values leave a field unchanged.

        The name is applied before the pin is checked, as the menu does.
        """
        self.ensure_session()
        member = self.current_member()
        if name:
            member.name = name
        if new_pin:
            if new_pin != confirm_pin:
                raise PinMismatchError("Pins must be same")
            self._check_otp(verify_otp)
            member.pin = new_pin
        return member

    def remove(self, verify_otp: OtpPrompt) -> None:
        """Delete the logged-in member's account."""
        self._check_otp(verify_otp)
        self.members = [m for m in self.members if m.mobile != self.mobile]

    def send_money(
        self, destination: str, amount: float, verify_otp: OtpPrompt
    ) -> Transaction:
        """Move money from the logged-in member to another member."""
        self.ensure_session()
        if not self.member_exists(destination):
            raise InvalidDestinationError("Destination Mobile no. is invalid")
        sender = self.current_member()
        receiver = self.find_member(destination)
        if sender.amount < amount:
            raise InsufficientFundError("Insufficient Fund")
        self._check_otp(verify_otp)
        sender.amount -= amount
        receiver.amount += amount
        return self.history.add_transaction(
            self._new_transaction_id(), "Send Money", amount, sender.amount
        )

    def cash_in(self, amount: float) -> Transaction:
        """Add money to the logged-in member's balance."""
        member = self.current_member()
        member.amount += amount
        return self.history.add_transaction(
            self._new_transaction_id(), "Cash-in", amount, member.amount
        )

    def cash_out(self, amount: float, verify_otp: OtpPrompt) -> Transaction:
        """Withdraw money after OTP confirmation."""
        member = self.current_member()
        self._check_otp(verify_otp)
        if member.amount < amount:
            raise InsufficientFundError("Insufficient Fund")
        member.amount -= amount
        return self.history.add_transaction(
            self._new_transaction_id(), "Cash-out", amount, member.amount
        )

    def pay_bill(self, amount: float, verify_otp: OtpPrompt) -> Transaction:
        """Pay a bill from the logged-in member's balance."""
        self._check_otp(verify_otp)
        member = self.current_member()
        if member.amount < amount:
            raise InsufficientFundError("Insufficient Fund")
        member.amount -= amount
        return self.history.add_transaction(
            self._new_transaction_id(), "Pay Bill", amount, member.amount
        )

    def balance(self) -> float:
        """Return the logged-in member's balance."""
        return self.current_member().amount