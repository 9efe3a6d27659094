# mycash

A small interactive mobile-wallet console. Members register with a mobile
number, a name and a PIN. Once logged in, they can send money to each other,
cash in, cash out, pay utility bills, check their balance and view the
transactions of the current run.

Sensitive actions are confirmed with a four-digit one-time code (OTP). The
console prints the code and asks you to type it back. A login session lasts
two minutes (120 seconds). After that, "Update Me" and "Send Money" ask you to
log in again.

## Installing

```
pip install .
```

## Running

```
mycash
mycash --data path/to/members.txt
```

Without `--data`, members are read from `myCashData.txt` in the current
directory. They are read when the program starts and written back when it
exits, including when input ends. A missing file starts with no members.

The first menu offers **Login**, **Register** and **Exit**. Once you are
logged in, the member menu offers:

1. Update Me
2. Remove Me (this also logs you out)
3. Send Money
4. Cash-in
5. Cash-out
6. Pay Bill (1 Gas, 2 Electricity, 3 Water, 4 Internet)
7. Check Balance
8. History
9. Logout

## Data file

Each line holds one member as `mobile name amount pin`, separated by spaces.
The file is read as a stream of whitespace-separated tokens in groups of four.
Reading stops at the first incomplete record or at an amount that is not a
number.

## Using it from Python

The wallet logic lives in `mycash.service.MyCash`. Each operation either
succeeds or raises a subclass of `MyCashError`. Examples are
`MemberExistsError`, `MemberNotFoundError`, `PinMismatchError`,
`OtpMismatchError`, `InvalidLoginError`, `SessionExpiredError`,
`InsufficientFundError` and `InvalidDestinationError`.

Operations that need an OTP take a `verify_otp` callable. It is passed the
issued code and must return the code the user entered.

```python
import random
import time

from mycash.service import MyCash, InsufficientFundError

bank = MyCash([], clock=time.monotonic, rng=random.Random())
echo = lambda otp: otp               # enters the issued code correctly
bank.register("1001", "Alice", "11111", "11111", echo)
bank.register("1002", "Bob", "22222", "22222", echo)

bank.login("1001", "11111")
bank.cash_in(500)
bank.send_money("1002", 200, echo)
print(bank.balance())                # 300.0

try:
    bank.cash_out(1000, echo)
except InsufficientFundError:
    print("Insufficient Fund")

print(bank.history.render())
```

Other useful pieces:

- `mycash.models`: the `Member`, `Transaction` and `History` classes, and
  `format_amount`.
- `mycash.storage`: `load_members`, `save_members` and `default_data_path`.
- `mycash.cli`: `Console`, which runs the menus against any text stream, and
  `main`.

## What it does not do

- OTPs are only printed on the console. They are never sent to a phone.
- Transaction history is kept in memory only. It is not saved to the data
  file.
- PINs are stored in the data file as plain text.
- Names are saved as they were typed. A name that contains spaces is not read
  back correctly on the next start.