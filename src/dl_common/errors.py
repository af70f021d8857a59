"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Access
  2xxx: Balance/Amount
  3xxx: Reserve
  4xxx: Dividend
  5xxx: Staking
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/Access ---

class UnauthorizedError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(1001, f"Caller is not authorized: {caller}", 403)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Invalid or expired token", 401)


class ReservedAddressError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(1003, f"Address is reserved for the ledger: {address}", 403)


# --- 2xxx: Balance/Amount ---

class InvalidAmountError(AppError):
    def __init__(self, message: str = "Amount must be greater than 0") -> None:
        super().__init__(2001, message, 422)


class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2002,
            f"Insufficient balance: required {required} units, available {available} units",
            422,
        )


class InvalidRecipientError(AppError):
    def __init__(self, recipient: str) -> None:
        super().__init__(2003, f"Invalid recipient: {recipient}", 422)


# --- 3xxx: Reserve ---

class InsufficientReserveError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            3001,
            f"Insufficient reserve: required {required}, held {available}",
            422,
        )


class AmountTooSmallError(AppError):
    def __init__(self, units: int) -> None:
        super().__init__(3002, f"Burn amount too small to redeem any value: {units}", 422)


# --- 4xxx: Dividend ---

class NoSupplyError(AppError):
    def __init__(self) -> None:
        super().__init__(4001, "No supply to distribute dividends to", 422)


class NothingToWithdrawError(AppError):
    def __init__(self) -> None:
        super().__init__(4002, "No dividends to withdraw", 422)


# --- 5xxx: Staking ---

class NothingStakedError(AppError):
    def __init__(self) -> None:
        super().__init__(5001, "No tokens staked", 422)


class InsufficientPoolError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            5002,
            f"Insufficient reward pool: required {required}, available {available}",
            422,
        )


# --- 9xxx: System ---

class PaymentFailedError(AppError):
    def __init__(self, recipient: str, amount: int) -> None:
        super().__init__(9001, f"Payment of {amount} to {recipient} failed", 502)


class ReentrancyError(AppError):
    def __init__(self, operation: str) -> None:
        super().__init__(9002, f"Reentrant call rejected: {operation}", 409)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9003, detail, 500)
