"""Errors raised by the account ledger."""


class LedgerError(Exception):
    """Base class for every ledger failure."""


class InsufficientCreditLimitError(LedgerError):
    pass


class BackdatedTransactionError(LedgerError):
    pass


class InvalidAmountError(LedgerError, ValueError):
    pass


class OverpaymentError(LedgerError):
    """Payment larger than the outstanding balance.

    ``max_payment`` holds the balance the payment was checked against.
    """

    def __init__(self, max_payment: float):
        self.max_payment = max_payment
        super().__init__(f"Maximum payment allowed is {max_payment:.2f}")
