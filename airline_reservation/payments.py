"""Payment methods offered at checkout.

Both strategies only simulate the charge and always succeed.
"""
from abc import ABC, abstractmethod

from loguru import logger

from airline_reservation.exceptions import ValidationError


class PaymentStrategy(ABC):

    @abstractmethod
    def process_payment(self, amount: float) -> bool:
        """Charge `amount`; returns True when the payment went through."""

    @abstractmethod
    def payment_details(self) -> str:
        """Description stored with the reservation."""


class GCashPayment(PaymentStrategy):

    def __init__(self, number: str):
        number = number.strip()
        if not number:
            raise ValidationError("GCash number cannot be empty")
        self.number = number

    def process_payment(self, amount: float) -> bool:
        logger.info(f"Processing GCash payment of ${amount:.2f} using number {self.number}")
        return True

    def payment_details(self) -> str:
        return f"GCash: {self.number}"


class CreditCardPayment(PaymentStrategy):

    def __init__(self, card_number: str, expiry_date: str, cvv: str):
        card_number = card_number.replace(' ', '').replace('-', '')
        if len(card_number) < 4 or not card_number.isdigit():
            raise ValidationError("Card number must contain at least 4 digits")
        self.card_number = card_number
        self.expiry_date = expiry_date.strip()
        self.cvv = cvv.strip()

    @property
    def last_four(self) -> str:
        return self.card_number[-4:]

    def process_payment(self, amount: float) -> bool:
        logger.info(f"Processing Credit Card payment of ${amount:.2f} using card ending with {self.last_four}")
        return True

    def payment_details(self) -> str:
        return f"Credit Card: XXXX-XXXX-XXXX-{self.last_four}"
