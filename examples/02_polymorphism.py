"""
Example 02: Polymorphic Documents

This example demonstrates discriminator maps: documents stored under a
common base class are rebuilt as their concrete subclasses.
"""

from typing import Annotated

from doc_mapper import Document, Persist, discriminator, from_document, register, to_document


@discriminator("type", {"card": "CardPayment", "transfer": "TransferPayment"})
class Payment(Document):
    """Base payment; the 'type' key picks the concrete class"""
    type: Annotated[str, Persist()] = ""
    amount: Annotated[int, Persist()] = 0


@discriminator("network", {"visa": "visa-card", "amex": "amex-card"})
class CardPayment(Payment):
    """Card payments are narrowed again by network"""
    network: Annotated[str, Persist()] = ""
    last4: Annotated[str, Persist()] = ""


@register(name="visa-card")
class VisaPayment(CardPayment):
    pass


@register(name="amex-card")
class AmexPayment(CardPayment):
    pass


class TransferPayment(Payment):
    iban: Annotated[str, Persist()] = ""


class Invoice(Document):
    number: Annotated[str, Persist()] = ""
    payments: Annotated[list[Payment], Persist()]

    def __init__(self):
        self.payments = []


def main():
    stored = {
        "number": "2024-0042",
        "payments": [
            {"type": "card", "network": "visa", "amount": 1500, "last4": "4242"},
            {"type": "transfer", "amount": 800, "iban": "ES91 2100 0418 4502 0005 1332"},
            {"type": "card", "network": "amex", "amount": 300, "last4": "0005"},
        ],
    }

    print("=== Polymorphic Documents ===\n")

    invoice = from_document(stored, Invoice)
    print(f"Invoice {invoice.number}:")
    for payment in invoice.payments:
        print(f"   {type(payment).__name__}: {payment.amount}")

    print("\nRound trip equal:", to_document(invoice) == stored)


if __name__ == "__main__":
    main()
