"""Payment methods accepted at checkout and their fees."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ghalinino.domain.model.value_objects import Language, Money


class PaymentMethod(Enum):
    COD = "cod"
    BANK_TRANSFER = "bank_transfer"
    FLOUCI = "flouci"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


COD_FEE = Money(Decimal("2.000"))


def cod_fee(method: PaymentMethod) -> Money:
    """Flat surcharge for cash on delivery, zero for every other method."""
    if method is PaymentMethod.COD:
        return COD_FEE
    return Money.zero()


def initial_payment_status(method: PaymentMethod) -> PaymentStatus:
    """Payment status of a freshly created order.

    Always PENDING: cash on delivery is collected later, bank transfers are
    confirmed by an admin and Flouci payments by the gateway webhook.
    """
    return PaymentStatus.PENDING


@dataclass(frozen=True)
class PaymentMethodInfo:
    method: PaymentMethod
    name: dict[Language, str]
    description: dict[Language, str]
    additional_fee: Money


PAYMENT_METHODS: dict[PaymentMethod, PaymentMethodInfo] = {
    PaymentMethod.COD: PaymentMethodInfo(
        method=PaymentMethod.COD,
        name={
            Language.AR: "الدفع عند الاستلام",
            Language.FR: "Paiement à la livraison",
        },
        description={
            Language.AR: "ادفع نقداً عند استلام طلبك (+2 د.ت رسوم إضافية)",
            Language.FR: "Payez en espèces à la réception (+2 TND frais)",
        },
        additional_fee=COD_FEE,
    ),
    PaymentMethod.BANK_TRANSFER: PaymentMethodInfo(
        method=PaymentMethod.BANK_TRANSFER,
        name={
            Language.AR: "التحويل البنكي",
            Language.FR: "Virement bancaire",
        },
        description={
            Language.AR: "حول المبلغ إلى حسابنا البنكي قبل الشحن",
            Language.FR: "Transférez le montant sur notre compte avant expédition",
        },
        additional_fee=Money.zero(),
    ),
    PaymentMethod.FLOUCI: PaymentMethodInfo(
        method=PaymentMethod.FLOUCI,
        name={
            Language.AR: "الدفع الإلكتروني (فلوسي)",
            Language.FR: "Paiement en ligne (Flouci)",
        },
        description={
            Language.AR: "ادفع بالبطاقة أو محفظة فلوسي أو الدينار الإلكتروني",
            Language.FR: "Payez par carte, portefeuille Flouci ou E-Dinar",
        },
        additional_fee=Money.zero(),
    ),
}
