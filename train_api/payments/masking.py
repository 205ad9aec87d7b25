from typing import Any, Dict

from train_api.payments.schemas import BankAccountSource, CardSource, PaymentSource

CARD_MASK = "*" * 12
ACCOUNT_MASK = "*" * 9


def mask_number(number: str, mask: str) -> str:
    """Keep only the last four digits of an instrument number"""
    return f"{mask}{number[-4:]}"


def mask_payment_source(source: PaymentSource) -> Dict[str, Any]:
    """Reduce a payment instrument to the fields safe to store and echo back"""
    if isinstance(source, CardSource):
        return {
            "object": "card",
            "name": source.name,
            "number": mask_number(source.number, CARD_MASK),
            "exp_month": source.exp_month,
            "exp_year": source.exp_year,
            "address_country": source.address_country,
            "address_post_code": source.address_post_code,
        }

    if isinstance(source, BankAccountSource):
        return {
            "object": "bank_account",
            "name": source.name,
            "account_type": source.account_type,
            "number": mask_number(source.number, ACCOUNT_MASK),
            "sort_code": source.sort_code,
            "bank_name": source.bank_name,
            "country": source.country,
        }

    raise TypeError(f"Unsupported payment source: {type(source).__name__}")
