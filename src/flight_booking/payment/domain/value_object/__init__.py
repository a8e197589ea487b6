from .payment_id import PaymentId as PaymentId
from .transaction_id import TransactionId as TransactionId
